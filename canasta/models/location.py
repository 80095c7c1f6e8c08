from sqlalchemy import Column, String, Boolean, Float, Index
from canasta.models.base import BaseModel

class Location(BaseModel):
    __tablename__ = "locations"
    
    city = Column(String(100), nullable=False, index=True)
    department = Column(String(100), nullable=False, index=True)
    country = Column(String(100), default="Colombia", nullable=False)
    latitude = Column(Float)
    longitude = Column(Float)
    is_active = Column(Boolean, default=True, nullable=False)

    __table_args__ = (
        Index("ix_locations_coordinates", "latitude", "longitude"),
    )
