from sqlalchemy import Column, String, Boolean, Float, Integer, ForeignKey, JSON
from sqlalchemy.orm import relationship
from canasta.models.base import BaseModel

FARMING_METHODS = ("orgánico", "tradicional", "hidropónico", "agroecológico")

class Producer(BaseModel):
    __tablename__ = "producers"
    
    name = Column(String(100), nullable=False, index=True)
    email = Column(String(100))
    phone = Column(String(20), nullable=False)
    location_id = Column(Integer, ForeignKey("locations.id"), nullable=False, index=True)
    description = Column(String(500))
    farm_size = Column(Float)
    # subset of FARMING_METHODS
    farming_methods = Column(JSON, default=list, nullable=False)
    avatar = Column(String(255), default="default-producer.jpg")
    is_active = Column(Boolean, default=True, nullable=False)
    
    location = relationship("Location", lazy="selectin")
