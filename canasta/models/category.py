from sqlalchemy import Column, String, Boolean
from canasta.models.base import BaseModel

class Category(BaseModel):
    __tablename__ = "categories"
    
    name = Column(String(50), unique=True, index=True, nullable=False)
    description = Column(String(200))
    icon = Column(String(50), default="fas fa-tag")
    is_active = Column(Boolean, default=True, nullable=False)
