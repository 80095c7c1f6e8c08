from sqlalchemy import Column, String, Integer, Enum, Numeric, Float, Boolean, ForeignKey, Index, DateTime, JSON, Text, event
from sqlalchemy.orm import relationship
from canasta.catalog.text import search_document
from canasta.db.session import Base
from canasta.models.base import BaseModel

PRODUCT_UNITS = ("kg", "g", "lb", "unidad", "litro", "ml", "docena", "paquete")

class Product(BaseModel):
    __tablename__ = "products"
    
    name = Column(String(100), nullable=False)
    description = Column(String(1000), nullable=False)
    price = Column(Numeric(10, 2, asdecimal=False), nullable=False)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False)
    producer_id = Column(Integer, ForeignKey("producers.id"), nullable=False)
    stock = Column(Integer, nullable=False, default=0)
    unit = Column(Enum(*PRODUCT_UNITS, name="product_units"), nullable=False)
    # calories, protein, carbs, fat, fiber
    nutritional_info = Column(JSON)
    harvest_date = Column(DateTime)
    expiry_date = Column(DateTime)
    is_organic = Column(Boolean, default=False, nullable=False)
    is_available = Column(Boolean, default=True, nullable=False)
    is_featured = Column(Boolean, default=False, nullable=False)
    rating_average = Column(Float, default=0, nullable=False)
    rating_count = Column(Integer, default=0, nullable=False)
    # accent-free, case-folded name, description and tags
    search_text = Column(Text, nullable=False, default="")
    
    category = relationship("Category", lazy="selectin")
    producer = relationship("Producer", lazy="selectin")
    tag_rows = relationship(
        "ProductTag",
        lazy="selectin",
        cascade="all, delete-orphan",
        order_by="ProductTag.id",
    )
    images = relationship(
        "ProductImage",
        lazy="selectin",
        cascade="all, delete-orphan",
        order_by="ProductImage.position",
    )

    __table_args__ = (
        Index("ix_products_category_available", "category_id", "is_available"),
        Index("ix_products_producer_available", "producer_id", "is_available"),
        Index("ix_products_price", "price"),
        Index("ix_products_rating", "rating_average"),
    )

    @property
    def tags(self):
        return [tag.name for tag in self.tag_rows]

    @property
    def rating(self):
        return {"average": self.rating_average or 0, "count": self.rating_count or 0}

class ProductTag(Base):
    __tablename__ = "product_tags"
    
    id = Column(Integer, primary_key=True, autoincrement=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(50), nullable=False, index=True)

class ProductImage(Base):
    __tablename__ = "product_images"
    
    id = Column(Integer, primary_key=True, autoincrement=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True)
    url = Column(String(255), nullable=False)
    alt = Column(String(255))
    is_primary = Column(Boolean, default=False, nullable=False)
    position = Column(Integer, default=0, nullable=False)

@event.listens_for(Product, "before_insert")
@event.listens_for(Product, "before_update")
def _refresh_search_text(mapper, connection, target):
    target.search_text = search_document(target.name, target.description, *target.tags)
