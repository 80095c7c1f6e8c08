from datetime import datetime
from typing import List, Optional
from canasta.schemas.base import BaseSchema, TimestampSchema
from canasta.schemas.category import Category
from canasta.schemas.pagination import Pagination
from canasta.schemas.producer import Producer

class ProductImage(BaseSchema):
    url: str
    alt: Optional[str] = None
    is_primary: bool = False

class Rating(BaseSchema):
    average: float = 0
    count: int = 0

class NutritionalInfo(BaseSchema):
    calories: Optional[float] = None
    protein: Optional[float] = None
    carbs: Optional[float] = None
    fat: Optional[float] = None
    fiber: Optional[float] = None

class Product(TimestampSchema):
    id: int
    name: str
    description: str
    price: float
    category_id: int
    producer_id: int
    category: Optional[Category] = None
    producer: Optional[Producer] = None
    images: List[ProductImage] = []
    stock: int
    unit: str
    nutritional_info: Optional[NutritionalInfo] = None
    harvest_date: Optional[datetime] = None
    expiry_date: Optional[datetime] = None
    is_organic: bool
    is_featured: bool
    is_available: bool
    rating: Rating = Rating()
    tags: List[str] = []

class ProductPagination(Pagination):
    total_products: int
    has_next_page: bool
    has_prev_page: bool

class ProductListResponse(BaseSchema):
    products: List[Product]
    pagination: ProductPagination
