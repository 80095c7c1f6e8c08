from typing import List, Optional
from canasta.schemas.base import BaseSchema, TimestampSchema
from canasta.schemas.location import Location
from canasta.schemas.pagination import Pagination

class Producer(TimestampSchema):
    id: int
    name: str
    email: Optional[str] = None
    phone: str
    location_id: int
    location: Optional[Location] = None
    description: Optional[str] = None
    farm_size: Optional[float] = None
    farming_methods: List[str] = []
    avatar: Optional[str] = None
    is_active: bool

class ProducerPagination(Pagination):
    total_producers: int

class ProducerListResponse(BaseSchema):
    producers: List[Producer]
    pagination: ProducerPagination
