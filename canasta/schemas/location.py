from typing import Optional
from canasta.schemas.base import TimestampSchema

class Location(TimestampSchema):
    id: int
    city: str
    department: str
    country: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    is_active: bool
