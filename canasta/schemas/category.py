from typing import Optional
from canasta.schemas.base import TimestampSchema

class Category(TimestampSchema):
    id: int
    name: str
    description: Optional[str] = None
    icon: Optional[str] = None
    is_active: bool
