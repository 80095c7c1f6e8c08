from canasta.schemas.base import BaseSchema

class Pagination(BaseSchema):
    current_page: int
    total_pages: int
