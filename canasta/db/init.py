from canasta.models.category import Category
from canasta.models.location import Location
from canasta.models.producer import Producer
from canasta.models.product import Product, ProductTag
from canasta.db.session import Base, get_engine


async def init_db():
    # Create all tables
    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
