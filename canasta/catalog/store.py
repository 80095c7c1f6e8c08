"""Read ports used by the product listing, and their SQLAlchemy implementation."""
import logging
from contextlib import asynccontextmanager
from typing import List, Optional, Protocol, Sequence

from sqlalchemy import func, or_, select
from sqlalchemy.exc import SQLAlchemyError

from canasta.catalog.compositor import ProductPredicate
from canasta.catalog.errors import StorageUnavailable
from canasta.catalog.filters import SortSpec
from canasta.models.category import Category
from canasta.models.location import Location
from canasta.models.producer import Producer
from canasta.models.product import Product

logger = logging.getLogger(__name__)

SORT_COLUMNS = {
    "createdAt": Product.created_at,
    "updatedAt": Product.updated_at,
    "name": Product.name,
    "price": Product.price,
    "stock": Product.stock,
    "rating": Product.rating_average,
}


class CatalogStore(Protocol):
    async def find_category_by_name(self, name: str) -> Optional[Category]: ...

    async def find_producer_by_name(self, name: str) -> Optional[Producer]: ...

    async def find_location_by_city_dept(self, city: str, department: str) -> Optional[Location]: ...

    async def find_location_by_token(self, token: str) -> Optional[Location]: ...

    async def find_producers_by_location(self, location_id: int) -> List[int]: ...

    async def query_products(
        self, predicate: ProductPredicate, sort: SortSpec, skip: int, limit: int
    ) -> Sequence[Product]: ...

    async def count_products(self, predicate: ProductPredicate) -> int: ...


def _like_pattern(term: str) -> str:
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def product_conditions(predicate: ProductPredicate) -> list:
    conditions = [Product.is_available == predicate.is_available]

    if predicate.category_id is not None:
        conditions.append(Product.category_id == predicate.category_id)

    if predicate.producer_ids is not None:
        if len(predicate.producer_ids) == 1:
            conditions.append(Product.producer_id == predicate.producer_ids[0])
        else:
            conditions.append(Product.producer_id.in_(predicate.producer_ids))

    if predicate.price_min is not None:
        conditions.append(Product.price >= predicate.price_min)
    if predicate.price_max is not None:
        conditions.append(Product.price <= predicate.price_max)

    if predicate.search_terms:
        # terms arrive folded, search_text is stored folded
        conditions.append(or_(*[
            Product.search_text.like(_like_pattern(term), escape="\\")
            for term in predicate.search_terms
        ]))

    if predicate.is_organic is not None:
        conditions.append(Product.is_organic == predicate.is_organic)
    if predicate.is_featured is not None:
        conditions.append(Product.is_featured == predicate.is_featured)

    return conditions


class SqlCatalogStore:
    """CatalogStore backed by SQLAlchemy.

    Each call opens its own session so independent lookups can run
    concurrently.
    """

    def __init__(self, session_factory):
        self._session_factory = session_factory

    @asynccontextmanager
    async def _session(self):
        try:
            async with self._session_factory() as session:
                yield session
        except SQLAlchemyError as e:
            logger.error("catalog storage read failed: %s", e)
            raise StorageUnavailable("Catalog storage is unavailable") from e

    async def _first(self, statement):
        async with self._session() as session:
            result = await session.execute(statement.limit(1))
            return result.scalars().first()

    async def find_category_by_name(self, name):
        return await self._first(select(Category).where(Category.name == name))

    async def find_producer_by_name(self, name):
        return await self._first(select(Producer).where(Producer.name == name))

    async def find_location_by_city_dept(self, city, department):
        return await self._first(
            select(Location).where(Location.city == city, Location.department == department)
        )

    async def find_location_by_token(self, token):
        return await self._first(
            select(Location).where(or_(Location.city == token, Location.department == token))
        )

    async def find_producers_by_location(self, location_id):
        async with self._session() as session:
            result = await session.execute(
                select(Producer.id).where(Producer.location_id == location_id)
            )
            return list(result.scalars().all())

    async def query_products(self, predicate, sort, skip, limit):
        column = SORT_COLUMNS[sort.field]
        statement = (
            select(Product)
            .where(*product_conditions(predicate))
            .order_by(column.desc() if sort.descending else column.asc())
            .offset(skip)
            .limit(limit)
        )
        async with self._session() as session:
            result = await session.execute(statement)
            return list(result.scalars().all())

    async def count_products(self, predicate):
        statement = select(func.count(Product.id)).where(*product_conditions(predicate))
        async with self._session() as session:
            result = await session.execute(statement)
            return result.scalar_one()
