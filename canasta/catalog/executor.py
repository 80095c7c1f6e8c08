import asyncio
import logging
import math
from dataclasses import dataclass
from typing import Any, List

from canasta.catalog.compositor import EmptyResult
from canasta.catalog.filters import SortSpec

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ListingPage:
    items: List[Any]
    current_page: int
    total_pages: int
    total_products: int
    has_next_page: bool
    has_prev_page: bool

    @classmethod
    def empty(cls, page: int) -> "ListingPage":
        return cls(
            items=[],
            current_page=page,
            total_pages=0,
            total_products=0,
            has_next_page=False,
            has_prev_page=False,
        )


async def execute(store, predicate, sort: SortSpec, page: int, limit: int) -> ListingPage:
    if isinstance(predicate, EmptyResult):
        return ListingPage.empty(page)

    skip = (page - 1) * limit
    items, total = await asyncio.gather(
        store.query_products(predicate, sort, skip, limit),
        store.count_products(predicate),
    )
    items = list(items)
    logger.debug("found %d products of %d total", len(items), total)

    return ListingPage(
        items=items,
        current_page=page,
        total_pages=math.ceil(total / limit),
        total_products=total,
        has_next_page=skip + len(items) < total,
        has_prev_page=page > 1,
    )
