import asyncio
import logging

from canasta.catalog.compositor import EmptyResult, compose
from canasta.catalog.errors import StorageTimeout
from canasta.catalog.executor import ListingPage, execute
from canasta.catalog.filters import FilterSpec
from canasta.catalog.resolution import (
    expand_location,
    resolve_category,
    resolve_location,
    resolve_producer,
)

logger = logging.getLogger(__name__)


async def _list_products(store, spec: FilterSpec) -> ListingPage:
    category, producer, location = await asyncio.gather(
        resolve_category(store, spec.category),
        resolve_producer(store, spec.producer),
        resolve_location(store, spec.location),
    )
    producers = await expand_location(store, location, producer)

    predicate = compose(spec, category, producers)
    if isinstance(predicate, EmptyResult):
        logger.info("listing short-circuited: %s", predicate.reason)
    else:
        logger.debug("listing predicate: %s", predicate)

    return await execute(store, predicate, spec.sort, spec.page, spec.limit)


async def list_products(store, spec: FilterSpec, timeout=None) -> ListingPage:
    """Run the whole listing (lookups, expansion, count and fetch) under one timeout.

    Raises StorageTimeout when the deadline passes and StorageUnavailable
    when a read fails. Neither is retried here.
    """
    logger.debug("listing products with %s", spec)
    try:
        return await asyncio.wait_for(_list_products(store, spec), timeout)
    except asyncio.TimeoutError:
        logger.warning("product listing exceeded %ss", timeout)
        raise StorageTimeout(f"Product listing timed out after {timeout}s") from None
