"""
Turn human-readable filter values into identifiers.

Every step returns one of three variants:

- ``UNCONSTRAINED``: the filter was not supplied, match everything.
- ``Resolved(value)``: the filter resolved to an id (or a tuple of ids).
- ``NotFound(reason)``: the filter was supplied but matches nothing, so the
  listing is an empty page.
"""
import logging
from dataclasses import dataclass
from typing import Any, Tuple, Union

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Unconstrained:
    pass


@dataclass(frozen=True)
class Resolved:
    value: Any


@dataclass(frozen=True)
class NotFound:
    reason: str


UNCONSTRAINED = Unconstrained()

Resolution = Union[Unconstrained, Resolved, NotFound]


def split_location(text: str) -> Tuple[str, ...]:
    """Split "City, Department" into trimmed parts."""
    return tuple(part.strip() for part in text.split(","))


async def resolve_category(store, name) -> Resolution:
    if name is None:
        return UNCONSTRAINED
    category = await store.find_category_by_name(name)
    if category is None:
        return NotFound(f"category {name!r} not found")
    return Resolved(category.id)


async def resolve_producer(store, name) -> Resolution:
    if name is None:
        return UNCONSTRAINED
    producer = await store.find_producer_by_name(name)
    if producer is None:
        return NotFound(f"producer {name!r} not found")
    return Resolved(producer.id)


async def resolve_location(store, text) -> Resolution:
    if text is None:
        return UNCONSTRAINED
    parts = split_location(text)
    if len(parts) >= 2:
        location = await store.find_location_by_city_dept(parts[0], parts[1])
    else:
        # a bare token may name either a city or a department
        location = await store.find_location_by_token(parts[0])
    if location is None:
        return NotFound(f"location {text!r} not found")
    return Resolved(location.id)


async def expand_location(store, location: Resolution, producer: Resolution) -> Resolution:
    """
    Reconcile the producer filter with the producers found at a location.

    Returns the producer constraint: ``Resolved`` holds a tuple of producer
    ids. An explicit producer is never widened to the whole location.
    """
    if isinstance(location, NotFound):
        return location
    if isinstance(producer, NotFound):
        return producer
    if isinstance(location, Unconstrained):
        if isinstance(producer, Resolved):
            return Resolved((producer.value,))
        return UNCONSTRAINED

    producer_ids = tuple(await store.find_producers_by_location(location.value))
    logger.debug("location %s has %d producers", location.value, len(producer_ids))
    if not producer_ids:
        return NotFound(f"no producers at location {location.value}")

    if isinstance(producer, Resolved):
        if producer.value not in producer_ids:
            return NotFound(
                f"producer {producer.value} is not at location {location.value}"
            )
        return Resolved((producer.value,))
    return Resolved(producer_ids)
