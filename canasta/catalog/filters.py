"""
Boundary parsing for the product listing.

Query-string values arrive as strings. ``FilterSpec.from_query`` turns them
into one immutable, typed value; anything that cannot be parsed is treated as
if it had not been supplied at all.
"""
import math
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_PAGE_SIZE = 12
MAX_PAGE_SIZE = 100

SORT_FIELDS = ("createdAt", "updatedAt", "name", "price", "stock", "rating")
DEFAULT_SORT_FIELD = "createdAt"
DEFAULT_SORT_ORDER = "desc"

# largest OFFSET a 64-bit SQL integer can hold
MAX_SKIP = 2 ** 63 - 1

_TRUE = {"true", "1", "yes"}
_FALSE = {"false", "0", "no"}


@dataclass(frozen=True)
class SortSpec:
    field: str = DEFAULT_SORT_FIELD
    descending: bool = True


@dataclass(frozen=True)
class FilterSpec:
    category: Optional[str] = None
    producer: Optional[str] = None
    location: Optional[str] = None
    price_min: Optional[float] = None
    price_max: Optional[float] = None
    search: Optional[str] = None
    is_organic: Optional[bool] = None
    is_featured: Optional[bool] = None
    sort: SortSpec = SortSpec()
    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit

    @classmethod
    def from_query(
        cls,
        params: Mapping[str, Optional[str]],
        default_limit: int = DEFAULT_PAGE_SIZE,
        max_limit: int = MAX_PAGE_SIZE,
    ) -> "FilterSpec":
        """
        Build a FilterSpec from raw listing parameters keyed by their
        query-string names (``priceMin``, ``isOrganic``, ``sortBy`` ...).

        Unknown sort fields and orders fall back to newest first.
        """
        limit = _limit(params.get("limit"), default_limit, max_limit)
        return cls(
            category=_text(params.get("category")),
            producer=_text(params.get("producer")),
            location=_text(params.get("location")),
            price_min=_number(params.get("priceMin")),
            price_max=_number(params.get("priceMax")),
            search=_text(params.get("search")),
            is_organic=_flag(params.get("isOrganic")),
            is_featured=_flag(params.get("isFeatured")),
            sort=_sort(params.get("sortBy"), params.get("sortOrder")),
            page=_page(params.get("page"), limit),
            limit=limit,
        )


def _text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _number(value: Optional[str]) -> Optional[float]:
    value = _text(value)
    if value is None:
        return None
    try:
        number = float(value)
    except ValueError:
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def _flag(value: Optional[str]) -> Optional[bool]:
    value = _text(value)
    if value is None:
        return None
    value = value.lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    return None


def _integer(value: Optional[str]) -> Optional[int]:
    value = _text(value)
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def _page(value: Optional[str], limit: int) -> int:
    page = _integer(value)
    if page is None or page < 1:
        return 1
    return min(page, MAX_SKIP // limit + 1)


def _limit(value: Optional[str], default: int, maximum: int) -> int:
    limit = _integer(value)
    if limit is None or limit < 1:
        limit = default
    return min(limit, maximum)


def _sort(field: Optional[str], order: Optional[str]) -> SortSpec:
    field = _text(field)
    order = (_text(order) or "").lower()
    if field not in SORT_FIELDS:
        field = DEFAULT_SORT_FIELD
    if order not in ("asc", "desc"):
        order = DEFAULT_SORT_ORDER
    return SortSpec(field=field, descending=order == "desc")
