from dataclasses import dataclass
from typing import Optional, Tuple

from canasta.catalog.filters import FilterSpec
from canasta.catalog.resolution import NotFound, Resolution, Resolved
from canasta.catalog.text import fold


@dataclass(frozen=True)
class ProductPredicate:
    """ANDed conditions over products. ``None`` means unconstrained."""
    is_available: bool = True
    category_id: Optional[int] = None
    producer_ids: Optional[Tuple[int, ...]] = None
    price_min: Optional[float] = None
    price_max: Optional[float] = None
    search_terms: Tuple[str, ...] = ()
    is_organic: Optional[bool] = None
    is_featured: Optional[bool] = None


class EmptyResult:
    """Instruction to return an empty page without touching storage."""

    def __init__(self, reason: str):
        self.reason = reason

    def __repr__(self):
        return f"EmptyResult({self.reason!r})"


def compose(spec: FilterSpec, category: Resolution, producers: Resolution):
    """Merge resolved constraints and the plain filters into one predicate.

    ``producers`` is the output of ``expand_location``. Any ``NotFound``
    yields an ``EmptyResult`` instead of a predicate.
    """
    for step in (category, producers):
        if isinstance(step, NotFound):
            return EmptyResult(step.reason)

    return ProductPredicate(
        category_id=category.value if isinstance(category, Resolved) else None,
        producer_ids=tuple(producers.value) if isinstance(producers, Resolved) else None,
        price_min=spec.price_min,
        price_max=spec.price_max,
        search_terms=tuple(fold(spec.search).split()) if spec.search else (),
        is_organic=spec.is_organic,
        is_featured=spec.is_featured,
    )
