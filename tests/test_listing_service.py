# tests/test_listing_service.py
import asyncio
from types import SimpleNamespace

import pytest

from canasta.catalog.compositor import EmptyResult, ProductPredicate, compose
from canasta.catalog.errors import StorageTimeout, StorageUnavailable
from canasta.catalog.filters import FilterSpec
from canasta.catalog.resolution import (
    UNCONSTRAINED,
    NotFound,
    Resolved,
    expand_location,
)
from canasta.catalog.service import list_products


class FakeStore:
    """In-memory catalog store that records what the pipeline asked for."""

    def __init__(self, categories=None, producers=None, locations=None,
                 producers_by_location=None, products=()):
        self.categories = categories or {}
        self.producers = producers or {}
        self.locations = locations or []
        self.producers_by_location = producers_by_location or {}
        self.products = list(products)
        self.queries = []
        self.counts = []

    async def find_category_by_name(self, name):
        if name in self.categories:
            return SimpleNamespace(id=self.categories[name], name=name)
        return None

    async def find_producer_by_name(self, name):
        if name in self.producers:
            return SimpleNamespace(id=self.producers[name], name=name)
        return None

    async def find_location_by_city_dept(self, city, department):
        for loc in self.locations:
            if loc.city == city and loc.department == department:
                return loc
        return None

    async def find_location_by_token(self, token):
        for loc in self.locations:
            if token in (loc.city, loc.department):
                return loc
        return None

    async def find_producers_by_location(self, location_id):
        return list(self.producers_by_location.get(location_id, []))

    async def query_products(self, predicate, sort, skip, limit):
        self.queries.append((predicate, sort, skip, limit))
        return self.products[skip:skip + limit]

    async def count_products(self, predicate):
        self.counts.append(predicate)
        return len(self.products)


class SlowStore(FakeStore):
    async def find_category_by_name(self, name):
        await asyncio.sleep(1)
        return await super().find_category_by_name(name)


class BrokenStore(FakeStore):
    async def find_producers_by_location(self, location_id):
        raise StorageUnavailable("Catalog storage is unavailable")


def make_store(**kw):
    defaults = dict(
        categories={"Verduras": 1},
        producers={"Finca X": 10, "Granja Sol": 11},
        locations=[
            SimpleNamespace(id=100, city="Bogotá", department="Cundinamarca"),
            SimpleNamespace(id=101, city="Tunja", department="Boyacá"),
            SimpleNamespace(id=102, city="Medellín", department="Antioquia"),
        ],
        producers_by_location={100: [11, 12], 102: [10]},
        products=[SimpleNamespace(id=i) for i in range(12)],
    )
    defaults.update(kw)
    return FakeStore(**defaults)


def run(store, **params):
    return asyncio.run(list_products(store, FilterSpec.from_query(params)))


def test_no_filters_only_requires_availability():
    store = make_store()
    page = run(store)
    predicate = store.queries[0][0]
    assert predicate == ProductPredicate()
    assert predicate.is_available is True
    assert store.counts == [predicate]
    assert page.total_products == 12


def test_unknown_category_short_circuits_without_querying():
    store = make_store()
    page = run(store, category="Frutas", producer="Finca X", priceMin="10")
    assert page.items == []
    assert page.total_products == 0
    assert page.total_pages == 0
    assert not page.has_next_page and not page.has_prev_page
    assert store.queries == [] and store.counts == []


def test_unknown_producer_and_location_short_circuit():
    store = make_store()
    assert run(store, producer="Nadie").total_products == 0
    assert run(store, location="Cali, Valle").total_products == 0
    assert store.queries == []


def test_location_without_producers_is_empty():
    store = make_store()
    page = run(store, location="Tunja, Boyacá")
    assert page.total_products == 0
    assert store.queries == []


def test_location_expands_to_producer_set():
    store = make_store()
    run(store, location="Bogotá, Cundinamarca")
    assert store.queries[0][0].producer_ids == (11, 12)


def test_single_token_location_matches_department():
    store = make_store()
    run(store, location="Antioquia")
    assert store.queries[0][0].producer_ids == (10,)


def test_producer_outside_location_is_empty():
    store = make_store()
    page = run(store, producer="Finca X", location="Bogotá, Cundinamarca")
    assert page.total_products == 0
    assert store.queries == []


def test_producer_inside_location_is_not_widened():
    store = make_store()
    run(store, producer="Granja Sol", location="Bogotá, Cundinamarca")
    assert store.queries[0][0].producer_ids == (11,)


def test_compositor_carries_plain_filters():
    store = make_store()
    run(store, category="Verduras", priceMin="50", priceMax="10",
        search="tomate  orgánico", isOrganic="false", isFeatured="true")
    predicate = store.queries[0][0]
    assert predicate.category_id == 1
    assert predicate.price_min == 50 and predicate.price_max == 10
    assert predicate.search_terms == ("tomate", "organico")
    assert predicate.is_organic is False
    assert predicate.is_featured is True


def test_pagination_metadata():
    store = make_store()
    page = run(store, page="2", limit="5")
    assert [p.id for p in page.items] == [5, 6, 7, 8, 9]
    assert store.queries[0][2:] == (5, 5)
    assert page.current_page == 2
    assert page.total_pages == 3
    assert page.has_next_page is True
    assert page.has_prev_page is True

    last = run(store, page="3", limit="5")
    assert len(last.items) == 2
    assert last.has_next_page is False


def test_empty_page_keeps_requested_page_number():
    page = run(make_store(), category="Frutas", page="4")
    assert page.current_page == 4


def test_timeout_raises_storage_timeout():
    store = SlowStore()
    spec = FilterSpec.from_query({"category": "Verduras"})
    with pytest.raises(StorageTimeout):
        asyncio.run(list_products(store, spec, timeout=0.05))


def test_storage_failure_aborts_listing():
    store = BrokenStore(locations=[SimpleNamespace(id=1, city="Tunja", department="Boyacá")])
    spec = FilterSpec.from_query({"location": "Tunja"})
    with pytest.raises(StorageUnavailable):
        asyncio.run(list_products(store, spec))
    assert store.queries == []


def test_expand_location_variants():
    store = make_store()
    assert asyncio.run(expand_location(store, UNCONSTRAINED, UNCONSTRAINED)) is UNCONSTRAINED
    assert asyncio.run(expand_location(store, UNCONSTRAINED, Resolved(10))) == Resolved((10,))
    missing = NotFound("producer missing")
    assert asyncio.run(expand_location(store, Resolved(100), missing)) is missing


def test_compose_returns_empty_result_for_not_found():
    spec = FilterSpec()
    result = compose(spec, NotFound("category 'Frutas' not found"), UNCONSTRAINED)
    assert isinstance(result, EmptyResult)
    assert "Frutas" in result.reason


class RendezvousStore(FakeStore):
    """Each name lookup waits until all three have started."""

    def __init__(self, **kw):
        super().__init__(**kw)
        self.started = set()

    async def _arrive(self, name):
        self.started.add(name)
        while len(self.started) < 3:
            await asyncio.sleep(0.001)

    async def find_category_by_name(self, name):
        await self._arrive("category")
        return await super().find_category_by_name(name)

    async def find_producer_by_name(self, name):
        await self._arrive("producer")
        return await super().find_producer_by_name(name)

    async def find_location_by_city_dept(self, city, department):
        await self._arrive("location")
        return await super().find_location_by_city_dept(city, department)


def test_name_lookups_run_concurrently():
    base = make_store()
    store = RendezvousStore(
        categories=base.categories,
        producers=base.producers,
        locations=base.locations,
        producers_by_location=base.producers_by_location,
        products=base.products,
    )
    spec = FilterSpec.from_query({
        "category": "Verduras",
        "producer": "Granja Sol",
        "location": "Bogotá, Cundinamarca",
    })
    page = asyncio.run(list_products(store, spec, timeout=2))
    assert store.started == {"category", "producer", "location"}
    assert store.queries[0][0].producer_ids == (11,)
    assert page.total_products == 12
