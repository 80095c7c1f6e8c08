# tests/conftest.py
import os
import tempfile
from datetime import datetime, timedelta

_DB_DIR = tempfile.mkdtemp(prefix="canasta-tests-")
DB_PATH = os.path.join(_DB_DIR, "catalog.db")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{DB_PATH}"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session

from canasta.db.session import Base
from canasta.main import app
from canasta.models.category import Category
from canasta.models.location import Location
from canasta.models.producer import Producer
from canasta.models.product import Product, ProductImage, ProductTag


BASE_TIME = datetime(2024, 1, 1, 8, 0, 0)


class Catalog:
    """Seeds rows through a synchronous session and hands back their ids."""

    def __init__(self, session: Session):
        self.session = session
        self._clock = 0

    def _add(self, row):
        self.session.add(row)
        self.session.commit()
        return row.id

    def category(self, name, **kw):
        return self._add(Category(name=name, **kw))

    def location(self, city, department, **kw):
        return self._add(Location(city=city, department=department, **kw))

    def producer(self, name, location_id, **kw):
        kw.setdefault("phone", "3000000000")
        return self._add(Producer(name=name, location_id=location_id, **kw))

    def product(self, name, category_id, producer_id, price=1000, tags=(), images=(), **kw):
        self._clock += 1
        stamp = BASE_TIME + timedelta(minutes=self._clock)
        kw.setdefault("description", f"{name} fresco del campo")
        kw.setdefault("stock", 10)
        kw.setdefault("unit", "kg")
        kw.setdefault("created_at", stamp)
        kw.setdefault("updated_at", stamp)
        product = Product(
            name=name,
            category_id=category_id,
            producer_id=producer_id,
            price=price,
            **kw
        )
        product.tag_rows = [ProductTag(name=tag) for tag in tags]
        product.images = [
            ProductImage(url=url, alt=f"{name} - Imagen {i + 1}", is_primary=i == 0, position=i)
            for i, url in enumerate(images)
        ]
        return self._add(product)


@pytest.fixture()
def catalog():
    engine = create_engine(f"sqlite:///{DB_PATH}")
    Base.metadata.drop_all(engine)
    Base.metadata.create_all(engine)
    with Session(engine) as session:
        yield Catalog(session)
    engine.dispose()


@pytest.fixture()
def client(catalog):
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def market(catalog):
    """A small market: three categories, four locations, three producers."""
    ids = {}
    ids["verduras"] = catalog.category("Verduras")
    ids["lacteos"] = catalog.category("Lácteos")
    ids["granos"] = catalog.category("Granos")

    ids["bogota"] = catalog.location("Bogotá", "Cundinamarca")
    ids["tunja"] = catalog.location("Tunja", "Boyacá")
    ids["medellin"] = catalog.location("Medellín", "Antioquia")
    ids["rionegro"] = catalog.location("Rionegro", "Antioquia")

    ids["finca_x"] = catalog.producer("Finca X", ids["medellin"])
    ids["granja_sol"] = catalog.producer("Granja Sol", ids["bogota"])
    ids["huerta_verde"] = catalog.producer("Huerta Verde", ids["bogota"])

    ids["tomate"] = catalog.product(
        "Tomate chonto", ids["verduras"], ids["granja_sol"], price=3500,
        is_organic=True, tags=["hortaliza"])
    ids["lechuga"] = catalog.product(
        "Lechuga crespa", ids["verduras"], ids["huerta_verde"], price=2000,
        is_featured=True, rating_average=4.5, tags=["hortaliza", "ensalada"])
    ids["queso"] = catalog.product(
        "Queso campesino", ids["lacteos"], ids["finca_x"], price=12000,
        unit="unidad", is_featured=True, rating_average=4.8, rating_count=12,
        images=["/uploads/products/queso-1.jpg", "/uploads/products/queso-2.jpg"],
        nutritional_info={"calories": 350, "protein": 25})
    ids["frijol"] = catalog.product(
        "Fríjol cargamanto", ids["granos"], ids["finca_x"], price=8000,
        is_organic=True)
    ids["papa_agotada"] = catalog.product(
        "Papa criolla", ids["verduras"], ids["granja_sol"], price=2500,
        is_available=False)
    return ids
