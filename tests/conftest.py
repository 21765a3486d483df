"""Shared pytest fixtures for the test suite."""

import os
from datetime import date, datetime
from types import MappingProxyType

import pytest

# Keep settings deterministic BEFORE any app code reads the environment.
os.environ["APP_ENV"] = "test"
os.environ.pop("SNAPSHOT_PATH", None)

from src.models.entities import AppSettings, Product, Sale, Snapshot, Store
from src.models.enums import ProductType, StoreLevel
from src.repositories.memory_repository import InMemorySnapshotRepository


def make_sale(store_id: str, product_id: str, when: datetime, quantity: int = 1) -> Sale:
    return Sale(store_id=store_id, product_id=product_id, date=when, quantity=quantity)


@pytest.fixture
def stores():
    return [
        Store(id="s1", name="Toko Makmur", level=StoreLevel.RITEL),
        Store(id="s2", name="Toko Sejahtera", level=StoreLevel.RITEL),
        Store(id="s3", name="Grosir Jaya", level=StoreLevel.WS1),
    ]


@pytest.fixture
def products():
    return [
        Product(id="p-dd", name="Mie Goreng Promo", type=ProductType.DD, base_price=10000,
                target_coverage={StoreLevel.RITEL: 50, StoreLevel.WS1: 100}),
        Product(id="p-fokus", name="Kopi Susu", type=ProductType.FOKUS, base_price=25000,
                target_coverage={StoreLevel.RITEL: 100}),
        Product(id="p-none", name="Teh Botol", type=ProductType.DD, base_price=5000),
        Product(id="p-off", name="Sabun Lama", type=ProductType.FOKUS, is_active=False,
                target_coverage={StoreLevel.RITEL: 0}),
    ]


@pytest.fixture
def sales():
    return [
        # this week
        make_sale("s1", "p-dd", datetime(2025, 6, 9, 8, 30)),
        make_sale("s1", "p-fokus", datetime(2025, 6, 10, 14, 0)),
        make_sale("s3", "p-dd", datetime(2025, 6, 11, 9, 15)),
        # last week
        make_sale("s2", "p-fokus", datetime(2025, 6, 3, 10, 0)),
    ]


@pytest.fixture
def snapshot(stores, products, sales):
    return Snapshot(
        stores=tuple(stores),
        products=tuple(products),
        sales=tuple(sales),
        visit_plan=MappingProxyType({1: frozenset({"s1", "s3"}), 3: frozenset()}),
        settings=AppSettings(discounts={StoreLevel.RITEL: 10, StoreLevel.WS1: 20},
                             deadline=date(2025, 6, 15)),
        version=1,
    )


@pytest.fixture
def repository(snapshot):
    return InMemorySnapshotRepository(snapshot, clock=lambda: datetime(2025, 6, 11, 12, 0))


@pytest.fixture
def app(snapshot):
    """Create Flask app configured for testing with the seeded snapshot."""
    from src.web.app import create_app

    app = create_app("test", snapshot=snapshot)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def today():
    """Wednesday; its Monday-start week runs 2025-06-09 .. 2025-06-15."""
    return date(2025, 6, 11)
