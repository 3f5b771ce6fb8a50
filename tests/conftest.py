import os

import pytest
from fastapi.testclient import TestClient

os.environ.setdefault("SEED_DATA", "false")

from inventory.main import app
from inventory.database import ProductStore, get_store
from inventory.services.product_service import ProductService


@pytest.fixture(scope="function")
def store():
    """Fresh in-memory store for each test."""
    product_store = ProductStore()

    yield product_store

    product_store.clear()


@pytest.fixture(scope="function")
def service(store):
    """Product service bound to the test store."""
    return ProductService(store)


@pytest.fixture(scope="function")
def client(store):
    """Create test client backed by a fresh store for each test."""
    app.dependency_overrides[get_store] = lambda: store

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
