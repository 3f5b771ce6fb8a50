"""Tests for the in-memory product store."""
from concurrent.futures import ThreadPoolExecutor
from datetime import date, timedelta
from decimal import Decimal

import pytest

from inventory.database import ProductStore
from inventory.exceptions import ProductNotFoundError
from inventory.models.product import Product


def make_product(name="Laptop", stock=10):
    return Product(
        name=name,
        category="Electronics",
        unit_price=Decimal("999.99"),
        stock=stock,
    )


class FakeClock:
    def __init__(self, today):
        self.today = today

    def __call__(self):
        return self.today


def test_save_assigns_id_and_dates():
    """Test saving a new product assigns an id and both dates."""
    store = ProductStore(clock=FakeClock(date(2026, 1, 1)))

    saved = store.save(make_product())

    assert saved.id == 1
    assert saved.creation_date == date(2026, 1, 1)
    assert saved.update_date == date(2026, 1, 1)
    assert store.find_by_id(1) == saved


def test_ids_are_never_reused_after_delete(store):
    """Test identifiers keep increasing after deletions."""
    first = store.save(make_product("A"))
    second = store.save(make_product("B"))
    store.delete(second.id)

    third = store.save(make_product("C"))

    assert first.id < second.id < third.id


def test_save_unknown_id_raises_and_does_not_mutate(store):
    """Test saving a product with an unknown id fails."""
    store.save(make_product())
    before = store.find_all()

    with pytest.raises(ProductNotFoundError):
        store.save(Product(id=99, name="Ghost", category="None", unit_price=Decimal("1.00"), stock=1))

    assert store.find_all() == before
    assert not store.exists(99)


def test_update_preserves_creation_date_and_refreshes_update_date():
    """Test saving an existing product keeps its creation date."""
    clock = FakeClock(date(2026, 1, 1))
    store = ProductStore(clock=clock)
    saved = store.save(make_product())

    clock.today = date(2026, 1, 5)
    saved.stock = 3
    saved.creation_date = date(2020, 1, 1)
    updated = store.save(saved)

    assert updated.creation_date == date(2026, 1, 1)
    assert updated.update_date == date(2026, 1, 5)
    assert store.find_by_id(saved.id).stock == 3


def test_returned_products_are_copies(store):
    """Test changes to returned products do not persist without save."""
    saved = store.save(make_product(stock=10))

    saved.stock = 0
    store.find_by_id(saved.id).stock = 0
    for product in store.find_all():
        product.stock = 0

    assert store.find_by_id(saved.id).stock == 10


def test_find_by_id_missing_returns_none(store):
    assert store.find_by_id(42) is None


def test_delete_missing_id_is_noop(store):
    """Test deleting an unknown id does nothing."""
    store.save(make_product())

    store.delete(42)

    assert store.count() == 1


def test_clear_resets_counter(store):
    """Test clear empties the store and restarts ids at 1."""
    store.save(make_product("A"))
    store.save(make_product("B"))

    store.clear()

    assert store.count() == 0
    assert store.save(make_product("C")).id == 1


def test_concurrent_creates_get_unique_ids(store):
    """Test concurrent saves never share an identifier."""
    with ThreadPoolExecutor(max_workers=16) as pool:
        saved = list(pool.map(lambda i: store.save(make_product(f"P{i}")), range(500)))

    ids = [p.id for p in saved]
    assert len(set(ids)) == 500
    assert sorted(ids) == list(range(1, 501))
    assert store.count() == 500


def test_concurrent_updates_keep_creation_date(store):
    """Test concurrent updates of one product never lose its creation date."""
    saved = store.save(make_product())

    def restock(quantity):
        product = store.find_by_id(saved.id)
        product.stock = quantity
        return store.save(product)

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(restock, range(1, 101)))

    assert all(p.creation_date == saved.creation_date for p in results)
    assert store.find_by_id(saved.id).stock in range(1, 101)
    assert store.count() == 1


def test_update_date_not_before_creation_date():
    clock = FakeClock(date.today())
    store = ProductStore(clock=clock)
    saved = store.save(make_product())

    clock.today = date.today() + timedelta(days=1)
    updated = store.save(saved)

    assert updated.update_date >= updated.creation_date
