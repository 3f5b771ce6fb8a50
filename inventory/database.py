import threading
from dataclasses import replace
from datetime import date
from typing import Callable, Dict, List, Optional, Protocol

from inventory.exceptions import ProductNotFoundError
from inventory.models.product import Product


class ProductRepository(Protocol):
    """Storage contract used by the product service."""

    def save(self, product: Product) -> Product: ...

    def find_by_id(self, product_id: int) -> Optional[Product]: ...

    def find_all(self) -> List[Product]: ...

    def exists(self, product_id: int) -> bool: ...

    def delete(self, product_id: int) -> None: ...

    def count(self) -> int: ...

    def clear(self) -> None: ...


class ProductStore:
    """
    Thread-safe in-memory product store.

    A single lock guards both the product map and the identifier counter,
    so every operation is atomic with respect to the others:

    - Concurrent saves without an id never receive the same identifier
    - A save on an existing id reads the stored creation date and replaces
      the entry in one step
    - Readers never observe a partially written entry

    Products are copied on the way in and on the way out; callers must
    resubmit a product through ``save`` for changes to persist.
    """

    def __init__(self, clock: Callable[[], date] = date.today):
        self._lock = threading.Lock()
        self._products: Dict[int, Product] = {}
        self._last_id = 0
        self._clock = clock

    def save(self, product: Product) -> Product:
        """
        Insert a new product or replace an existing one.

        Args:
            product: Product to persist. Without an id it is inserted under
                the next identifier; with an id it must already exist.

        Returns:
            Copy of the persisted product with id and dates populated

        Raises:
            ProductNotFoundError: If the product carries an unknown id
        """
        with self._lock:
            today = self._clock()
            if product.id is None:
                self._last_id += 1
                stored = replace(
                    product,
                    id=self._last_id,
                    creation_date=today,
                    update_date=today,
                )
            else:
                existing = self._products.get(product.id)
                if existing is None:
                    raise ProductNotFoundError(product.id)
                stored = replace(
                    product,
                    creation_date=existing.creation_date,
                    update_date=today,
                )
            self._products[stored.id] = stored
            return replace(stored)

    def find_by_id(self, product_id: int) -> Optional[Product]:
        with self._lock:
            product = self._products.get(product_id)
            return replace(product) if product is not None else None

    def find_all(self) -> List[Product]:
        """Return a snapshot of every stored product."""
        with self._lock:
            return [replace(p) for p in self._products.values()]

    def exists(self, product_id: int) -> bool:
        with self._lock:
            return product_id in self._products

    def delete(self, product_id: int) -> None:
        """Remove a product. Deleting an unknown id is a no-op."""
        with self._lock:
            self._products.pop(product_id, None)

    def count(self) -> int:
        with self._lock:
            return len(self._products)

    def clear(self) -> None:
        """Empty the store and reset the identifier counter."""
        with self._lock:
            self._products.clear()
            self._last_id = 0


# Application-wide store
product_store = ProductStore()


def get_store() -> ProductRepository:
    """
    Dependency to get the product store.
    """
    return product_store
