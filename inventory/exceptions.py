from typing import List, Tuple


class InventoryError(Exception):
    """Base class for inventory errors raised to callers."""
    pass


class ProductNotFoundError(InventoryError):
    """Exception raised when the requested product doesn't exist."""

    def __init__(self, product_id: int):
        self.product_id = product_id
        super().__init__(f"Product with ID {product_id} not found")


class ProductValidationError(InventoryError):
    """
    Exception raised when one or more product constraints are violated.

    Carries every violation as a ``(field, message)`` pair.
    """

    def __init__(self, errors: List[Tuple[str, str]]):
        self.errors = list(errors)
        details = "; ".join(f"{field}: {message}" for field, message in self.errors)
        super().__init__(f"Validation error: {details}")
