from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Callable, Iterable, List, Optional, Tuple
import logging

from inventory.database import ProductRepository
from inventory.exceptions import ProductNotFoundError, ProductValidationError
from inventory.models.product import Product
from inventory.services.product_query import (
    PageRequest,
    ProductFilter,
    StockMetrics,
    compute_metrics,
    filter_products,
    query_products,
)

logger = logging.getLogger(__name__)

MIN_UNIT_PRICE = Decimal("0.01")


def validate_product(product: Product, today: date) -> List[Tuple[str, str]]:
    """
    Check a product against its field constraints.

    Args:
        product: Product to check
        today: Reference date for the expiration check

    Returns:
        List of (field, message) pairs, empty when the product is valid
    """
    errors = []

    if product.name is None or not product.name.strip():
        errors.append(("name", "Name is required"))

    if product.category is None or not product.category.strip():
        errors.append(("category", "Category is required"))

    if product.unit_price is None:
        errors.append(("unit_price", "Unit Price is required"))
    elif not product.unit_price.is_finite() or product.unit_price <= MIN_UNIT_PRICE:
        errors.append(("unit_price", "Price must be greater than 0.01"))

    if product.expiration_date is not None and product.expiration_date < today:
        errors.append(("expiration_date", "Expiration Date can not be in the past"))

    if product.stock is None:
        errors.append(("stock", "Stock is required"))
    elif product.stock < 0:
        errors.append(("stock", "Stock can not be negative"))

    return errors


class ProductService:
    """
    Service class for Product operations.

    This service handles:
    - Validating products before they reach the store
    - Creating, updating and deleting products
    - Marking products in and out of stock
    - Filtered, sorted and paginated listing
    - Stock metrics
    """

    def __init__(self, store: ProductRepository, clock: Callable[[], date] = date.today):
        self.store = store
        self.clock = clock

    def create(self, product: Product) -> Product:
        """
        Create a new product.

        Args:
            product: Product data; any id or dates it carries are ignored

        Returns:
            Created product with id and dates populated

        Raises:
            ProductValidationError: If any field constraint is violated
        """
        product = replace(product, id=None, creation_date=None, update_date=None)
        self._validate(product)

        created = self.store.save(product)
        logger.info(f"Product #{created.id} '{created.name}' created")
        return created

    def get_by_id(self, product_id: int) -> Optional[Product]:
        """Get a product by ID, or None if it doesn't exist."""
        return self.store.find_by_id(product_id)

    def get_all(
        self,
        name: Optional[str] = None,
        category: Optional[str] = None,
        in_stock: Optional[bool] = None,
        page: int = 0,
        size: int = 10,
        sort: Iterable = (),
    ) -> Tuple[List[Product], int]:
        """
        Get a filtered, sorted page of products.

        Args:
            name: Case-insensitive substring of the product name
            category: Case-insensitive substring of the category
            in_stock: True for stock > 0, False for stock == 0, None for all
            page: Page index (0-based)
            size: Number of items per page
            sort: Sort orders, first one primary

        Returns:
            Tuple of (products on the page, total matching count)
        """
        return query_products(
            self.store.find_all(),
            ProductFilter(name=name, category=category, in_stock=in_stock),
            PageRequest(page=page, size=size, sort=tuple(sort)),
        )

    def update(self, product_id: int, details: Product) -> Product:
        """
        Replace every mutable field of an existing product.

        Args:
            product_id: ID of product to update
            details: New name, category, unit price, expiration date and stock

        Returns:
            Updated product

        Raises:
            ProductNotFoundError: If the product doesn't exist
            ProductValidationError: If the merged product is invalid
        """
        product = self._get_existing(product_id)

        product.name = details.name
        product.category = details.category
        product.unit_price = details.unit_price
        product.expiration_date = details.expiration_date
        product.stock = details.stock

        self._validate(product)

        updated = self.store.save(product)
        logger.info(f"Product #{product_id} updated")
        return updated

    def mark_out_of_stock(self, product_id: int) -> Product:
        """Set a product's stock to zero."""
        product = self._get_existing(product_id)
        product.stock = 0

        updated = self.store.save(product)
        logger.info(f"Product #{product_id} marked out of stock")
        return updated

    def mark_in_stock(self, product_id: int, quantity: Optional[int]) -> Product:
        """
        Restock a product.

        Args:
            product_id: ID of product to restock
            quantity: New stock level, must be greater than 0

        Raises:
            ProductNotFoundError: If the product doesn't exist
            ProductValidationError: If quantity is missing or not positive
        """
        product = self._get_existing(product_id)

        if quantity is None or quantity <= 0:
            logger.warning(f"Rejected restock of product #{product_id} with quantity {quantity}")
            raise ProductValidationError([("quantity", "Stock quantity must be greater than 0")])

        product.stock = quantity
        updated = self.store.save(product)
        logger.info(f"Product #{product_id} restocked to {quantity}")
        return updated

    def delete(self, product_id: int) -> None:
        """
        Delete a product.

        Raises:
            ProductNotFoundError: If the product doesn't exist
        """
        if not self.store.exists(product_id):
            raise ProductNotFoundError(product_id)

        self.store.delete(product_id)
        logger.info(f"Product #{product_id} deleted")

    def get_metrics(self, category: Optional[str] = None) -> Tuple[StockMetrics, dict]:
        """
        Get stock metrics, optionally restricted to matching categories.

        Returns:
            Tuple of (overall metrics, metrics keyed by category)
        """
        products = self.store.find_all()
        if category:
            products = filter_products(products, ProductFilter(category=category))
        return compute_metrics(products)

    def _get_existing(self, product_id: int) -> Product:
        product = self.store.find_by_id(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)
        return product

    def _validate(self, product: Product) -> None:
        errors = validate_product(product, self.clock())
        if errors:
            error = ProductValidationError(errors)
            logger.warning(str(error))
            raise error
