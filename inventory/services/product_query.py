"""
Filter, sort and paginate products held in memory.

The whole pipeline runs over a store snapshot on every call; there is no
index to keep in sync with writes.
"""
from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from functools import cmp_to_key
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from inventory.models.product import Product


@dataclass(frozen=True)
class ProductFilter:
    """Listing filters. Empty or missing values do not filter."""
    name: Optional[str] = None
    category: Optional[str] = None
    in_stock: Optional[bool] = None


@dataclass(frozen=True)
class SortOrder:
    field: str
    descending: bool = False


@dataclass(frozen=True)
class PageRequest:
    page: int = 0
    size: int = 10
    sort: Tuple[SortOrder, ...] = field(default_factory=tuple)


# Sortable fields, by public and attribute name
SORT_FIELDS: Dict[str, Callable[[Product], Any]] = {
    "name": lambda p: p.name,
    "category": lambda p: p.category,
    "unitPrice": lambda p: p.unit_price,
    "unit_price": lambda p: p.unit_price,
    "stock": lambda p: p.stock,
    "expirationDate": lambda p: p.expiration_date,
    "expiration_date": lambda p: p.expiration_date,
}

# Fields whose missing values go last whatever the direction
NULLS_LAST_FIELDS = {"expirationDate", "expiration_date"}


def parse_sort(values: Optional[Iterable[str]]) -> Tuple[SortOrder, ...]:
    """
    Parse ``sort`` query values into sort orders.

    Each value has the form ``field[,field...][,asc|desc]``. The direction
    applies to every field in the value and defaults to ascending.

    Example:
        parse_sort(["name,desc", "stock"])
        -> (SortOrder("name", True), SortOrder("stock", False))
    """
    orders: List[SortOrder] = []
    for value in values or ():
        parts = [part.strip() for part in value.split(",") if part.strip()]
        if not parts:
            continue
        descending = False
        if parts[-1].lower() in ("asc", "desc"):
            descending = parts.pop().lower() == "desc"
        orders.extend(SortOrder(name, descending) for name in parts)
    return tuple(orders)


def _contains(value: Optional[str], text: Optional[str]) -> bool:
    if not text:
        return True
    return value is not None and text.lower() in value.lower()


def matches(product: Product, criteria: ProductFilter) -> bool:
    """Check a product against name, category and stock filters."""
    if not _contains(product.name, criteria.name):
        return False
    if not _contains(product.category, criteria.category):
        return False
    if criteria.in_stock is True:
        return (product.stock or 0) > 0
    if criteria.in_stock is False:
        return (product.stock or 0) == 0
    return True


def filter_products(products: Iterable[Product], criteria: ProductFilter) -> List[Product]:
    return [p for p in products if matches(p, criteria)]


def _compare_field(a: Product, b: Product, order: SortOrder) -> int:
    getter = SORT_FIELDS.get(order.field)
    if getter is None:
        return 0

    left, right = getter(a), getter(b)
    if left is None or right is None:
        if left is None and right is None:
            return 0
        if order.field in NULLS_LAST_FIELDS:
            return 1 if left is None else -1
        result = 1 if left is None else -1
    else:
        result = (left > right) - (left < right)

    return -result if order.descending else result


def sort_products(products: List[Product], orders: Iterable[SortOrder]) -> List[Product]:
    """
    Sort products by a composite key.

    The first order is primary and later ones break ties. Unknown fields
    are ignored. With no orders the input order is kept.
    """
    orders = [o for o in orders if o.field in SORT_FIELDS]
    if not orders:
        return list(products)

    def compare(a: Product, b: Product) -> int:
        for order in orders:
            result = _compare_field(a, b, order)
            if result:
                return result
        return 0

    return sorted(products, key=cmp_to_key(compare))


def paginate(products: List[Product], page: int, size: int) -> List[Product]:
    """Return the half-open slice for a page, or an empty list past the end."""
    start = page * size
    end = min(start + size, len(products))
    if start > end:
        return []
    return products[start:end]


def query_products(
    products: Iterable[Product],
    criteria: ProductFilter,
    page_request: PageRequest,
) -> Tuple[List[Product], int]:
    """
    Run the filter, sort and paginate pipeline.

    Returns:
        Tuple of (page items, total matching count before pagination)
    """
    filtered = filter_products(products, criteria)
    ordered = sort_products(filtered, page_request.sort)
    return paginate(ordered, page_request.page, page_request.size), len(filtered)


@dataclass
class StockMetrics:
    total_in_stock: int = 0
    total_value: Decimal = Decimal("0")
    average_price: Decimal = Decimal("0")


_CENTS = Decimal("0.01")


def _summarize(products: List[Product]) -> StockMetrics:
    in_stock = [p for p in products if (p.stock or 0) > 0]
    total_units = sum(p.stock for p in in_stock)
    total_value = sum((p.unit_price * p.stock for p in in_stock), Decimal("0"))
    if in_stock:
        average = sum((p.unit_price for p in in_stock), Decimal("0")) / len(in_stock)
    else:
        average = Decimal("0")
    return StockMetrics(
        total_in_stock=total_units,
        total_value=total_value.quantize(_CENTS, rounding=ROUND_HALF_UP),
        average_price=average.quantize(_CENTS, rounding=ROUND_HALF_UP),
    )


def compute_metrics(products: Iterable[Product]) -> Tuple[StockMetrics, Dict[str, StockMetrics]]:
    """
    Summarize stock overall and per category.

    Only products with stock > 0 count towards units, value and average price.

    Returns:
        Tuple of (overall metrics, metrics keyed by category)
    """
    products = list(products)
    by_category: Dict[str, List[Product]] = {}
    for product in products:
        by_category.setdefault(product.category, []).append(product)

    return _summarize(products), {
        category: _summarize(items) for category, items in sorted(by_category.items())
    }
