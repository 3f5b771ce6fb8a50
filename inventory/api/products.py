from fastapi import APIRouter, Depends, HTTPException, Query, status
from typing import List, Optional
import math

from inventory.config import get_settings
from inventory.database import ProductRepository, get_store
from inventory.exceptions import ProductNotFoundError, ProductValidationError
from inventory.services.product_query import parse_sort
from inventory.services.product_service import ProductService
from inventory.schemas.product import (
    ProductCreate,
    ProductUpdate,
    ProductResponse,
    ProductListResponse,
    InventoryMetricsResponse,
    StockMetricsResponse,
)

router = APIRouter(prefix="/products", tags=["Products"])

settings = get_settings()


def _not_found(e: ProductNotFoundError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=str(e)
    )


def _bad_request(e: ProductValidationError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail=[{"field": field, "message": message} for field, message in e.errors]
    )


@router.post(
    "/",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new product",
    description="Create a new product with name, category, unit price, optional expiration date and stock."
)
def create_product(
    product_data: ProductCreate,
    store: ProductRepository = Depends(get_store)
):
    """
    Create a new product.

    - **name**: Product name (required)
    - **category**: Product category (required)
    - **unit_price**: Unit price, must be greater than 0.01 (required)
    - **expiration_date**: Expiration date, not in the past (optional)
    - **stock**: Initial stock quantity, must be non-negative (required)

    All violated constraints are reported together with a 400 response.
    """
    service = ProductService(store)
    try:
        return service.create(product_data.to_product())
    except ProductValidationError as e:
        raise _bad_request(e)


@router.get(
    "/",
    response_model=ProductListResponse,
    summary="List products",
    description="Get a filtered, sorted and paginated list of products."
)
def list_products(
    name: Optional[str] = Query(None, description="Filter by name (case-insensitive substring)"),
    category: Optional[str] = Query(None, description="Filter by category (case-insensitive substring)"),
    in_stock: Optional[bool] = Query(None, alias="inStock", description="true: stock > 0, false: stock == 0"),
    page: int = Query(0, ge=0, description="Page index (0-based)"),
    size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE, description="Items per page"),
    sort: Optional[List[str]] = Query(None, description="Sort order as field[,asc|desc], repeatable"),
    store: ProductRepository = Depends(get_store)
):
    """
    Get a page of products.

    Sortable fields are name, category, unitPrice, stock and expirationDate.
    Products without an expiration date always sort last on expirationDate.
    """
    service = ProductService(store)
    products, total = service.get_all(
        name=name,
        category=category,
        in_stock=in_stock,
        page=page,
        size=size,
        sort=parse_sort(sort),
    )

    return ProductListResponse(
        items=[ProductResponse.model_validate(p) for p in products],
        total=total,
        page=page,
        size=size,
        total_pages=math.ceil(total / size) if total > 0 else 1
    )


@router.get(
    "/metrics",
    response_model=InventoryMetricsResponse,
    summary="Inventory metrics",
    description="Units in stock, stock value and average in-stock price, overall and per category."
)
def get_metrics(
    category: Optional[str] = Query(None, description="Restrict to matching categories"),
    store: ProductRepository = Depends(get_store)
):
    """Get stock metrics over the current inventory."""
    service = ProductService(store)
    overall, by_category = service.get_metrics(category)

    return InventoryMetricsResponse(
        overall=StockMetricsResponse.model_validate(overall),
        by_category={
            name: StockMetricsResponse.model_validate(metrics)
            for name, metrics in by_category.items()
        }
    )


@router.get(
    "/{product_id}",
    response_model=ProductResponse,
    summary="Get product by ID",
    description="Get detailed information about a specific product."
)
def get_product(
    product_id: int,
    store: ProductRepository = Depends(get_store)
):
    """Get a product by ID."""
    service = ProductService(store)
    product = service.get_by_id(product_id)

    if not product:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Product with ID {product_id} not found"
        )

    return product


@router.put(
    "/{product_id}",
    response_model=ProductResponse,
    summary="Update a product",
    description="Replace the name, category, unit price, expiration date and stock of a product."
)
def update_product(
    product_id: int,
    product_data: ProductUpdate,
    store: ProductRepository = Depends(get_store)
):
    """
    Update a product.

    The product keeps its ID and creation date; the update date is refreshed.
    """
    service = ProductService(store)
    try:
        return service.update(product_id, product_data.to_product())
    except ProductNotFoundError as e:
        raise _not_found(e)
    except ProductValidationError as e:
        raise _bad_request(e)


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a product",
    description="Delete a product by ID."
)
def delete_product(
    product_id: int,
    store: ProductRepository = Depends(get_store)
):
    """Delete a product."""
    service = ProductService(store)
    try:
        service.delete(product_id)
    except ProductNotFoundError as e:
        raise _not_found(e)

    return None


@router.post(
    "/{product_id}/outofstock",
    response_model=ProductResponse,
    summary="Mark a product out of stock",
    description="Set the stock of a product to zero."
)
def mark_product_out_of_stock(
    product_id: int,
    store: ProductRepository = Depends(get_store)
):
    service = ProductService(store)
    try:
        return service.mark_out_of_stock(product_id)
    except ProductNotFoundError as e:
        raise _not_found(e)


@router.put(
    "/{product_id}/instock",
    response_model=ProductResponse,
    summary="Mark a product in stock",
    description="Set the stock of a product to the given quantity."
)
def mark_product_in_stock(
    product_id: int,
    quantity: Optional[int] = Query(None, description="New stock quantity, must be greater than 0"),
    store: ProductRepository = Depends(get_store)
):
    service = ProductService(store)
    try:
        return service.mark_in_stock(product_id, quantity)
    except ProductNotFoundError as e:
        raise _not_found(e)
    except ProductValidationError as e:
        raise _bad_request(e)
