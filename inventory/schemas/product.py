from pydantic import BaseModel, Field, ConfigDict
from datetime import date
from decimal import Decimal
from typing import Optional

from inventory.models.product import Product


class ProductBase(BaseModel):
    """
    Base schema for Product with common attributes.

    Field constraints are enforced by the service so that every violation
    is reported together.
    """
    name: Optional[str] = Field(None, description="Product name")
    category: Optional[str] = Field(None, description="Product category")
    unit_price: Optional[Decimal] = Field(None, description="Unit price (must be greater than 0.01)")
    expiration_date: Optional[date] = Field(None, description="Expiration date (not in the past)")
    stock: Optional[int] = Field(None, description="Available stock (must be non-negative)")

    def to_product(self) -> Product:
        return Product(**self.model_dump())


class ProductCreate(ProductBase):
    """Schema for creating a new product."""
    pass


class ProductUpdate(ProductBase):
    """Schema for updating a product. Every mutable field is replaced."""
    pass


class ProductResponse(BaseModel):
    """Schema for product response including all fields."""
    id: int
    name: str
    category: str
    unit_price: float
    expiration_date: Optional[date] = None
    stock: int
    creation_date: date
    update_date: date

    model_config = ConfigDict(from_attributes=True)


class ProductListResponse(BaseModel):
    """Schema for paginated product list response."""
    items: list[ProductResponse]
    total: int
    page: int
    size: int
    total_pages: int


class StockMetricsResponse(BaseModel):
    """Stock summary for a group of products."""
    total_in_stock: int
    total_value: float
    average_price: float

    model_config = ConfigDict(from_attributes=True)


class InventoryMetricsResponse(BaseModel):
    """Overall and per-category stock metrics."""
    overall: StockMetricsResponse
    by_category: dict[str, StockMetricsResponse]
