from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional


@dataclass
class Product:
    """
    Product record kept by the in-memory store.

    Attributes:
        id: Unique identifier, assigned by the store on first save
        name: Product name
        category: Product category
        unit_price: Unit price (must be greater than 0.01)
        expiration_date: Optional expiration date (not in the past)
        stock: Available quantity (must be non-negative)
        creation_date: Date the product was first saved
        update_date: Date the product was last saved
    """
    name: Optional[str] = None
    category: Optional[str] = None
    unit_price: Optional[Decimal] = None
    expiration_date: Optional[date] = None
    stock: Optional[int] = None
    id: Optional[int] = None
    creation_date: Optional[date] = None
    update_date: Optional[date] = None

    def __repr__(self):
        return f"<Product(id={self.id}, name='{self.name}', stock={self.stock})>"
