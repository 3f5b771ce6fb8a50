from datetime import date
from decimal import Decimal
import logging

from inventory.database import ProductRepository
from inventory.models.product import Product

logger = logging.getLogger(__name__)


# (name, category, unit price, expiration date, stock)
SAMPLE_PRODUCTS = [
    ("Wireless Earbuds", "Electronics", "129.99", None, 180),
    ("Bluetooth Speaker", "Electronics", "79.50", None, 95),
    ("Leather Wallet", "Clothing", "45.00", None, 120),
    ("Baseball Cap", "Clothing", "22.99", None, 5),
    ("Wool Scarf", "Clothing", "35.75", None, 85),
    ("Dark Chocolate Bar", "Food", "4.99", date(2026, 4, 30), 4),
    ("Almond Butter Jar", "Food", "9.25", date(2027, 7, 19), 110),
    ("Samsung Galaxy Tablet", "Electronics", "450.00", None, 70),
    ("Noise Cancelling Headphones", "Electronics", "299.95", None, 40),
    ("Gaming Mouse", "Electronics", "89.99", None, 0),
    ("External SSD 1TB", "Electronics", "120.00", None, 5),
    ("Running Shorts", "Clothing", "34.50", None, 130),
    ("Leather Belt", "Clothing", "39.95", None, 100),
    ("Organic Pasta 500g", "Food", "3.75", date(2026, 9, 15), 11),
    ("Maple Syrup 250ml", "Food", "14.99", date(2027, 5, 20), 85),
    ("Mechanical Keyboard", "Electronics", "110.25", None, 65),
    ("Action Camera", "Electronics", "230.00", None, 45),
    ("Cotton Socks 3-Pack", "Clothing", "15.00", None, 300),
    ("Granola Cereal", "Food", "5.50", date(2026, 11, 10), 0),
    ("Canned Iced Coffee", "Food", "2.99", date(2027, 1, 30), 500),
    ("Webcam 1080p", "Electronics", "65.80", None, 10),
    ("Knit Sweater", "Clothing", "68.00", None, 60),
    ("Swim Trunks", "Clothing", "42.99", None, 110),
    ("Frozen Berries 400g", "Food", "8.25", date(2025, 12, 1), 140),
    ("Peanut Butter 1kg", "Food", "11.49", date(2026, 6, 18), 1),
    ("Fitness Tracker", "Electronics", "89.00", None, 125),
]


def seed_products(store: ProductRepository) -> int:
    """
    Load the sample catalog into an empty store.

    Products are saved directly, without validation, so the catalog may
    contain already-expired items.

    Returns:
        Number of products inserted (0 if the store was not empty)
    """
    if store.count() > 0:
        logger.info("Store already contains products, skipping seed data")
        return 0

    for name, category, price, expiration_date, stock in SAMPLE_PRODUCTS:
        store.save(Product(
            name=name,
            category=category,
            unit_price=Decimal(price),
            expiration_date=expiration_date,
            stock=stock,
        ))

    logger.info(f"Seeded {len(SAMPLE_PRODUCTS)} sample products")
    return len(SAMPLE_PRODUCTS)
