"""Tests for product filtering, sorting and pagination."""
from datetime import date
from decimal import Decimal

from inventory.models.product import Product
from inventory.services.product_query import (
    PageRequest,
    ProductFilter,
    SortOrder,
    compute_metrics,
    filter_products,
    paginate,
    parse_sort,
    query_products,
    sort_products,
)


def product(id, name, category="Food", price="1.00", stock=1, expiration_date=None):
    return Product(
        id=id,
        name=name,
        category=category,
        unit_price=Decimal(price),
        expiration_date=expiration_date,
        stock=stock,
    )


CATALOG = [
    product(1, "Rice", "Food", "2.50", 0, date(2027, 1, 1)),
    product(2, "Laptop", "Electronics", "999.99", 5),
    product(3, "Product Name", "Misc", "10.00", 12, date(2026, 12, 1)),
]


def names(products):
    return [p.name for p in products]


def test_name_filter_is_case_insensitive_substring():
    for text in ("name", "NAME", "Nam"):
        assert names(filter_products(CATALOG, ProductFilter(name=text))) == ["Product Name"]


def test_category_filter_is_case_insensitive_substring():
    assert names(filter_products(CATALOG, ProductFilter(category="ELEC"))) == ["Laptop"]


def test_empty_filters_match_everything():
    assert len(filter_products(CATALOG, ProductFilter(name="", category=""))) == 3


def test_stock_filter():
    in_stock = filter_products(CATALOG, ProductFilter(in_stock=True))
    out_of_stock = filter_products(CATALOG, ProductFilter(in_stock=False))

    assert names(in_stock) == ["Laptop", "Product Name"]
    assert names(out_of_stock) == ["Rice"]
    assert len(filter_products(CATALOG, ProductFilter())) == 3


def test_filters_combine():
    criteria = ProductFilter(name="a", category="food", in_stock=False)
    assert names(filter_products(CATALOG, criteria)) == []

    criteria = ProductFilter(name="i", in_stock=True)
    assert names(filter_products(CATALOG, criteria)) == []

    criteria = ProductFilter(name="r", in_stock=True)
    assert names(filter_products(CATALOG, criteria)) == ["Product Name"]


def test_sort_by_name():
    ascending = sort_products(CATALOG, [SortOrder("name")])
    descending = sort_products(CATALOG, [SortOrder("name", descending=True)])

    assert names(ascending) == ["Laptop", "Product Name", "Rice"]
    assert names(descending) == ["Rice", "Product Name", "Laptop"]


def test_sort_by_price_and_stock():
    assert names(sort_products(CATALOG, [SortOrder("unitPrice")])) == ["Rice", "Product Name", "Laptop"]
    assert names(sort_products(CATALOG, [SortOrder("stock", True)])) == ["Product Name", "Laptop", "Rice"]


def test_expiration_date_nulls_last_in_both_directions():
    ascending = sort_products(CATALOG, [SortOrder("expirationDate")])
    descending = sort_products(CATALOG, [SortOrder("expiration_date", True)])

    assert names(ascending) == ["Product Name", "Rice", "Laptop"]
    assert names(descending) == ["Rice", "Product Name", "Laptop"]


def test_secondary_key_breaks_ties():
    items = [
        product(1, "B", "Food", "3.00"),
        product(2, "A", "Tools", "1.00"),
        product(3, "C", "Food", "2.00"),
    ]

    result = sort_products(items, [SortOrder("category"), SortOrder("unitPrice", True)])

    assert names(result) == ["B", "C", "A"]


def test_unknown_sort_field_is_ignored():
    assert names(sort_products(CATALOG, [SortOrder("color")])) == names(CATALOG)

    result = sort_products(CATALOG, [SortOrder("color"), SortOrder("name")])
    assert names(result) == ["Laptop", "Product Name", "Rice"]


def test_no_sort_keeps_order():
    assert names(sort_products(CATALOG, [])) == names(CATALOG)


def test_paginate():
    items = list(range(25))

    assert paginate(items, 0, 10) == list(range(10))
    assert paginate(items, 2, 10) == [20, 21, 22, 23, 24]
    assert paginate(items, 3, 10) == []
    assert paginate(items, 7, 10) == []


def test_query_reports_total_for_out_of_range_page():
    page, total = query_products(CATALOG, ProductFilter(), PageRequest(page=0, size=10))
    assert len(page) == 3
    assert total == 3

    page, total = query_products(CATALOG, ProductFilter(), PageRequest(page=5, size=10))
    assert page == []
    assert total == 3


def test_query_sorts_before_paginating():
    page, total = query_products(
        CATALOG,
        ProductFilter(),
        PageRequest(page=1, size=2, sort=(SortOrder("name"),)),
    )

    assert names(page) == ["Rice"]
    assert total == 3


def test_parse_sort():
    assert parse_sort(None) == ()
    assert parse_sort(["name"]) == (SortOrder("name", False),)
    assert parse_sort(["name,desc", "stock,ASC"]) == (
        SortOrder("name", True),
        SortOrder("stock", False),
    )
    assert parse_sort(["category,unitPrice,desc"]) == (
        SortOrder("category", True),
        SortOrder("unitPrice", True),
    )
    assert parse_sort([""]) == ()


def test_compute_metrics():
    overall, by_category = compute_metrics([
        product(1, "Rice", "Food", "2.50", 0),
        product(2, "Beans", "Food", "1.25", 4),
        product(3, "Laptop", "Electronics", "999.99", 2),
    ])

    assert overall.total_in_stock == 6
    assert overall.total_value == Decimal("2004.98")
    assert overall.average_price == Decimal("500.62")

    assert list(by_category) == ["Electronics", "Food"]
    assert by_category["Food"].total_in_stock == 4
    assert by_category["Food"].total_value == Decimal("5.00")
    assert by_category["Food"].average_price == Decimal("1.25")


def test_compute_metrics_without_stock():
    overall, by_category = compute_metrics([product(1, "Rice", stock=0)])

    assert overall.total_in_stock == 0
    assert overall.average_price == Decimal("0.00")
    assert by_category["Food"].total_value == Decimal("0.00")
