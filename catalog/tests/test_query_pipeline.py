"""
Test the listing query pipeline.
Filtering, stable sorting, aggregation and pagination over product snapshots.
"""
import math
import random
from itertools import permutations

import pytest

from catalog.errors import ValidationError
from catalog.models.product import Product
from catalog.models.query import QuerySpec
from catalog.query.pipeline import (
    SORT_FIELDS,
    execute,
    filter_products,
    paginate,
    sort_key_for,
    sort_products,
)
from catalog.store.seed import SEED_PRODUCTS, generate_random_products


@pytest.fixture
def products():
    return [Product.from_dict(row) for row in SEED_PRODUCTS]


def make_product(product_id, name="Item", category="Misc", price=1.0,
                 quantity=1, status="Active", day="2024-01-01"):
    return Product(
        id=product_id, name=name, category=category, price=price,
        quantity=quantity, status=status, date=day
    )


def test_default_spec_returns_first_page_in_id_order(products):
    result = execute(products, QuerySpec())
    
    assert [p.id for p in result.data] == list(range(1, 11))
    assert result.pagination.total_items == 10
    assert result.pagination.total_pages == 1


def test_search_is_case_insensitive_over_name_and_category(products):
    by_name = execute(products, QuerySpec(search="iphone"))
    by_category = execute(products, QuerySpec(search="BOOK"))
    
    assert [p.name for p in by_name.data] == ["iPhone 15 Pro"]
    assert {p.category for p in by_category.data} == {"Books"}
    assert by_category.pagination.total_items == 2


def test_search_does_not_look_at_status(products):
    result = execute(products, QuerySpec(search="inactive"))
    assert result.data == []


def test_category_and_status_filters_ignore_case(products):
    result = execute(products, QuerySpec(category="home", status="INACTIVE"))
    
    assert [p.name for p in result.data] == ["Vacuum Cleaner"]


def test_price_range_is_inclusive(products):
    result = execute(products, QuerySpec(min_price=29.99, max_price=159.99))
    prices = sorted(p.price for p in result.data)
    
    assert prices[0] == 29.99
    assert prices[-1] == 159.99
    assert all(29.99 <= p <= 159.99 for p in prices)


def test_electronics_by_price_desc(products):
    """Top two Electronics items by price, two per page."""
    spec = QuerySpec.from_params({
        "category": "Electronics", "sortBy": "price", "sortOrder": "desc",
        "page": "1", "limit": "2"
    })
    result = execute(products, spec)
    
    assert [p.name for p in result.data] == ["MacBook Air M3", "iPhone 15 Pro"]
    assert result.pagination.total_items == 3
    assert result.pagination.total_pages == math.ceil(3 / 2)


def test_page_out_of_range_is_empty_not_error(products):
    result = execute(products, QuerySpec(page=99, limit=10))
    
    assert result.data == []
    assert result.pagination.current_page == 99
    assert result.pagination.total_pages == 1
    assert result.pagination.total_items == 10


def test_no_matches_means_zero_pages_and_zero_aggregations(products):
    result = execute(products, QuerySpec(search="does-not-exist"))
    
    assert result.pagination.total_pages == 0
    assert result.aggregations.total_records == 0
    assert result.aggregations.avg_price == 0
    assert result.aggregations.max_price == 0
    assert result.aggregations.total_value == 0


def test_aggregations_cover_filtered_set_not_page(products):
    result = execute(products, QuerySpec(category="Electronics", limit=1))
    electronics = [p for p in products if p.category == "Electronics"]
    
    assert len(result.data) == 1
    assert result.aggregations.total_records == 3
    assert result.aggregations.avg_price == pytest.approx(
        sum(p.price for p in electronics) / 3
    )
    assert result.aggregations.max_price == 1299.99
    assert result.aggregations.total_value == pytest.approx(
        sum(p.price * p.quantity for p in electronics)
    )


@pytest.mark.parametrize("limit", [1, 3, 4, 7, 10, 25])
def test_pagination_bounds(limit):
    rows = generate_random_products(23, 1, random.Random(limit))
    records = [Product.from_dict(row) for row in rows]
    
    seen = []
    pages = math.ceil(len(records) / limit)
    for page in range(1, pages + 2):
        result = execute(records, QuerySpec(page=page, limit=limit))
        assert 0 <= len(result.data) <= limit
        assert result.pagination.total_pages == pages
        seen.extend(p.id for p in result.data)
    
    assert seen == [p.id for p in records]


def test_paginate_slices_from_offset():
    records = [make_product(i) for i in range(1, 8)]
    spec = QuerySpec(page=2, limit=3)
    
    assert [p.id for p in paginate(records, spec)] == [4, 5, 6]
    assert paginate(records, QuerySpec(page=4, limit=3)) == []


@pytest.mark.parametrize("descending", [False, True])
def test_sort_is_stable_in_both_directions(descending):
    records = [
        make_product(1, name="b", price=5.0),
        make_product(2, name="a", price=5.0),
        make_product(3, name="c", price=1.0),
        make_product(4, name="d", price=5.0),
        make_product(5, name="e", price=1.0),
    ]
    
    ordered = sort_products(records, "price", descending=descending)
    ids = [p.id for p in ordered]
    
    if descending:
        assert ids == [1, 2, 4, 3, 5]
    else:
        assert ids == [3, 5, 1, 2, 4]


def test_sort_strings_case_insensitively():
    records = [
        make_product(1, name="banana"),
        make_product(2, name="Apple"),
        make_product(3, name="cherry"),
    ]
    assert [p.name for p in sort_products(records, "name")] == ["Apple", "banana", "cherry"]


def test_sort_dates_as_calendar_dates():
    records = [
        make_product(1, day="2024-02-01"),
        make_product(2, day="2023-12-31"),
        make_product(3, day="2024-01-15"),
    ]
    assert [p.id for p in sort_products(records, "date")] == [2, 3, 1]


def test_sort_numbers_numerically():
    records = [make_product(i, quantity=q) for i, q in [(1, 100), (2, 9), (3, 20)]]
    assert [p.quantity for p in sort_products(records, "quantity", True)] == [100, 20, 9]


def test_every_record_field_has_a_comparator():
    assert set(SORT_FIELDS) == {"id", "name", "category", "price", "quantity", "status", "date"}


def test_unknown_sort_field_is_rejected():
    with pytest.raises(ValidationError):
        sort_key_for("__class__")


def test_filters_commute(products):
    spec = QuerySpec(category="electronics", status="active", min_price=500, max_price=1000)
    expected = {p.id for p in filter_products(products, spec)}
    
    stages = [
        QuerySpec(category=spec.category),
        QuerySpec(status=spec.status),
        QuerySpec(min_price=spec.min_price, max_price=spec.max_price),
    ]
    for order in permutations(stages):
        remaining = products
        for stage in order:
            remaining = filter_products(remaining, stage)
        assert {p.id for p in remaining} == expected
    
    assert expected == {1, 6}


def test_execute_does_not_mutate_input(products):
    snapshot = list(products)
    execute(products, QuerySpec(sort_by="price", sort_order="desc"))
    assert products == snapshot


def test_result_wire_shape(products):
    payload = execute(products, QuerySpec(limit=2)).to_dict()
    
    assert set(payload) == {"data", "pagination", "aggregations"}
    assert payload["pagination"] == {
        "currentPage": 1, "totalPages": 5, "totalItems": 10, "limit": 2
    }
    assert set(payload["aggregations"]) == {"totalRecords", "avgPrice", "totalValue", "maxPrice"}
    assert payload["data"][0]["id"] == 1
