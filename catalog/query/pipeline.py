"""
Query pipeline for product listings.
Pure function of (records, spec): filter, sort, aggregate, paginate.
"""
from datetime import date
from typing import Any, Callable, Dict, Iterable, List

from catalog.errors import ValidationError
from catalog.models.product import Product
from catalog.models.query import Aggregations, Pagination, QueryResult, QuerySpec

# Fields the free-text search looks at
SEARCH_FIELDS = ("name", "category")


def _numeric(value: Any) -> float:
    return float(value)


def _calendar_date(value: Any) -> date:
    return date.fromisoformat(str(value))


def _casefolded(value: Any) -> str:
    return str(value).casefold()


# Comparison semantics per sortable field
SORT_FIELDS: Dict[str, Callable[[Any], Any]] = {
    "id": _numeric,
    "price": _numeric,
    "quantity": _numeric,
    "date": _calendar_date,
    "name": _casefolded,
    "category": _casefolded,
    "status": _casefolded,
}


def sort_key_for(field_name: str) -> Callable[[Product], Any]:
    """Return the sort key for a field, rejecting unknown fields."""
    try:
        convert = SORT_FIELDS[field_name]
    except KeyError:
        raise ValidationError(f"Cannot sort by unknown field '{field_name}'")
    return lambda product: convert(getattr(product, field_name))


def matches_search(product: Product, term: str) -> bool:
    needle = term.casefold()
    return any(needle in getattr(product, name).casefold() for name in SEARCH_FIELDS)


def filter_products(records: Iterable[Product], spec: QuerySpec) -> List[Product]:
    """Apply search, category, status and price filters in that order."""
    products = list(records)

    if spec.search:
        products = [p for p in products if matches_search(p, spec.search)]

    if spec.category:
        category = spec.category.casefold()
        products = [p for p in products if p.category.casefold() == category]

    if spec.status:
        status = spec.status.casefold()
        products = [p for p in products if p.status.casefold() == status]

    if spec.min_price is not None:
        products = [p for p in products if p.price >= spec.min_price]
    if spec.max_price is not None:
        products = [p for p in products if p.price <= spec.max_price]

    return products


def sort_products(products: List[Product], sort_by: str = "id",
                  descending: bool = False) -> List[Product]:
    """
    Stable sort by one field.

    sorted(reverse=True) keeps equal elements in their original order,
    so ties resolve the same way in both directions.
    """
    return sorted(products, key=sort_key_for(sort_by), reverse=descending)


def paginate(products: List[Product], spec: QuerySpec) -> List[Product]:
    return products[spec.offset:spec.offset + spec.limit]


def execute(records: Iterable[Product], spec: QuerySpec) -> QueryResult:
    """
    Run a listing query.

    Args:
        records: Full product snapshot, in store order
        spec: Parsed query parameters

    Returns:
        The requested page plus pagination metadata and aggregations
        computed over every filtered product
    """
    filtered = filter_products(records, spec)
    ordered = sort_products(filtered, spec.sort_by, spec.descending)

    return QueryResult(
        data=paginate(ordered, spec),
        pagination=Pagination.compute(len(ordered), spec.page, spec.limit),
        aggregations=Aggregations.compute(ordered)
    )
