"""
Query spec and result contracts for product listing.
"""
import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from catalog.config import config
from catalog.models.product import Product

SORTABLE_FIELDS = ("id", "name", "category", "price", "quantity", "status", "date")


@dataclass(frozen=True)
class QuerySpec:
    """Search, filter, sort and pagination parameters for one read request."""
    search: str = ""
    category: str = ""
    status: str = ""
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    sort_by: str = "id"
    sort_order: str = "asc"
    page: int = 1
    limit: int = 10

    @property
    def descending(self) -> bool:
        return self.sort_order == "desc"

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> "QuerySpec":
        """
        Build a spec from raw query parameters.

        Parsing never fails: bad numbers fall back to defaults (or to no
        bound for prices), page is clamped to 1 and limit to the configured
        page size range.

        A limit above MAX_PAGE_SIZE is capped, so the limit reported in
        pagination metadata may be smaller than the one requested.
        """
        default_limit = config.DEFAULT_PAGE_SIZE

        page = _parse_int(params.get("page"))
        if page is None or page < 1:
            page = 1

        limit = _parse_int(params.get("limit"))
        if limit is None or limit < 1:
            limit = default_limit
        limit = min(limit, config.MAX_PAGE_SIZE)

        sort_by = _text(params.get("sortBy")) or "id"
        if sort_by not in SORTABLE_FIELDS:
            sort_by = "id"

        sort_order = _text(params.get("sortOrder")).lower()
        if sort_order != "desc":
            sort_order = "asc"

        return cls(
            search=_text(params.get("search")),
            category=_text(params.get("category")),
            status=_text(params.get("status")),
            min_price=_parse_float(params.get("minPrice")),
            max_price=_parse_float(params.get("maxPrice")),
            sort_by=sort_by,
            sort_order=sort_order,
            page=page,
            limit=limit
        )


@dataclass(frozen=True)
class Pagination:
    current_page: int
    total_pages: int
    total_items: int
    limit: int

    @classmethod
    def compute(cls, total_items: int, page: int, limit: int) -> "Pagination":
        total_pages = math.ceil(total_items / limit) if total_items else 0
        return cls(
            current_page=page,
            total_pages=total_pages,
            total_items=total_items,
            limit=limit
        )

    def to_dict(self) -> Dict[str, int]:
        return {
            "currentPage": self.current_page,
            "totalPages": self.total_pages,
            "totalItems": self.total_items,
            "limit": self.limit
        }


@dataclass(frozen=True)
class Aggregations:
    """Summary statistics over a filtered (not paginated) product set."""
    total_records: int = 0
    avg_price: float = 0.0
    total_value: float = 0.0
    max_price: float = 0.0

    @classmethod
    def compute(cls, products: List[Product]) -> "Aggregations":
        if not products:
            return cls()
        prices = [p.price for p in products]
        return cls(
            total_records=len(products),
            avg_price=sum(prices) / len(prices),
            total_value=sum(p.value for p in products),
            max_price=max(prices)
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalRecords": self.total_records,
            "avgPrice": self.avg_price,
            "totalValue": self.total_value,
            "maxPrice": self.max_price
        }


@dataclass(frozen=True)
class QueryResult:
    data: List[Product] = field(default_factory=list)
    pagination: Pagination = None
    aggregations: Aggregations = field(default_factory=Aggregations)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "data": [p.to_dict() for p in self.data],
            "pagination": self.pagination.to_dict(),
            "aggregations": self.aggregations.to_dict()
        }


def _text(raw: Any) -> str:
    if raw is None:
        return ""
    return str(raw).strip()


def _parse_int(raw: Any) -> Optional[int]:
    text = _text(raw)
    if not text:
        return None
    try:
        return int(text)
    except ValueError:
        pass
    # "2.0" style values are accepted, "abc" is not
    try:
        number = float(text)
    except ValueError:
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return int(number)


def _parse_float(raw: Any) -> Optional[float]:
    text = _text(raw)
    if not text:
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    if math.isnan(number):
        return None
    return number
