"""
Catalog-wide statistics for the stats endpoint.
"""
from typing import Any, Dict, Iterable, List

from catalog.models.product import Product


def compute_stats(records: Iterable[Product]) -> Dict[str, Any]:
    """Group counts and stock value by category and status, in first-seen order."""
    products: List[Product] = list(records)

    categories: Dict[str, Dict[str, Any]] = {}
    statuses: Dict[str, Dict[str, Any]] = {}
    for product in products:
        bucket = categories.setdefault(
            product.category,
            {"category": product.category, "count": 0, "totalValue": 0.0}
        )
        bucket["count"] += 1
        bucket["totalValue"] += product.value

        statuses.setdefault(product.status, {"status": product.status, "count": 0})
        statuses[product.status]["count"] += 1

    prices = [p.price for p in products]
    return {
        "totalProducts": len(products),
        "categories": list(categories.values()),
        "statuses": list(statuses.values()),
        "priceRange": {
            "min": min(prices) if prices else 0,
            "max": max(prices) if prices else 0
        }
    }
