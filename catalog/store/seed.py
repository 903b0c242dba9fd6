"""
Sample catalog rows used to seed new stores.
"""
import random
from datetime import date
from typing import Any, Dict, List, Optional

SEED_PRODUCTS: List[Dict[str, Any]] = [
    {"id": 1, "name": "iPhone 15 Pro", "category": "Electronics", "price": 999.99,
     "quantity": 50, "status": "Active", "date": "2024-01-15"},
    {"id": 2, "name": "MacBook Air M3", "category": "Electronics", "price": 1299.99,
     "quantity": 25, "status": "Active", "date": "2024-01-20"},
    {"id": 3, "name": "Nike Air Max", "category": "Clothing", "price": 159.99,
     "quantity": 100, "status": "Active", "date": "2024-01-12"},
    {"id": 4, "name": "The Great Gatsby", "category": "Books", "price": 12.99,
     "quantity": 200, "status": "Active", "date": "2024-01-08"},
    {"id": 5, "name": "Coffee Maker", "category": "Home", "price": 89.99,
     "quantity": 30, "status": "Active", "date": "2024-01-22"},
    {"id": 6, "name": "Samsung Galaxy S24", "category": "Electronics", "price": 799.99,
     "quantity": 75, "status": "Active", "date": "2024-01-18"},
    {"id": 7, "name": "Adidas T-Shirt", "category": "Clothing", "price": 29.99,
     "quantity": 150, "status": "Active", "date": "2024-01-14"},
    {"id": 8, "name": "JavaScript Guide", "category": "Books", "price": 45.99,
     "quantity": 80, "status": "Active", "date": "2024-01-10"},
    {"id": 9, "name": "Vacuum Cleaner", "category": "Home", "price": 199.99,
     "quantity": 20, "status": "Inactive", "date": "2024-01-05"},
    {"id": 10, "name": "Tennis Racket", "category": "Sports", "price": 129.99,
     "quantity": 40, "status": "Active", "date": "2024-01-25"},
]

CATEGORIES = ["Electronics", "Clothing", "Books", "Home", "Sports"]
STATUSES = ["Active", "Inactive", "Discontinued"]


def seed_rows() -> List[Dict[str, Any]]:
    """Fresh copies of the fixed seed rows."""
    return [dict(row) for row in SEED_PRODUCTS]


def generate_random_products(count: int, start_id: int,
                             rng: Optional[random.Random] = None) -> List[Dict[str, Any]]:
    """
    Generate filler rows with ids start_id .. start_id + count - 1.

    Pass a seeded random.Random for reproducible rows.
    """
    rng = rng or random.Random()
    rows = []
    for product_id in range(start_id, start_id + count):
        rows.append({
            "id": product_id,
            "name": f"Sample Product {product_id}",
            "category": rng.choice(CATEGORIES),
            "price": round(rng.uniform(10, 2010), 2),
            "quantity": rng.randint(1, 200),
            "status": rng.choice(STATUSES),
            "date": date(2024, 1, rng.randint(1, 30)).isoformat()
        })
    return rows
