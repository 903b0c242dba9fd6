"""
Listing queries and statistics over product snapshots.
"""

from catalog.query.pipeline import execute, filter_products, sort_products, SORT_FIELDS
from catalog.query.stats import compute_stats

__all__ = [
    'execute',
    'filter_products',
    'sort_products',
    'SORT_FIELDS',
    'compute_stats'
]
