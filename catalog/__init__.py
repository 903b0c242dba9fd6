"""
Product Catalog - CRUD product API with search, filters, sorting and aggregations.
"""

__version__ = "1.0.0"
__author__ = "Engineering Team"

# Export main components for easy import
from catalog.config import config
from catalog.logger import logger
from catalog.errors import (
    ConfigError,
    ValidationError,
    NotFoundError,
    StoreIOError,
    ApiClientError
)

__all__ = [
    'config',
    'logger',
    'ConfigError',
    'ValidationError',
    'NotFoundError',
    'StoreIOError',
    'ApiClientError'
]
