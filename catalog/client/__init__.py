"""
Client side of the catalog: API wrapper and table state.
"""

from catalog.client.api_client import CatalogApiClient
from catalog.client.controller import TableController

__all__ = [
    'CatalogApiClient',
    'TableController'
]
