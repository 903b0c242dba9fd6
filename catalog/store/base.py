"""
Record store contract shared by every persistence backend.
"""
from typing import Any, Dict, List

from catalog.models.product import Product


class BaseStore:
    """
    Owns the product collection and the id counter.
    Ids come from a monotonic counter and are never reused.
    """

    backend = "base"

    async def initialize(self):
        pass

    async def close(self):
        pass

    async def insert(self, draft: Dict[str, Any]) -> Product:
        raise NotImplementedError

    async def get(self, product_id: int) -> Product:
        raise NotImplementedError

    async def update(self, product_id: int, partial: Dict[str, Any]) -> Product:
        raise NotImplementedError

    async def delete(self, product_id: int) -> Product:
        raise NotImplementedError

    async def list_all(self) -> List[Product]:
        raise NotImplementedError
