"""
Process-memory record store.
Contents reset on restart.
"""
import asyncio
import random
from typing import Any, Dict, List, Optional

from catalog.errors import NotFoundError
from catalog.logger import logger
from catalog.models.product import Product
from catalog.store.base import BaseStore
from catalog.store.seed import generate_random_products, seed_rows


class InMemoryStore(BaseStore):
    """Keeps products in a dict keyed by id; dict order is insertion order."""

    backend = "memory"

    def __init__(self, seed: bool = True, filler_rows: int = 0,
                 rng: Optional[random.Random] = None):
        self._products: Dict[int, Product] = {}
        self.next_id = 1
        self._lock = asyncio.Lock()

        if seed:
            rows = seed_rows()
            rows += generate_random_products(filler_rows, len(rows) + 1, rng)
            for row in rows:
                product = Product.from_dict(row)
                self._products[product.id] = product
            self.next_id = max(self._products, default=0) + 1

    async def initialize(self):
        logger.info(f"In-memory store ready with {len(self._products)} products")

    async def insert(self, draft: Dict[str, Any]) -> Product:
        async with self._lock:
            product = Product.from_draft(draft, self.next_id)
            self._products[product.id] = product
            self.next_id += 1
        logger.info(f"Created product {product.id}")
        return product

    async def get(self, product_id: int) -> Product:
        try:
            return self._products[product_id]
        except KeyError:
            raise NotFoundError(f"Product {product_id} not found")

    async def update(self, product_id: int, partial: Dict[str, Any]) -> Product:
        async with self._lock:
            current = await self.get(product_id)
            updated = current.apply_patch(partial)
            self._products[product_id] = updated
        logger.info(f"Updated product {product_id}")
        return updated

    async def delete(self, product_id: int) -> Product:
        async with self._lock:
            product = await self.get(product_id)
            del self._products[product_id]
        logger.info(f"Deleted product {product_id}")
        return product

    async def list_all(self) -> List[Product]:
        return list(self._products.values())
