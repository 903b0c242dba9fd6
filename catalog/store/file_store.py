"""
JSON file record store.

The whole collection and the id counter live in one document,
{"products": [...], "nextId": n}, rewritten in full on every mutation.
There is no cross-process locking: concurrent instances are last-write-wins
and a crash mid-write can leave a truncated file.
"""
import asyncio
import json
import os
from typing import Any, Dict, List

from catalog.errors import NotFoundError, StoreIOError, ValidationError
from catalog.logger import logger
from catalog.models.product import Product
from catalog.sentry import capture_store_io_error
from catalog.store.base import BaseStore
from catalog.store.seed import seed_rows


class JsonFileStore(BaseStore):
    """File-backed store; every call reads the document fresh from disk."""

    backend = "file"

    def __init__(self, path: str):
        self.path = path
        self._lock = asyncio.Lock()

    async def initialize(self):
        try:
            await self._load()
        except StoreIOError:
            logger.warning(f"File store at {self.path} is unreadable, serving an empty catalog")
            return
        logger.info(f"File store ready at {self.path}")

    # ------------------------------------------------------------------
    # Document I/O
    # ------------------------------------------------------------------

    def _seed_document(self) -> Dict[str, Any]:
        rows = seed_rows()
        return {"products": rows, "nextId": max(row["id"] for row in rows) + 1}

    def _read_document(self) -> Dict[str, Any]:
        if not os.path.exists(self.path):
            document = self._seed_document()
            self._write_document(document)
            logger.info(f"Database initialized with sample data at {self.path}")
            return document

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                document = json.load(f)
        except (OSError, ValueError) as e:
            raise StoreIOError(f"Failed to read {self.path}: {e}") from e

        if not isinstance(document, dict) or not isinstance(document.get("products"), list):
            raise StoreIOError(f"Malformed store document in {self.path}")

        # Hand-edited rows ("id": "1") are coerced so every path compares ints
        try:
            document["products"] = [Product.from_dict(row).to_dict() for row in document["products"]]
        except ValidationError as e:
            raise StoreIOError(f"Malformed product row in {self.path}: {e}") from e
        return document

    def _write_document(self, document: Dict[str, Any]):
        directory = os.path.dirname(self.path)
        try:
            text = json.dumps(document, indent=2)
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                f.write(text)
        except (OSError, TypeError, ValueError) as e:
            raise StoreIOError(f"Failed to write {self.path}: {e}") from e

    async def _load(self) -> Dict[str, Any]:
        try:
            return await asyncio.to_thread(self._read_document)
        except StoreIOError as e:
            logger.error(f"Store read failed: {e}")
            capture_store_io_error("read", self.path, str(e))
            raise

    async def _save(self, document: Dict[str, Any]):
        try:
            await asyncio.to_thread(self._write_document, document)
        except StoreIOError as e:
            logger.error(f"Store write failed: {e}")
            capture_store_io_error("write", self.path, str(e))
            raise

    async def _snapshot(self) -> List[Product]:
        """Read-only view; an unreadable file yields an empty collection."""
        try:
            document = await self._load()
        except StoreIOError:
            return []
        return [Product.from_dict(row) for row in document["products"]]

    @staticmethod
    def _find_index(document: Dict[str, Any], product_id: int) -> int:
        for index, row in enumerate(document["products"]):
            if row["id"] == product_id:
                return index
        raise NotFoundError(f"Product {product_id} not found")

    @staticmethod
    def _next_id(document: Dict[str, Any]) -> int:
        highest = max((row["id"] for row in document["products"]), default=0)
        try:
            counter = int(document.get("nextId", 1))
        except (TypeError, ValueError):
            counter = 1
        return max(counter, highest + 1)

    # ------------------------------------------------------------------
    # Store contract
    # ------------------------------------------------------------------

    async def insert(self, draft: Dict[str, Any]) -> Product:
        async with self._lock:
            document = await self._load()
            next_id = self._next_id(document)
            product = Product.from_draft(draft, next_id)
            document["products"].append(product.to_dict())
            document["nextId"] = next_id + 1
            await self._save(document)
        logger.info(f"Created product {product.id}")
        return product

    async def get(self, product_id: int) -> Product:
        for product in await self._snapshot():
            if product.id == product_id:
                return product
        raise NotFoundError(f"Product {product_id} not found")

    async def update(self, product_id: int, partial: Dict[str, Any]) -> Product:
        async with self._lock:
            document = await self._load()
            index = self._find_index(document, product_id)
            updated = Product.from_dict(document["products"][index]).apply_patch(partial)
            document["products"][index] = updated.to_dict()
            await self._save(document)
        logger.info(f"Updated product {product_id}")
        return updated

    async def delete(self, product_id: int) -> Product:
        async with self._lock:
            document = await self._load()
            index = self._find_index(document, product_id)
            removed = Product.from_dict(document["products"].pop(index))
            await self._save(document)
        logger.info(f"Deleted product {product_id}")
        return removed

    async def list_all(self) -> List[Product]:
        return await self._snapshot()
