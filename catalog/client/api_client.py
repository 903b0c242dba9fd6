"""
Client for the product catalog REST API.
Includes timeout handling, response validation and error translation.
All network logic is isolated here.
"""
import asyncio
import csv
import io
from typing import Any, Dict, Iterable, Optional

import aiohttp

from catalog.config import config
from catalog.errors import ApiClientError
from catalog.logger import logger

CSV_HEADERS = ["ID", "Name", "Category", "Price", "Quantity", "Status", "Date"]


class CatalogApiClient:
    """
    Wrapper for catalog API calls.
    UI state code never talks HTTP directly.
    """

    def __init__(self, base_url: Optional[str] = None):
        self.base_url = (base_url or config.API_BASE_URL).rstrip("/")
        self.session: Optional[aiohttp.ClientSession] = None

    async def initialize(self):
        """Create the HTTP session."""
        self.session = aiohttp.ClientSession(
            headers={"Content-Type": "application/json"},
            timeout=aiohttp.ClientTimeout(total=config.REQUEST_TIMEOUT)
        )
        logger.info(f"Catalog API client initialized for {self.base_url}")

    async def close(self):
        """Close HTTP session."""
        if self.session:
            await self.session.close()
            self.session = None

    async def _request(self, method: str, endpoint: str,
                       payload: Optional[Dict[str, Any]] = None,
                       params: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        """
        Send one request and return the decoded JSON body.

        Raises:
            ApiClientError: On non-2xx responses or connection failures
        """
        if self.session is None:
            await self.initialize()

        url = f"{self.base_url}{endpoint}"
        try:
            async with self.session.request(method, url, json=payload, params=params) as response:
                try:
                    body = await response.json(content_type=None)
                except ValueError:
                    body = None
                if not isinstance(body, dict):
                    body = {}

                if response.status >= 400:
                    message = body.get("error") or f"HTTP error! status: {response.status}"
                    raise ApiClientError(message, status=response.status)
                return body

        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"API request failed: {method} {url}: {e}")
            raise ApiClientError(f"Catalog API unreachable: {e}")

    async def health_check(self) -> Dict[str, Any]:
        return await self._request("GET", "/health")

    async def get_products(self, filters: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Fetch a page of products; empty filter values are not sent."""
        params = {
            key: str(value)
            for key, value in (filters or {}).items()
            if value is not None and value != ""
        }
        return await self._request("GET", "/products", params=params)

    async def get_product(self, product_id: int) -> Dict[str, Any]:
        return await self._request("GET", f"/products/{product_id}")

    async def create_product(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("POST", "/products", payload=data)

    async def update_product(self, product_id: int, data: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("PUT", f"/products/{product_id}", payload=data)

    async def delete_product(self, product_id: int) -> Dict[str, Any]:
        return await self._request("DELETE", f"/products/{product_id}")

    async def get_stats(self) -> Dict[str, Any]:
        return await self._request("GET", "/stats")

    @staticmethod
    def export_csv(rows: Iterable[Dict[str, Any]]) -> str:
        """Render product rows as CSV text with a header line."""
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(CSV_HEADERS)
        for row in rows:
            writer.writerow([
                row.get("id"),
                row.get("name"),
                row.get("category"),
                row.get("price"),
                row.get("quantity"),
                row.get("status"),
                row.get("date")
            ])
        return buffer.getvalue()
