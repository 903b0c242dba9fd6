"""
Client-side table state.

Mirrors the query a table UI is showing (filters, sort, page) and keeps the
last rows, pagination and aggregations the API returned. Rendering is left
to the caller.
"""
from typing import Any, Dict, List, Optional

from catalog.client.api_client import CatalogApiClient
from catalog.errors import ApiClientError
from catalog.logger import logger

FILTER_NAMES = ("search", "category", "status", "minPrice", "maxPrice")
EXPORT_PAGE_SIZE = 100


class TableController:
    """
    Holds the current query and the latest results.

    Every fetch carries a request token. Only the response to the most
    recent request may update state; slower, older responses are dropped.
    """

    def __init__(self, client: CatalogApiClient, page_size: int = 10):
        self.client = client
        self.current_page = 1
        self.page_size = page_size
        self.sort_column: Optional[str] = None
        self.sort_direction = "asc"
        self.filter_options: Dict[str, str] = {name: "" for name in FILTER_NAMES}
        self.editing_id: Optional[int] = None

        self.rows: List[Dict[str, Any]] = []
        self.pagination: Dict[str, Any] = {}
        self.aggregations: Dict[str, Any] = {}
        self.category_options: List[str] = []
        self.status_options: List[str] = []

        self.is_loading = False
        self.error: Optional[str] = None
        self._request_seq = 0

    def query_params(self) -> Dict[str, Any]:
        """Query parameters for the current view."""
        params: Dict[str, Any] = dict(self.filter_options)
        params["page"] = self.current_page
        params["limit"] = self.page_size
        if self.sort_column:
            params["sortBy"] = self.sort_column
            params["sortOrder"] = self.sort_direction
        return params

    async def refresh(self) -> bool:
        """
        Fetch the current view.

        Returns:
            True if this response was applied, False if it failed or was
            superseded by a newer request
        """
        self._request_seq += 1
        token = self._request_seq
        self.is_loading = True

        try:
            response = await self.client.get_products(self.query_params())
        except ApiClientError as e:
            if token != self._request_seq:
                return False
            logger.warning(f"Failed to fetch products: {e}")
            self.is_loading = False
            self.error = f"Failed to fetch data from server: {e}"
            return False

        if token != self._request_seq:
            logger.debug(f"Discarding stale response for request {token}")
            return False

        self.rows = response.get("data", [])
        self.pagination = response.get("pagination", {})
        self.aggregations = response.get("aggregations", {})
        self.error = None
        self.is_loading = False
        return True

    async def retry(self) -> bool:
        """Manual retry after a failed fetch."""
        return await self.refresh()

    # ------------------------------------------------------------------
    # Filters, sorting and paging
    # ------------------------------------------------------------------

    async def set_filter(self, name: str, value: Any) -> bool:
        if name not in self.filter_options:
            raise ValueError(f"Unknown filter: {name}")
        self.filter_options[name] = "" if value is None else str(value)
        self.current_page = 1
        return await self.refresh()

    async def clear_search(self) -> bool:
        return await self.set_filter("search", "")

    async def sort_by(self, column: str) -> bool:
        """Toggle direction on the active column, otherwise sort ascending."""
        if self.sort_column == column:
            self.sort_direction = "desc" if self.sort_direction == "asc" else "asc"
        else:
            self.sort_column = column
            self.sort_direction = "asc"
        return await self.refresh()

    async def next_page(self) -> bool:
        total_pages = self.pagination.get("totalPages", 0)
        if self.is_loading or self.current_page >= total_pages:
            return False
        self.current_page += 1
        return await self.refresh()

    async def previous_page(self) -> bool:
        if self.is_loading or self.current_page <= 1:
            return False
        self.current_page -= 1
        return await self.refresh()

    async def set_page_size(self, page_size: int) -> bool:
        self.page_size = page_size
        self.current_page = 1
        return await self.refresh()

    async def populate_filter_options(self):
        """Load category and status choices from catalog stats."""
        try:
            response = await self.client.get_stats()
        except ApiClientError as e:
            logger.warning(f"Failed to load filter options: {e}")
            return
        stats = response.get("data", {})
        self.category_options = sorted(c["category"] for c in stats.get("categories", []))
        self.status_options = sorted(s["status"] for s in stats.get("statuses", []))

    # ------------------------------------------------------------------
    # Record editing
    # ------------------------------------------------------------------

    async def edit_record(self, product_id: int) -> Optional[Dict[str, Any]]:
        """Load a product for editing; the next save updates it."""
        try:
            response = await self.client.get_product(product_id)
        except ApiClientError as e:
            logger.warning(f"Failed to load product {product_id}: {e}")
            self.error = f"Failed to load record: {e}"
            return None
        self.editing_id = product_id
        return response["data"]

    async def save_record(self, data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Create a product, or update the one being edited.

        On failure the edit stays open, so the same save can be retried.
        """
        try:
            if self.editing_id is not None:
                response = await self.client.update_product(self.editing_id, data)
            else:
                response = await self.client.create_product(data)
        except ApiClientError as e:
            logger.warning(f"Failed to save product: {e}")
            self.error = f"Failed to save record: {e}"
            return None
        self.editing_id = None
        await self.refresh()
        return response["data"]

    async def delete_record(self, product_id: int) -> Optional[Dict[str, Any]]:
        try:
            response = await self.client.delete_product(product_id)
        except ApiClientError as e:
            logger.warning(f"Failed to delete product {product_id}: {e}")
            self.error = f"Failed to delete record: {e}"
            return None
        await self.refresh()
        return response["data"]

    async def bulk_create(self, rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """
        Create several products, then refresh the view once.

        Stops at the first rejected row; products created before it are kept
        and returned.
        """
        created: List[Dict[str, Any]] = []
        try:
            for row in rows:
                response = await self.client.create_product(row)
                created.append(response["data"])
        except ApiClientError as e:
            logger.warning(f"Bulk create stopped after {len(created)} of {len(rows)} products: {e}")
            await self.refresh()
            self.error = f"Failed to add records: {e}"
            return created
        logger.info(f"Bulk created {len(created)} products")
        await self.refresh()
        return created

    async def export_csv(self) -> Optional[str]:
        """CSV of every product matching the current filters and sort."""
        params = self.query_params()
        params["limit"] = EXPORT_PAGE_SIZE
        rows: List[Dict[str, Any]] = []
        page = 1
        try:
            while True:
                response = await self.client.get_products(dict(params, page=page))
                rows.extend(response.get("data", []))
                if page >= response.get("pagination", {}).get("totalPages", 0):
                    break
                page += 1
        except ApiClientError as e:
            logger.warning(f"Failed to export products: {e}")
            self.error = f"Failed to export data: {e}"
            return None
        return self.client.export_csv(rows)
