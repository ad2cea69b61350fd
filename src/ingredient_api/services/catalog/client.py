"""
TheMealDB ingredient listing client.

API Documentation: https://www.themealdb.com/api.php
"""

import logging
from typing import Any

import httpx

from ingredient_api.core.exceptions import CatalogUnavailable
from ingredient_api.models import CatalogEntry

logger = logging.getLogger(__name__)


class CatalogClient:
    """Fetches the full reference ingredient list."""

    LIST_PATH = "/list.php"

    def __init__(
        self,
        base_url: str = "https://www.themealdb.com/api/json/v1/1",
        timeout: float = 10.0,
    ) -> None:
        """
        Initialize the catalog client.

        Args:
            base_url: API base URL
            timeout: Request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(self.timeout),
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    @staticmethod
    def _parse_entry(item: dict[str, Any]) -> CatalogEntry | None:
        name = item.get("strIngredient")
        if not isinstance(name, str) or not name.strip():
            return None
        entry_type = item.get("strType")
        return CatalogEntry(
            id=str(item.get("idIngredient", "")),
            canonical_name=name.strip(),
            type=entry_type if isinstance(entry_type, str) and entry_type.strip() else None,
        )

    async def fetch_all(self) -> list[CatalogEntry]:
        """
        Fetch every catalog ingredient.

        Raises:
            CatalogUnavailable: On transport errors, non-2xx, or malformed bodies
        """
        client = await self._get_client()
        logger.info("Fetching ingredient catalog")

        try:
            response = await client.get(self.LIST_PATH, params={"i": "list"})
        except httpx.RequestError as e:
            raise CatalogUnavailable(f"Failed to connect to catalog: {e}") from e

        if not response.is_success:
            raise CatalogUnavailable(
                f"Catalog API error: {response.status_code}",
                details={"status_code": response.status_code},
            )

        try:
            items = response.json().get("meals") or []
        except (ValueError, AttributeError) as e:
            raise CatalogUnavailable("Catalog returned a malformed body") from e

        entries = []
        for item in items:
            if not isinstance(item, dict):
                continue
            entry = self._parse_entry(item)
            if entry is not None:
                entries.append(entry)
        logger.info(f"Fetched {len(entries)} catalog ingredients")
        return entries

    async def health_check(self) -> bool:
        """Check if the catalog listing endpoint answers."""
        try:
            client = await self._get_client()
            response = await client.get(
                self.LIST_PATH, params={"i": "list"}, timeout=httpx.Timeout(5.0)
            )
            return response.is_success
        except Exception as e:
            logger.error(f"Catalog health check failed: {e}")
            return False
