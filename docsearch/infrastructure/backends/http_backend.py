import logging
from typing import Optional

import httpx

from docsearch.core.errors import QueryExecutionError
from docsearch.core.models.search import (
    SearchAnalytics,
    SearchFilters,
    SearchHit,
    SearchResponse,
)

logger = logging.getLogger(__name__)


class HttpSearchBackend:
    """Backend delegating queries to a remote search API."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize HTTP backend.

        Args:
            base_url: API root, e.g. http://localhost:8080.
            timeout: Request timeout in seconds.
            client: Preconfigured client, mainly for tests.
        """
        self._search_url = f"{base_url.rstrip('/')}/api/search"
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def search(
        self, query: str, filters: Optional[SearchFilters] = None
    ) -> SearchResponse:
        payload = {"query": query, **(filters or SearchFilters()).to_payload()}
        try:
            resp = await self._client.post(self._search_url, json=payload)
        except httpx.HTTPError as e:
            logger.error(f"Search request failed: {e}")
            raise QueryExecutionError(f"Search request failed: {e}", query=query) from e

        if resp.status_code != 200:
            raise QueryExecutionError(
                f"Search failed with status {resp.status_code}", query=query
            )

        try:
            data = resp.json()
            hits = [SearchHit.from_dict(item) for item in data.get("results", [])]
            analytics = (
                SearchAnalytics.from_dict(data["analytics"])
                if data.get("analytics")
                else None
            )
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            raise QueryExecutionError(f"Malformed search response: {e}", query=query) from e

        return SearchResponse(hits=hits, analytics=analytics)

    async def aclose(self) -> None:
        await self._client.aclose()
