"""
Services - Fetch Service

Fetches the published search artifacts over HTTP with caching.
"""

from typing import Any, Optional
import logging

import httpx

from wiki_search.config import get_settings
from wiki_search.schemas.search import SearchManifest
from wiki_search.services.cache_service import CacheService
from wiki_search.services.search_index import SearchIndex


logger = logging.getLogger(__name__)


class FetchService:
    """Loads `search-index.json` and `search-manifest.json` from the site origin."""

    def __init__(
        self,
        settings=None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        cache: Optional[CacheService] = None,
    ):
        self.settings = settings or get_settings()
        self.transport = transport
        self.cache = cache or CacheService(self.settings)

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.settings.site.base_url,
            timeout=self.settings.search.fetch_timeout,
            transport=self.transport,
        )

    async def fetch_json(self, path: str) -> Any:
        """
        Fetch and decode a JSON artifact, serving repeats from cache.

        Raises:
            httpx.HTTPError: network failure or non-2xx status
            ValueError: body is not valid JSON
        """
        async with self._client() as client:
            url = str(client.base_url.join(path))
            cached = self.cache.get(url)
            if cached is not None:
                return cached

            response = await client.get(path)
            response.raise_for_status()
            data = response.json()

        self.cache.set(url, data)
        return data

    async def fetch_index(self) -> SearchIndex:
        """
        Fetch and deserialize the search index.

        Raises:
            httpx.HTTPError: network failure or non-2xx status
            ValueError: body is not valid JSON
            IndexLoadError: payload cannot be reconstructed
        """
        payload = await self.fetch_json(self.settings.site.index_path)
        index = SearchIndex.load(payload)
        logger.debug(f"Loaded search index with {len(index)} documents")
        return index

    async def fetch_manifest(self) -> Optional[SearchManifest]:
        """Fetch the manifest; None when it is missing or malformed."""
        try:
            data = await self.fetch_json(self.settings.site.manifest_path)
            return SearchManifest.model_validate(data)
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Search manifest unavailable: {e}")
            return None
