"""
Services - Search Service

Per-session search lifecycle: one-time index bootstrap, debounced and
cancellable lookups, result shaping, and URL reflection of the query.
"""

import asyncio
import logging
from typing import Callable, List, Optional, Sequence

from wiki_search.config import get_settings
from wiki_search.pipeline.indexer import SEARCH_FIELDS
from wiki_search.schemas.search import (
    PanelConfig,
    SearchManifest,
    SearchPanelState,
    SearchQuery,
    SearchResultHit,
    SessionStatus,
)
from wiki_search.services.fetch_service import FetchService
from wiki_search.services.formatting import filter_suggestions, index_info
from wiki_search.services.search_index import SearchIndex
from wiki_search.services.url_state import UrlState


logger = logging.getLogger(__name__)

Listener = Callable[[SearchPanelState], None]


async def search(
    index: SearchIndex,
    term: str,
    limit: int = 8,
    properties: Sequence[str] = SEARCH_FIELDS,
) -> List[SearchResultHit]:
    """
    Run one ranked lookup against an explicitly owned index.

    Args:
        index: Loaded search index
        term: Free-form query text
        limit: Maximum hits (1-50)
        properties: Fields to match against

    Returns:
        Hits in index score order
    """
    if not term.strip():
        return []
    query = SearchQuery(term=term.strip(), limit=limit, properties=list(properties))
    return index.search(query.term, limit=query.limit, properties=query.properties)


class CancelToken:
    """Flag checked after every suspension point before state is committed."""

    __slots__ = ("cancelled",)

    def __init__(self):
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class SearchSession:
    """
    Search state for one page session.

    Status moves `loading` → `ready` or `loading` → `error`, never back.
    Query activity only toggles `is_searching`; a failed lookup is logged and
    shows as zero results. After `close()` no listener is called and no
    visible attribute changes.
    """

    def __init__(
        self,
        config: Optional[PanelConfig] = None,
        settings=None,
        fetcher: Optional[FetchService] = None,
        url: Optional[UrlState] = None,
        navigator: Optional[Callable[[str], None]] = None,
    ):
        self.settings = settings or get_settings()
        self.config = config or PanelConfig()
        self.fetcher = fetcher or FetchService(self.settings)
        self.url = url or UrlState(self.settings.site.base_url)
        self.navigator = navigator or self.url.navigate

        self.status: SessionStatus = "loading"
        self.query = ""
        self.results: List[SearchResultHit] = []
        self.manifest: Optional[SearchManifest] = None
        self.is_searching = False
        self.index: Optional[SearchIndex] = None

        self._listeners: List[Listener] = []
        self._session_token = CancelToken()
        self._search_token: Optional[CancelToken] = None
        self._search_task: Optional[asyncio.Task] = None
        self._bootstrap_task: Optional[asyncio.Task] = None

    async def __aenter__(self) -> "SearchSession":
        self.mount()
        return self

    async def __aexit__(self, *exc) -> None:
        await self.close()

    @property
    def closed(self) -> bool:
        return self._session_token.cancelled

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a state listener; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def snapshot(self) -> SearchPanelState:
        return SearchPanelState(
            status=self.status,
            query=self.query,
            results=list(self.results),
            manifest=self.manifest,
            is_searching=self.is_searching,
        )

    def _emit(self) -> None:
        if self.closed:
            return
        state = self.snapshot()
        for listener in list(self._listeners):
            listener(state)

    def mount(self) -> None:
        """
        Seed the query from the URL and start fetching the index.

        Must be called from within a running event loop.
        """
        if self._bootstrap_task is not None:
            return
        initial = self.url.initial_query()
        if initial:
            self.set_query(initial)
        self._bootstrap_task = asyncio.create_task(self._bootstrap())

    async def wait_ready(self) -> SessionStatus:
        """Wait for bootstrap to finish and return the resulting status."""
        if self._bootstrap_task is not None:
            await asyncio.gather(self._bootstrap_task, return_exceptions=True)
        return self.status

    async def settle(self) -> None:
        """Wait until the pending lookup, if any, has finished."""
        while self._search_task is not None and not self._search_task.done():
            task = self._search_task
            await asyncio.gather(task, return_exceptions=True)

    async def _bootstrap(self) -> None:
        token = self._session_token
        try:
            index = await self.fetcher.fetch_index()
        except Exception:
            if not token.cancelled:
                logger.exception("Failed to bootstrap search")
                self.status = "error"
                self._emit()
            return

        if token.cancelled:
            return

        self.index = index
        self.status = "ready"
        self._schedule()
        self._emit()

        manifest = await self.fetcher.fetch_manifest()
        if token.cancelled or manifest is None:
            return
        self.manifest = manifest
        self._emit()

    def set_query(self, text: str) -> None:
        """Accept new input; the lookup runs once input is stable."""
        if self.closed:
            return
        self.query = text
        self.url.reflect_query(text)
        self._schedule()
        self._emit()

    def clear(self) -> None:
        self.set_query("")

    def _cancel_pending(self) -> Optional[asyncio.Task]:
        task = self._search_task
        if self._search_token is not None:
            self._search_token.cancel()
        if task is not None and not task.done():
            task.cancel()
        self._search_token = None
        self._search_task = None
        return task

    def _schedule(self) -> None:
        self._cancel_pending()

        trimmed = self.query.strip()
        if not trimmed:
            self.results = []
            self.is_searching = False
            return

        if self.status != "ready":
            return

        self.is_searching = True
        token = CancelToken()
        self._search_token = token
        self._search_task = asyncio.create_task(self._run_search(trimmed, token))

    async def _run_search(self, term: str, token: CancelToken) -> None:
        try:
            await asyncio.sleep(self.settings.search.debounce_ms / 1000)
            if token.cancelled or self.index is None:
                return

            hits = await search(self.index, term, limit=self.settings.search.limit)
            if token.cancelled:
                return
            self.results = hits
        except Exception:
            if not token.cancelled:
                logger.exception("Search query failed")
                self.results = []
        finally:
            if not token.cancelled:
                self.is_searching = False
                self._emit()

    def submit(self) -> Optional[str]:
        """Navigate to the top-ranked result; no-op without results."""
        if not self.results:
            return None
        route = self.results[0].route
        self.navigator(route)
        return route

    def filtered_suggestions(self) -> List[str]:
        return filter_suggestions(
            self.query,
            self.config.suggestions,
            limit=self.settings.search.suggestion_limit,
        )

    def index_info(self) -> Optional[str]:
        return index_info(self.manifest)

    async def close(self) -> None:
        """Tear down the session; in-flight work can no longer touch state."""
        self._session_token.cancel()
        pending = [self._cancel_pending(), self._bootstrap_task]
        pending = [task for task in pending if task is not None and not task.done()]
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)
