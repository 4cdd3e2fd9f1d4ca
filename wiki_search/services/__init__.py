"""
Services Module - Query Client

Provides the deserialized index, artifact fetching, caching, and the
per-session search lifecycle.
"""

from wiki_search.services.search_index import SearchIndex, IndexLoadError
from wiki_search.services.cache_service import CacheService
from wiki_search.services.fetch_service import FetchService
from wiki_search.services.url_state import UrlState
from wiki_search.services.formatting import format_timestamp, index_info, filter_suggestions
from wiki_search.services.search_service import SearchSession, CancelToken, search

__all__ = [
    "SearchIndex",
    "IndexLoadError",
    "CacheService",
    "FetchService",
    "UrlState",
    "format_timestamp",
    "index_info",
    "filter_suggestions",
    "SearchSession",
    "CancelToken",
    "search",
]
