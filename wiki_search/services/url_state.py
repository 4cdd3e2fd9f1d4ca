"""
Services - URL State

Mirrors the current query into the `q` parameter of the page URL.
"""

from typing import List, Optional

import httpx


QUERY_PARAM = "q"


class UrlState:
    """
    Current page location with replace-only updates.

    Replacing never appends to `history`, so typing does not create
    navigation entries; `navigate` is the only call that does.
    """

    def __init__(self, url: str):
        self._url = httpx.URL(url)
        self.history: List[str] = [str(self._url)]

    @property
    def url(self) -> str:
        return str(self._url)

    def initial_query(self) -> Optional[str]:
        """The `q` parameter present at mount time, if any."""
        return self._url.params.get(QUERY_PARAM) or None

    def reflect_query(self, query: str) -> None:
        trimmed = query.strip()
        if trimmed:
            url = self._url.copy_set_param(QUERY_PARAM, trimmed)
        else:
            url = self._url.copy_remove_param(QUERY_PARAM)
        self._replace(url)

    def _replace(self, url: httpx.URL) -> None:
        self._url = url
        self.history[-1] = str(url)

    def navigate(self, route: str) -> None:
        """Follow a site route (path with optional fragment)."""
        self._url = self._url.join(route)
        self.history.append(str(self._url))
