"""
Services - Formatting

Display helpers for the manifest line and the suggestion list.
"""

from datetime import datetime
from typing import List, Optional

from wiki_search.schemas.search import SearchManifest


def format_timestamp(value: Optional[str]) -> str:
    """Render an ISO-8601 stamp as e.g. "18 Oct 2026, 10:39"; "" if unusable."""
    if not value:
        return ""
    try:
        stamp = datetime.fromisoformat(value.replace("Z", "+00:00")).astimezone()
        return f"{stamp.day} {stamp:%b %Y, %H:%M}"
    except (TypeError, ValueError, AttributeError):
        return ""


def index_info(manifest: Optional[SearchManifest]) -> Optional[str]:
    if manifest is None:
        return None
    return f"{manifest.documents} docs · {format_timestamp(manifest.generated_at)}"


def filter_suggestions(query: str, suggestions: List[str], limit: int = 6) -> List[str]:
    """First `limit` suggestions containing the query, case-insensitively."""
    if not query.strip():
        return suggestions[:limit]
    lower = query.lower()
    return [item for item in suggestions if lower in item.lower()][:limit]
