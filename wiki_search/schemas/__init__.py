"""
Schemas Module - Pydantic Models

Data models for content collections, search documents, and results.
"""

from wiki_search.schemas.content import (
    About,
    Award,
    EducationEntry,
    Identity,
    Language,
    Presence,
    Repository,
    SocialHandle,
    Video,
    WikiContent,
)
from wiki_search.schemas.search import (
    PanelConfig,
    QuickLink,
    SearchDocument,
    SearchManifest,
    SearchPanelState,
    SearchQuery,
    SearchResultHit,
)

__all__ = [
    "About",
    "Award",
    "EducationEntry",
    "Identity",
    "Language",
    "Presence",
    "Repository",
    "SocialHandle",
    "Video",
    "WikiContent",
    "PanelConfig",
    "QuickLink",
    "SearchDocument",
    "SearchManifest",
    "SearchPanelState",
    "SearchQuery",
    "SearchResultHit",
]
