"""
Schemas - Search Models

Pydantic models for indexed documents, results, and the session surface.
"""

from pydantic import BaseModel, Field, field_validator
from typing import List, Literal, Optional
from datetime import datetime, timezone


class SearchDocument(BaseModel):
    """Single indexed unit of content."""
    id: str
    type: str
    title: str
    description: str = ""
    route: str
    badges: List[str] = []
    keywords: List[str] = []

    @field_validator("title", "route")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value


class SearchResultHit(BaseModel):
    """Display projection of a matched document (keywords are never surfaced)."""
    id: str
    type: str
    title: str
    description: str
    route: str
    badges: List[str] = []

    @classmethod
    def from_document(cls, document: SearchDocument) -> "SearchResultHit":
        return cls(
            id=document.id,
            type=document.type,
            title=document.title,
            description=document.description,
            route=document.route,
            badges=list(document.badges),
        )


class SearchManifest(BaseModel):
    """Metadata shipped alongside the serialized index."""
    generated_at: str = Field(alias="generatedAt")
    documents: int = Field(ge=0)

    model_config = {"populate_by_name": True}

    @classmethod
    def now(cls, documents: int) -> "SearchManifest":
        stamp = datetime.now(timezone.utc).isoformat(timespec="milliseconds")
        stamp = stamp.replace("+00:00", "Z")
        return cls(generated_at=stamp, documents=documents)


class SearchQuery(BaseModel):
    """Search query input."""
    term: str
    limit: int = Field(default=8, ge=1, le=50)
    properties: List[Literal["title", "description", "keywords"]] = [
        "title",
        "description",
        "keywords",
    ]


class QuickLink(BaseModel):
    label: str
    href: str
    badge: Optional[str] = None


class PanelConfig(BaseModel):
    """Static display lists supplied by the hosting page."""
    quicklinks: List[QuickLink] = []
    suggestions: List[str] = []


SessionStatus = Literal["loading", "ready", "error"]


class SearchPanelState(BaseModel):
    """Snapshot emitted to the hosting UI."""
    status: SessionStatus
    query: str = ""
    results: List[SearchResultHit] = []
    manifest: Optional[SearchManifest] = None
    is_searching: bool = False
