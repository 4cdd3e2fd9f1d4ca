"""
Schemas - Content Models

Pydantic models for the wiki's JSON content collections.
"""

from pydantic import AfterValidator, AnyHttpUrl, BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel
from typing import Annotated, List, Literal, Optional


_http_url = TypeAdapter(AnyHttpUrl)


def _check_url(value: str) -> str:
    # Validate without normalising; the original text is what gets indexed.
    _http_url.validate_python(value)
    return value


HttpUrlStr = Annotated[str, AfterValidator(_check_url)]


class ContentModel(BaseModel):
    """Base for collection records (camelCase JSON keys)."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Identity(ContentModel):
    full_name: str
    preferred_name: str
    location: str
    birth_date: str
    pronouns: str
    motto: str


class About(ContentModel):
    headline: str
    paragraphs: List[str]
    identity_focus: List[str]


class Language(ContentModel):
    language: str
    proficiency: str
    notes: str


class EducationEntry(ContentModel):
    stage: str
    institution: str
    years: str
    notes: str


class Award(ContentModel):
    year: int
    field: str
    title: str
    detail: str


class Repository(ContentModel):
    slug: str
    name: str
    repo: str
    summary: str
    stack: List[str] = []
    topics: List[str] = []
    stars: Optional[int] = None
    last_updated: Optional[str] = None
    preview_url: Optional[str] = None


class SocialHandle(ContentModel):
    handle: str
    url: HttpUrlStr
    title: Optional[str] = None


class Presence(ContentModel):
    github: SocialHandle
    youtube: SocialHandle
    instagram: List[SocialHandle]
    wikipedia_draft: Optional[SocialHandle] = None


class Video(ContentModel):
    slug: str
    title: str
    platform: Literal["YouTube"]
    video_id: str
    url: HttpUrlStr


class WikiContent(ContentModel):
    """All collections the search index is built from."""
    identity: Identity
    about: About
    fields: List[str]
    languages: List[Language]
    education: List[EducationEntry]
    awards: List[Award]
    repositories: List[Repository]
    presence: Presence
    videos: List[Video] = Field(default_factory=list)
