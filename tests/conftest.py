"""
Shared fixtures: a small content set, built documents, and a served index.
"""

import copy
import json

import httpx
import pytest

from wiki_search.config import CacheSettings, SearchSettings, Settings, SiteSettings
from wiki_search.pipeline.documents import DocumentBuilder
from wiki_search.pipeline.indexer import LunrIndexer
from wiki_search.pipeline.loader import ContentLoader


SAMPLE_CONTENT = {
    "identity": {
        "fullName": "Ada Example",
        "preferredName": "Ada",
        "location": "Porto",
        "birthDate": "2003-05-01",
        "pronouns": "she/her",
        "motto": "Measure twice",
    },
    "about": {
        "headline": "Engineer and physicist",
        "paragraphs": ["Builds renderers.", "Mentors olympiad teams."],
        "identityFocus": ["physics", "mentoring"],
    },
    "fields": ["Machine Learning!", "Astronomy"],
    "languages": [
        {"language": "Portuguese", "proficiency": "Native", "notes": "Home"},
    ],
    "education": [
        {"stage": "Secondary", "institution": "Liceu Central", "years": "2015-2021", "notes": ""},
    ],
    "awards": [
        {"year": 2020, "field": "Physics", "title": "Gold Medal", "detail": "National olympiad"},
    ],
    "repositories": [
        {
            "slug": "foo",
            "name": "Foo Engine",
            "repo": "ada/foo",
            "summary": "",
            "stack": [],
            "topics": ["foo", "engine", "graphics"],
            "stars": None,
            "lastUpdated": None,
            "previewUrl": None,
        },
    ],
    "presence": {
        "github": {"handle": "ada", "url": "https://github.com/ada"},
        "youtube": {"handle": "@ada", "url": "https://www.youtube.com/@ada"},
        "instagram": [
            {"handle": "ada", "url": "https://www.instagram.com/ada"},
            {"handle": "ada.art", "url": "https://www.instagram.com/ada.art"},
        ],
    },
    "videos": [
        {
            "slug": "talk",
            "title": "Telescope talk",
            "platform": "YouTube",
            "videoId": "abc123",
            "url": "https://www.youtube.com/watch?v=abc123",
        },
    ],
}

# identity+motto, 2 paragraphs, 2 fields, 1 language, 1 education, 1 award,
# 1 repository, 1 video, github + 2 instagram + youtube
SAMPLE_DOCUMENT_COUNT = 2 + 2 + 2 + 1 + 1 + 1 + 1 + 1 + 4


@pytest.fixture
def sample_content():
    return copy.deepcopy(SAMPLE_CONTENT)


@pytest.fixture
def data_dir(tmp_path, sample_content):
    directory = tmp_path / "data"
    directory.mkdir()
    for name, value in sample_content.items():
        (directory / f"{name}.json").write_text(json.dumps(value), encoding="utf-8")
    return directory


@pytest.fixture
def settings(tmp_path, data_dir):
    return Settings(
        site=SiteSettings(
            WIKI_DATA_DIR=str(data_dir),
            WIKI_OUTPUT_DIR=str(tmp_path / "public"),
            WIKI_BASE_URL="http://wiki.test",
        ),
        search=SearchSettings(SEARCH_DEBOUNCE_MS=20),
        cache=CacheSettings(CACHE_ENABLED=True),
    )


@pytest.fixture
def documents(sample_content):
    content = ContentLoader.validate(sample_content)
    return DocumentBuilder().build(content)


@pytest.fixture
def index_artifacts(settings, documents):
    """Index payload and manifest exactly as they would be published."""
    payload, manifest = LunrIndexer(settings).build(documents)
    return (
        json.loads(json.dumps(payload)),
        manifest.model_dump(by_alias=True),
    )


class ArtifactServer:
    """Serves the artifacts through httpx.MockTransport and records requests."""

    def __init__(self, payload, manifest, index_status=200, manifest_status=200):
        self.payload = payload
        self.manifest = manifest
        self.index_status = index_status
        self.manifest_status = manifest_status
        self.requests = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request.url.path)
        if request.url.path == "/search-index.json":
            if self.index_status != 200:
                return httpx.Response(self.index_status)
            if isinstance(self.payload, str):
                return httpx.Response(200, text=self.payload)
            return httpx.Response(200, json=self.payload)
        if request.url.path == "/search-manifest.json":
            if self.manifest_status != 200:
                return httpx.Response(self.manifest_status)
            return httpx.Response(200, json=self.manifest)
        return httpx.Response(404)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def server(index_artifacts):
    payload, manifest = index_artifacts
    return ArtifactServer(payload, manifest)
