"""
Pipeline - Content Loader

Reads the JSON content collections and validates them into WikiContent.
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import ValidationError

from wiki_search.config import get_settings
from wiki_search.schemas.content import WikiContent


logger = logging.getLogger(__name__)


COLLECTIONS = (
    "identity",
    "about",
    "fields",
    "languages",
    "education",
    "awards",
    "repositories",
    "presence",
    "videos",
)


class ContentError(Exception):
    """A content collection could not be read or failed validation."""

    def __init__(self, collection: str, detail: str):
        self.collection = collection
        self.detail = detail
        super().__init__(f"{collection}: {detail}")


def _describe(error: ValidationError) -> str:
    issues = []
    for issue in error.errors():
        location = ".".join(str(part) for part in issue["loc"]) or "<root>"
        issues.append(f"{location}: {issue['msg']}")
    return "; ".join(issues)


class ContentLoader:
    """Loads every collection from the data directory."""

    def __init__(self, settings=None, data_dir: Optional[Path] = None):
        self.settings = settings or get_settings()
        self.data_dir = Path(data_dir or self.settings.site.data_dir)

    def _read(self, collection: str) -> Any:
        path = self.data_dir / f"{collection}.json"
        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ContentError(collection, f"cannot read {path}: {e}") from e
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise ContentError(collection, f"invalid JSON in {path}: {e}") from e

    async def load_raw(self) -> Dict[str, Any]:
        """Read all collections concurrently, returning the parsed JSON by name."""
        values = await asyncio.gather(
            *(asyncio.to_thread(self._read, name) for name in COLLECTIONS)
        )
        return dict(zip(COLLECTIONS, values))

    async def load(self) -> WikiContent:
        """
        Read and validate all collections.

        Returns:
            Validated WikiContent

        Raises:
            ContentError: on the first unreadable or malformed collection
        """
        raw = await self.load_raw()
        content = self.validate(raw)
        logger.info(f"Loaded {len(COLLECTIONS)} content collections from {self.data_dir}")
        return content

    @staticmethod
    def validate(raw: Dict[str, Any]) -> WikiContent:
        """Validate already-parsed collections."""
        for name in COLLECTIONS:
            field = WikiContent.model_fields[name]
            if name not in raw and field.is_required():
                raise ContentError(name, "collection missing")
        try:
            return WikiContent.model_validate(raw)
        except ValidationError as e:
            first = e.errors()[0]["loc"][0] if e.errors() else "content"
            raise ContentError(str(first), _describe(e)) from e
