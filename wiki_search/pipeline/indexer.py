"""
Pipeline - Indexer

Lunr index construction and transactional artifact writes.
"""

import json
import logging
import os
import tempfile
from collections import Counter
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from lunr import get_default_builder
from lunr.stop_word_filter import stop_word_filter

from wiki_search.config import get_settings
from wiki_search.schemas.search import SearchDocument, SearchManifest


logger = logging.getLogger(__name__)


INDEX_FORMAT_VERSION = 1
INDEX_REF = "id"
SEARCH_FIELDS = ("title", "description", "keywords")


class IndexBuildError(Exception):
    """The document set cannot be indexed or the artifacts cannot be written."""


def _index_row(document: SearchDocument) -> Dict[str, str]:
    return {
        INDEX_REF: document.id,
        "title": document.title,
        "description": document.description,
        "keywords": " ".join(document.keywords),
    }


class LunrIndexer:
    """Builds the serialized search index and its manifest."""

    def __init__(self, settings=None):
        self.settings = settings or get_settings()

    def check_documents(self, documents: List[SearchDocument]) -> None:
        """Reject duplicate ids before anything is built."""
        counts = Counter(document.id for document in documents)
        duplicates = sorted(doc_id for doc_id, count in counts.items() if count > 1)
        if duplicates:
            raise IndexBuildError(f"Duplicate document ids: {', '.join(duplicates)}")

    def build_payload(self, documents: List[SearchDocument]) -> Dict[str, Any]:
        """
        Build the serialized index payload.

        Args:
            documents: Documents to index

        Returns:
            Dict with format version, lunr index, and stored documents
        """
        self.check_documents(documents)

        index = self._build_index(documents)

        return {
            "version": INDEX_FORMAT_VERSION,
            "index": index.serialize(),
            "documents": {
                document.id: document.model_dump() for document in documents
            },
        }

    def _build_index(self, documents: List[SearchDocument]):
        # Trimmer and stemmer only: every title word must stay searchable.
        builder = get_default_builder()
        builder.pipeline.remove(stop_word_filter)
        builder.ref(INDEX_REF)
        for field in SEARCH_FIELDS:
            builder.field(field)
        for document in documents:
            builder.add(_index_row(document))
        return builder.build()

    def build(self, documents: List[SearchDocument]) -> Tuple[Dict[str, Any], SearchManifest]:
        """Build the index payload and a manifest counting the inserted documents."""
        payload = self.build_payload(documents)
        manifest = SearchManifest.now(documents=len(payload["documents"]))
        return payload, manifest

    def write(
        self,
        payload: Dict[str, Any],
        manifest: SearchManifest,
        index_file: Optional[Path] = None,
        manifest_file: Optional[Path] = None,
    ) -> None:
        """
        Write both artifacts, or neither.

        Both files are staged next to their targets, then moved into place.
        If the second move fails, the first target is rolled back.
        """
        index_file = Path(index_file or self.settings.site.index_file)
        manifest_file = Path(manifest_file or self.settings.site.manifest_file)

        artifacts = [
            (index_file, json.dumps(payload, ensure_ascii=False)),
            (
                manifest_file,
                json.dumps(manifest.model_dump(by_alias=True), indent=2),
            ),
        ]

        staged: List[Tuple[Path, str]] = []
        try:
            for target, text in artifacts:
                target.parent.mkdir(parents=True, exist_ok=True)
                fd, tmp = tempfile.mkstemp(
                    prefix=f".{target.name}.", suffix=".tmp", dir=target.parent
                )
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    fh.write(text)
                staged.append((target, tmp))
            self._commit(staged)
        except OSError as e:
            raise IndexBuildError(f"Failed to write search artifacts: {e}") from e
        finally:
            for _, tmp in staged:
                if os.path.exists(tmp):
                    os.unlink(tmp)

    def _commit(self, staged: List[Tuple[Path, str]]) -> None:
        backups: List[Tuple[Path, Optional[str]]] = []
        try:
            for target, tmp in staged:
                backup = None
                if target.exists():
                    backup = f"{tmp}.bak"
                    os.replace(target, backup)
                backups.append((target, backup))
                os.replace(tmp, target)
        except OSError:
            for target, backup in reversed(backups):
                if backup is not None:
                    os.replace(backup, target)
                elif target.exists():
                    target.unlink()
            raise
        for _, backup in backups:
            if backup is not None:
                os.unlink(backup)
