"""
Pipeline - Run Pipeline

CLI entry point for building the static search index.
"""

import asyncio
import argparse
import logging
import sys
from datetime import datetime, timezone
from typing import Optional, List

from pydantic import ValidationError

from wiki_search.config import get_settings
from wiki_search.pipeline.loader import ContentLoader, ContentError
from wiki_search.pipeline.documents import DocumentBuilder
from wiki_search.pipeline.indexer import LunrIndexer, IndexBuildError


logger = logging.getLogger(__name__)


class PipelineRunner:
    """Orchestrates load → map → index → write."""

    def __init__(self, settings=None):
        self.settings = settings or get_settings()

        self.loader = ContentLoader(self.settings)
        self.builder = DocumentBuilder()
        self.indexer = LunrIndexer(self.settings)

    async def run(self) -> dict:
        """
        Rebuild the index wholesale from the content collections.

        Returns:
            Statistics dict

        Raises:
            ContentError: a collection is unreadable or malformed
            IndexBuildError: documents collide or artifacts cannot be written
        """
        logger.info("Building search index...")
        started = datetime.now(timezone.utc)

        content = await self.loader.load()
        documents = self.builder.build(content)
        payload, manifest = self.indexer.build(documents)
        self.indexer.write(payload, manifest)

        stats = {
            "documents": manifest.documents,
            "generated_at": manifest.generated_at,
            "index_file": str(self.settings.site.index_file),
            "manifest_file": str(self.settings.site.manifest_file),
            "elapsed_ms": int((datetime.now(timezone.utc) - started).total_seconds() * 1000),
        }
        logger.info(f"Search index generated with {manifest.documents} documents.")
        return stats


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Build the static search index and manifest from the wiki content"
    )
    parser.parse_args(argv)

    settings = get_settings()
    logging.basicConfig(level=getattr(logging, settings.log.level))

    runner = PipelineRunner(settings)

    try:
        asyncio.run(runner.run())
    except (ContentError, IndexBuildError, ValidationError) as e:
        logger.error(f"Failed to build search index: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
