"""
Pipeline Module - Index Builder

Handles the complete build-time flow from content collections to static files:
Load → Validate → Map to documents → Index → Write artifacts
"""

from wiki_search.pipeline.loader import ContentLoader, ContentError
from wiki_search.pipeline.documents import DocumentBuilder, keywords, slugify
from wiki_search.pipeline.indexer import LunrIndexer, IndexBuildError
from wiki_search.pipeline.run_pipeline import PipelineRunner

__all__ = [
    "ContentLoader",
    "ContentError",
    "DocumentBuilder",
    "keywords",
    "slugify",
    "LunrIndexer",
    "IndexBuildError",
    "PipelineRunner",
]
