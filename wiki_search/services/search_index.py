"""
Services - Search Index

Read-only, deserialized view of the published lunr index.
"""

from typing import Any, Dict, List, Sequence

from lunr.exceptions import BaseLunrException
from lunr.index import Index
from lunr.query import Query
from lunr.tokenizer import Tokenizer
from lunr.trimmer import trimmer

from wiki_search.pipeline.indexer import INDEX_FORMAT_VERSION, SEARCH_FIELDS
from wiki_search.schemas.search import SearchDocument, SearchResultHit


def query_terms(text: str) -> List[str]:
    """Split free text the way the index tokenized it, minus stemming."""
    tokens = Tokenizer(text)
    words = [trimmer(token, i, tokens).string for i, token in enumerate(tokens)]
    return [word for word in words if word]


class IndexLoadError(Exception):
    """The serialized index payload cannot be reconstructed."""


class SearchIndex:
    """Immutable queryable index reconstructed from its serialized form."""

    def __init__(self, index: Index, documents: Dict[str, SearchDocument]):
        self._index = index
        self._documents = documents

    @classmethod
    def load(cls, payload: Any) -> "SearchIndex":
        """
        Reconstruct an index from the `search-index.json` payload.

        Raises:
            IndexLoadError: payload is missing parts or cannot be loaded
        """
        if not isinstance(payload, dict):
            raise IndexLoadError("Search index payload must be a JSON object")
        version = payload.get("version")
        if version != INDEX_FORMAT_VERSION:
            raise IndexLoadError(f"Unsupported search index version: {version!r}")
        if "index" not in payload or "documents" not in payload:
            raise IndexLoadError("Search index payload is incomplete")

        try:
            index = Index.load(payload["index"])
            documents = {
                doc_id: SearchDocument.model_validate(raw)
                for doc_id, raw in payload["documents"].items()
            }
        except (BaseLunrException, KeyError, TypeError, ValueError, AttributeError) as e:
            raise IndexLoadError(f"Malformed search index: {e}") from e

        return cls(index, documents)

    def __len__(self) -> int:
        return len(self._documents)

    def search(
        self,
        term: str,
        limit: int = 8,
        properties: Sequence[str] = SEARCH_FIELDS,
    ) -> List[SearchResultHit]:
        """
        Run a lexical query over the given fields.

        The text is plain words, never lunr query syntax. Each word matches
        as a whole (stemmed, boosted) or as a prefix of an indexed term.
        Hits keep lunr's score order; equal scores stay in index order.
        """
        query = self._index.create_query(list(properties))
        for word in query_terms(term):
            query.term(word, boost=10)
            query.term(word, use_pipeline=False, wildcard=Query.WILDCARD_TRAILING)
        if not query.clauses:
            return []
        matches = self._index.query(query)

        hits = []
        for match in matches[:limit]:
            document = self._documents.get(match["ref"])
            if document is None:
                continue
            hits.append(SearchResultHit.from_document(document))
        return hits
