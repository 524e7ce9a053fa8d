"""Query handler: embed a query, run an MMR search, deduplicate by title.

Usage::

    from legal_search.retrieval.retriever import LegalSearchService

    service = LegalSearchService()
    for result in service.search("breach of contract"):
        print(result.metadata.get("title"), result.page_content[:80])
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from legal_search.config import Settings, settings as default_settings
from legal_search.exceptions import InvalidRequestError, SearchError
from legal_search.retrieval.base import VectorStoreBase
from legal_search.retrieval.models import SearchParams, SearchResult

if TYPE_CHECKING:
    from langchain_core.embeddings import Embeddings

logger = logging.getLogger(__name__)


def deduplicate_by_title(results: Iterable[SearchResult]) -> list[SearchResult]:
    """Drop every result whose title was already seen, keeping first-seen order.

    A missing title is a title of its own: only the first untitled result is
    kept, so the output never holds two results with the same title.
    """
    seen: set[Any] = set()
    unique: list[SearchResult] = []
    for result in results:
        title = result.title
        if title in seen:
            continue
        seen.add(title)
        unique.append(result)
    return unique


class LegalSearchService:
    """High-level search entry point over a :class:`VectorStoreBase`.

    Parameters
    ----------
    config:
        Settings naming the index and the fixed MMR parameters.
    store:
        Vector-store backend; a :class:`PineconeVectorStore` when omitted.
    embeddings:
        Query-side embeddings; the Voyage model when omitted.
    """

    def __init__(
        self,
        config: Settings | None = None,
        *,
        store: VectorStoreBase | None = None,
        embeddings: Embeddings | None = None,
    ) -> None:
        self._settings = config or default_settings
        self._settings.require("pinecone_index")
        if store is None:
            from legal_search.retrieval.pinecone_store import PineconeVectorStore

            store = PineconeVectorStore(self._settings)
        if embeddings is None:
            from legal_search.ingestion.embedder import get_embedding_function

            embeddings = get_embedding_function(self._settings)
        self._store = store
        self._embeddings = embeddings
        self.params = SearchParams(
            k=self._settings.search_k,
            fetch_k=self._settings.search_fetch_k,
            lambda_mult=self._settings.search_lambda,
        )

    @property
    def index_name(self) -> str:
        return self._settings.pinecone_index

    def search(self, query: str | None) -> list[SearchResult]:
        """Run a diversity-aware search for *query*.

        Raises
        ------
        InvalidRequestError
            When *query* is missing or blank.
        SearchError
            When the embeddings provider or the vector store fails.
        """
        if not query or not query.strip():
            raise InvalidRequestError("Query is required")

        logger.info("Searching for query: %s", query)
        try:
            embedding = self._embeddings.embed_query(query)
            raw_hits = self._store.similarity_search(self.index_name, embedding, self.params)
        except Exception as exc:
            logger.exception("Error searching for query %r", query)
            raise SearchError() from exc

        results = deduplicate_by_title(self._to_results(raw_hits))
        logger.info("Query returned %d results (%d before deduplication)", len(results), len(raw_hits))
        return results

    # -- internals ------------------------------------------------------------

    @staticmethod
    def _to_results(raw_hits: list[dict[str, Any]]) -> list[SearchResult]:
        return [
            SearchResult(page_content=hit.get("content", ""), metadata=hit.get("metadata", {}))
            for hit in raw_hits
        ]
