"""
Retrieval — vector storage and diversity-aware semantic search.

The vector store sits behind a narrow interface so that neither the
ingestion orchestrator nor the query handler knows which DB backs it.

Public surface
--------------
- :class:`LegalSearchService` — query handler (embed, MMR search, dedupe).
- :class:`VectorStoreBase` — abstract backend.
- :class:`PineconeVectorStore` — default Pinecone backend.
- :class:`VectorRecord`, :class:`SearchParams`, :class:`SearchResult`,
  :class:`IngestionReport` — data models.
"""

from legal_search.retrieval.base import VectorStoreBase
from legal_search.retrieval.models import IngestionReport, SearchParams, SearchResult, VectorRecord
from legal_search.retrieval.retriever import LegalSearchService, deduplicate_by_title

__all__ = [
    "IngestionReport",
    "LegalSearchService",
    "PineconeVectorStore",
    "SearchParams",
    "SearchResult",
    "VectorRecord",
    "VectorStoreBase",
    "deduplicate_by_title",
]


def __getattr__(name: str):  # noqa: ANN001
    """Lazy-import PineconeVectorStore to avoid pulling in the SDK at import time."""
    if name == "PineconeVectorStore":
        from legal_search.retrieval.pinecone_store import PineconeVectorStore

        return PineconeVectorStore
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
