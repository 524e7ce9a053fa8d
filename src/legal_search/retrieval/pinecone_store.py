"""Pinecone implementation of the vector-store abstraction."""

from __future__ import annotations

import logging
from typing import Any

import numpy as np
from langchain_community.vectorstores.utils import maximal_marginal_relevance
from pinecone import Pinecone, ServerlessSpec

from legal_search.config import Settings, settings as default_settings
from legal_search.retrieval.base import VectorStoreBase
from legal_search.retrieval.models import SearchParams, VectorRecord

logger = logging.getLogger(__name__)

TEXT_KEY = "text"


class PineconeVectorStore(VectorStoreBase):
    """Pinecone-backed vector store.

    Parameters
    ----------
    config:
        Settings carrying the API key and the serverless index spec used
        when an index has to be created.
    client:
        Pre-built ``Pinecone`` client; built from *config* when omitted.
    """

    def __init__(self, config: Settings | None = None, *, client: Any = None) -> None:
        self._settings = config or default_settings
        if client is None:
            self._settings.require("pinecone_api_key")
            client = Pinecone(api_key=self._settings.pinecone_api_key)
        self._client = client
        self._indexes: dict[str, Any] = {}

    def _index(self, index_name: str) -> Any:
        if index_name not in self._indexes:
            self._indexes[index_name] = self._client.Index(index_name)
        return self._indexes[index_name]

    # -- VectorStoreBase overrides --------------------------------------------

    def create_index_if_necessary(self, index_name: str) -> None:
        if index_name in self._client.list_indexes().names():
            return
        logger.info(
            "Creating Pinecone index %s (dimension=%d, metric=%s)",
            index_name,
            self._settings.pinecone_dimension,
            self._settings.pinecone_metric,
        )
        self._client.create_index(
            name=index_name,
            dimension=self._settings.pinecone_dimension,
            metric=self._settings.pinecone_metric,
            spec=ServerlessSpec(
                cloud=self._settings.pinecone_cloud,
                region=self._settings.pinecone_region,
            ),
        )

    def index_has_vectors(self, index_name: str) -> bool:
        stats = self._index(index_name).describe_index_stats()
        return (stats.total_vector_count or 0) > 0

    def upsert(self, index_name: str, records: list[VectorRecord]) -> None:
        if not records:
            return
        self._index(index_name).upsert(vectors=[r.to_pinecone() for r in records])

    def similarity_search(
        self,
        index_name: str,
        query_embedding: list[float],
        params: SearchParams,
    ) -> list[dict[str, Any]]:
        response = self._index(index_name).query(
            vector=query_embedding,
            top_k=params.fetch_k,
            include_values=True,
            include_metadata=True,
        )
        matches = list(response.matches or [])
        if not matches:
            return []

        # Re-select the candidate pool for diversity.
        selected = maximal_marginal_relevance(
            np.array(query_embedding, dtype=np.float32),
            [match.values for match in matches],
            lambda_mult=params.lambda_mult,
            k=params.k,
        )

        hits: list[dict[str, Any]] = []
        for i in selected:
            match = matches[i]
            metadata = dict(match.metadata or {})
            content = metadata.pop(TEXT_KEY, "")
            hits.append(
                {
                    "id": match.id,
                    "content": content,
                    "score": match.score,
                    "metadata": metadata,
                }
            )
        return hits

    def health_check(self) -> bool:
        try:
            self._client.list_indexes()
            return True
        except Exception:
            logger.warning("Pinecone health-check failed", exc_info=True)
            return False
