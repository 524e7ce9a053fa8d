"""Abstract base class for vector-store backends.

Adding a new backend only requires subclassing :class:`VectorStoreBase`
and implementing the abstract methods.  The orchestrator and the query
handler only ever talk to this interface, so tests can substitute an
in-memory fake for the managed store.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from legal_search.retrieval.models import SearchParams, VectorRecord


class VectorStoreBase(ABC):
    """Backend-agnostic vector-store interface.

    Every method takes the index name explicitly: one store client serves
    both the index named in the settings and any index an ingest request
    targets.
    """

    # -- required overrides ---------------------------------------------------

    @abstractmethod
    def create_index_if_necessary(self, index_name: str) -> None:
        """Create *index_name* if it does not exist yet."""
        ...

    @abstractmethod
    def index_has_vectors(self, index_name: str) -> bool:
        """Return ``True`` when *index_name* already holds at least one vector."""
        ...

    @abstractmethod
    def upsert(self, index_name: str, records: list[VectorRecord]) -> None:
        """Insert or overwrite *records* (keyed by id) in a single call."""
        ...

    @abstractmethod
    def similarity_search(
        self,
        index_name: str,
        query_embedding: list[float],
        params: SearchParams,
    ) -> list[dict[str, Any]]:
        """Return up to ``params.k`` diverse results close to *query_embedding*.

        Each result dict **must** contain at least:

        * ``"id"`` – chunk identifier
        * ``"content"`` – the chunk text
        * ``"score"`` – similarity score (higher = more similar)
        * ``"metadata"`` – associated metadata dict, without the text
        """
        ...

    # -- optional overrides ---------------------------------------------------

    def health_check(self) -> bool:
        """Return ``True`` when the backend is reachable.  Optional."""
        return True
