"""Domain models for vector records, search parameters and ingestion outcomes."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class VectorRecord(BaseModel):
    """A chunk embedding ready to be upserted.

    Attributes
    ----------
    id:
        Identifier, unique within the target index.
    values:
        The embedding vector.
    metadata:
        Flat metadata mapping; carries the chunk text under ``"text"``.
    """

    id: str
    values: list[float]
    metadata: dict[str, Any] = Field(default_factory=dict)

    def to_pinecone(self) -> dict[str, Any]:
        return {"id": self.id, "values": self.values, "metadata": self.metadata}


class SearchParams(BaseModel):
    """Max-marginal-relevance search parameters.

    Attributes
    ----------
    k:
        Number of results returned.
    fetch_k:
        Size of the candidate pool fetched before diversity re-selection.
    lambda_mult:
        Trade-off between relevance (1.0) and diversity (0.0).
    """

    k: int = Field(default=20, gt=0)
    fetch_k: int = Field(default=100, gt=0)
    lambda_mult: float = Field(default=0.5, ge=0.0, le=1.0)


class SearchResult(BaseModel):
    """A single retrieved chunk: its text and its metadata."""

    page_content: str
    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def title(self) -> Any:
        return self.metadata.get("title")


class IngestionReport(BaseModel):
    """Summary of one ingestion run.

    ``failed_batches`` lists the 1-based numbers of the batches whose
    embedding or upsert failed. A failed batch may be partly indexed when an
    upsert group after the first one failed; ``vectors_upserted`` counts only
    the groups that were stored.
    """

    index_name: str
    skipped: bool = False
    documents_found: int = 0
    documents_valid: int = 0
    chunks: int = 0
    batches_total: int = 0
    failed_batches: list[int] = Field(default_factory=list)
    vectors_upserted: int = 0

    @property
    def complete(self) -> bool:
        return not self.failed_batches
