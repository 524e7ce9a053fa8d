"""Embeddings provider factory.

The returned object implements LangChain's ``Embeddings`` interface:
``embed_documents`` sends ``input_type="document"`` to Voyage AI and
``embed_query`` sends ``input_type="query"``, so the same instance
serves both ingestion and search.
"""

from __future__ import annotations

from langchain_voyageai import VoyageAIEmbeddings

from legal_search.config import Settings, settings as default_settings


def get_embedding_function(config: Settings | None = None) -> VoyageAIEmbeddings:
    """Return the configured Voyage AI embedding function."""
    config = config or default_settings
    config.require("voyage_api_key")
    return VoyageAIEmbeddings(
        model=config.embedding_model,
        voyage_api_key=config.voyage_api_key,
        batch_size=config.embedding_batch_size,
    )
