"""Shared configuration loaded from environment / .env file."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings

from legal_search.exceptions import ConfigurationError


class Settings(BaseSettings):
    """Application-wide settings, populated from env vars or .env file."""

    # Embeddings provider
    voyage_api_key: str = Field(default="", description="Voyage AI API key")
    embedding_model: str = Field(default="voyage-law-2", description="Voyage embedding model identifier")
    embedding_batch_size: int = 5

    # Vector store
    pinecone_api_key: str = Field(default="", description="Pinecone API key")
    pinecone_index: str = Field(default="", description="Index searched by /search and bootstrapped by /bootstrap")
    pinecone_dimension: int = 1024
    pinecone_metric: str = "cosine"
    pinecone_cloud: str = "aws"
    pinecone_region: str = "us-east-1"

    # Source documents
    docs_dir: str = "docs"
    metadata_file: str = "docs/db.json"
    max_content_length: int = 8192

    # Chunking and batching
    chunk_size: int = 1000
    chunk_overlap: int = 200
    batch_size: int = Field(default=5, description="Chunks embedded per provider request")
    upsert_batch_size: int = Field(default=2, description="Vectors sent per upsert call")
    batch_delay: float = Field(default=1.0, description="Pause after a successful batch, in seconds")
    failure_delay: float = Field(default=2.0, description="Pause after a failed batch, in seconds")

    # Search
    search_k: int = 20
    search_fetch_k: int = 100
    search_lambda: float = 0.5

    # Bootstrap trigger
    production_url: str = Field(
        default="",
        description=(
            "Host name of the deployed API, e.g. 'legal-search.example.com'. "
            "When set, /bootstrap reaches /ingest over https on this host; "
            "otherwise ``local_base_url`` is used."
        ),
    )
    local_base_url: str = "http://localhost:8000"
    bootstrap_timeout: float = 600.0

    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    @property
    def base_url(self) -> str:
        """Root URL the bootstrap trigger uses to reach the ingest endpoint."""
        if self.production_url:
            return f"https://{self.production_url}"
        return self.local_base_url.rstrip("/")

    def require(self, *fields: str) -> None:
        """Raise :class:`ConfigurationError` if any of *fields* is empty."""
        for name in fields:
            if not getattr(self, name):
                raise ConfigurationError(f"{name.upper()} environment variable is not set")


# Built once per process; pass it (or a test instance) into the components.
settings = Settings()
