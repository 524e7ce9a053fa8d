"""Shared pytest configuration and fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from legal_search.config import Settings
from tests.fakes import FakeVectorStore, RecordingEmbeddings


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: marks tests requiring external services")


# ── Fixtures ────────────────────────────────────────────────────────────


@pytest.fixture()
def docs_dir(tmp_path: Path) -> Path:
    path = tmp_path / "docs"
    path.mkdir()
    return path


@pytest.fixture()
def test_settings(docs_dir: Path) -> Settings:
    return Settings(
        _env_file=None,
        voyage_api_key="voyage-test",
        pinecone_api_key="pinecone-test",
        pinecone_index="legal-test",
        docs_dir=str(docs_dir),
        metadata_file=str(docs_dir / "db.json"),
        batch_delay=0.0,
        failure_delay=0.0,
    )


@pytest.fixture()
def fake_store() -> FakeVectorStore:
    return FakeVectorStore()


@pytest.fixture()
def embeddings() -> RecordingEmbeddings:
    return RecordingEmbeddings()
