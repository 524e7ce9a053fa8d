"""Ingestion orchestrator: load, validate, chunk, embed and upsert.

One run works strictly sequentially: each batch of chunks is embedded in
one provider request and upserted in small groups, with a fixed pause
after every batch to stay under provider rate limits.  A batch that
fails is logged, recorded in the run's :class:`IngestionReport` and
skipped; the run carries on with the next batch.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import TYPE_CHECKING

from legal_search.config import Settings, settings as default_settings
from legal_search.exceptions import (
    BootstrapError,
    LegalSearchError,
    NoDocumentsError,
    ProviderTimeoutError,
    is_timeout_error,
)
from legal_search.ingestion.chunker import chunk_documents
from legal_search.ingestion.loader import (
    flatten_metadata,
    is_valid_content,
    load_directory,
    merge_metadata,
    read_metadata,
)
from legal_search.retrieval.base import VectorStoreBase
from legal_search.retrieval.models import IngestionReport, VectorRecord

if TYPE_CHECKING:
    from langchain_core.documents import Document
    from langchain_core.embeddings import Embeddings

logger = logging.getLogger(__name__)


def batch_upserts(
    store: VectorStoreBase,
    index_name: str,
    vectors: list[VectorRecord],
    batch_size: int = 50,
    on_upserted: Callable[[int], None] | None = None,
) -> int:
    """Upsert *vectors* in consecutive groups of at most *batch_size*.

    *on_upserted* is called with the size of each group once it is stored,
    so callers can count progress even when a later group fails.
    Returns the number of upsert calls made.
    """
    if batch_size <= 0:
        raise ValueError(f"batch_size must be positive, got {batch_size}")
    total = -(-len(vectors) // batch_size)
    for number, start in enumerate(range(0, len(vectors), batch_size), 1):
        logger.info("Upserting batch %d of %d", number, total)
        group = vectors[start : start + batch_size]
        store.upsert(index_name, group)
        if on_upserted is not None:
            on_upserted(len(group))
    return total


class BootstrapOrchestrator:
    """Populate a vector index from the PDF documents directory.

    Parameters
    ----------
    config:
        Settings with the document paths, chunking and batching constants.
    store:
        Vector-store backend; a :class:`PineconeVectorStore` when omitted.
    embeddings:
        Document-side embeddings; the Voyage model when omitted.
    sleep:
        Pause function used between batches.
    """

    def __init__(
        self,
        config: Settings | None = None,
        *,
        store: VectorStoreBase | None = None,
        embeddings: Embeddings | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._settings = config or default_settings
        if store is None:
            from legal_search.retrieval.pinecone_store import PineconeVectorStore

            store = PineconeVectorStore(self._settings)
        if embeddings is None:
            from legal_search.ingestion.embedder import get_embedding_function

            embeddings = get_embedding_function(self._settings)
        self._store = store
        self._embeddings = embeddings
        self._sleep = sleep

    # -- public API -----------------------------------------------------------

    def run(self, target_index: str) -> IngestionReport:
        """Ingest the documents directory into *target_index*.

        Returns immediately, without loading anything, when the index
        already holds vectors.

        Raises
        ------
        NoDocumentsError
            When the documents directory contains no PDF pages.
        """
        cfg = self._settings
        report = IngestionReport(index_name=target_index)
        logger.info("Running bootstrapping procedure against Pinecone index %s", target_index)

        self._store.create_index_if_necessary(target_index)
        if self._store.index_has_vectors(target_index):
            logger.info(
                "Index %s already has vectors, skipping bootstrapping and returning early",
                target_index,
            )
            report.skipped = True
            return report

        logger.info("Loading documents and metadata...")
        documents = load_directory(cfg.docs_dir)
        report.documents_found = len(documents)
        if not documents:
            logger.warning("No PDF documents found in %s", cfg.docs_dir)
            raise NoDocumentsError()

        records = read_metadata(cfg.metadata_file)
        valid_documents = [d for d in documents if is_valid_content(d.page_content, cfg.max_content_length)]
        merge_metadata(valid_documents, records)
        report.documents_valid = len(valid_documents)
        logger.info("Found %d documents, %d of which are valid", len(documents), len(valid_documents))

        chunks = chunk_documents(valid_documents, chunk_size=cfg.chunk_size, chunk_overlap=cfg.chunk_overlap)
        report.chunks = len(chunks)
        logger.info("Split %d documents into %d chunks", len(valid_documents), len(chunks))

        batches = [chunks[i : i + cfg.batch_size] for i in range(0, len(chunks), cfg.batch_size)]
        report.batches_total = len(batches)

        for number, batch in enumerate(batches, 1):
            logger.info("Processing batch %d of %d", number, len(batches))
            valid_batch = [c for c in batch if is_valid_content(c.page_content, cfg.max_content_length)]
            if not valid_batch:
                logger.info("No valid content in batch %d, skipping", number)
                continue

            try:
                self._process_batch(target_index, number, valid_batch, report)
            except Exception:
                logger.exception("Error in batch %d", number)
                report.failed_batches.append(number)
                self._sleep(cfg.failure_delay)
                continue

            self._sleep(cfg.batch_delay)

        if report.failed_batches:
            logger.warning(
                "%d of %d batches failed and may be missing from the index: %s",
                len(report.failed_batches),
                report.batches_total,
                report.failed_batches,
            )
        logger.info("Bootstrap procedure completed successfully.")
        return report

    # -- internals ------------------------------------------------------------

    def _process_batch(
        self,
        target_index: str,
        number: int,
        batch: list[Document],
        report: IngestionReport,
    ) -> None:
        texts = [chunk.page_content.strip() for chunk in batch]
        logger.info("Generating embeddings for batch %d", number)
        embeddings = self._embeddings.embed_documents(texts)
        if len(embeddings) != len(texts):
            raise ValueError(f"Expected {len(texts)} embeddings, received {len(embeddings)}")
        logger.info("Successfully generated %d embeddings", len(embeddings))

        vectors = [
            VectorRecord(
                id=chunk.metadata["id"],
                values=values,
                metadata={**flatten_metadata(chunk.metadata), "id": chunk.metadata["id"], "text": text},
            )
            for chunk, text, values in zip(batch, texts, embeddings)
        ]

        def count(n: int) -> None:
            report.vectors_upserted += n

        batch_upserts(self._store, target_index, vectors, self._settings.upsert_batch_size, count)


def handle_bootstrapping(
    target_index: str,
    orchestrator: BootstrapOrchestrator | None = None,
) -> IngestionReport:
    """Run the orchestrator and map unexpected failures onto the error taxonomy.

    Timeouts anywhere in the cause chain become :class:`ProviderTimeoutError`;
    anything else that is not already a :class:`LegalSearchError` becomes
    :class:`BootstrapError`.
    """
    try:
        orchestrator = orchestrator or BootstrapOrchestrator()
        return orchestrator.run(target_index)
    except LegalSearchError:
        raise
    except Exception as exc:
        logger.exception("Error during bootstrap procedure for index %s", target_index)
        if is_timeout_error(exc):
            raise ProviderTimeoutError() from exc
        raise BootstrapError() from exc
