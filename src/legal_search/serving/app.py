"""FastAPI application exposing ingestion and search as a REST API."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from langchain_core.embeddings import Embeddings
from pydantic import BaseModel, ConfigDict, Field

from legal_search import __version__
from legal_search.config import Settings, settings
from legal_search.exceptions import InvalidRequestError, LegalSearchError
from legal_search.ingestion.pipeline import BootstrapOrchestrator, handle_bootstrapping
from legal_search.logging_config import configure_logging
from legal_search.retrieval.base import VectorStoreBase
from legal_search.retrieval.models import SearchResult
from legal_search.retrieval.retriever import LegalSearchService
from legal_search.serving.bootstrap import initiate_bootstrapping

logger = logging.getLogger(__name__)


# ── Request / Response schemas ────────────────────────────────────────
class IngestRequest(BaseModel):
    """Index to bootstrap."""

    model_config = ConfigDict(populate_by_name=True)

    target_index: str | None = Field(default=None, alias="targetIndex")


class SearchRequest(BaseModel):
    """Incoming search query."""

    query: str | None = None


class SuccessResponse(BaseModel):
    success: bool = True


class SearchResponse(BaseModel):
    """Deduplicated search hits."""

    results: list[SearchResult] = []


# ── Dependencies ──────────────────────────────────────────────────────
def get_settings() -> Settings:
    return settings


@lru_cache
def get_vector_store() -> VectorStoreBase:
    """Process-wide Pinecone client."""
    from legal_search.retrieval.pinecone_store import PineconeVectorStore

    return PineconeVectorStore(get_settings())


@lru_cache
def get_embeddings() -> Embeddings:
    """Process-wide Voyage AI embeddings client."""
    from legal_search.ingestion.embedder import get_embedding_function

    return get_embedding_function(get_settings())


def get_search_service(
    config: Settings = Depends(get_settings),
    store: VectorStoreBase = Depends(get_vector_store),
    embeddings: Embeddings = Depends(get_embeddings),
) -> LegalSearchService:
    return LegalSearchService(config, store=store, embeddings=embeddings)


def get_orchestrator(
    config: Settings = Depends(get_settings),
    store: VectorStoreBase = Depends(get_vector_store),
    embeddings: Embeddings = Depends(get_embeddings),
) -> BootstrapOrchestrator:
    return BootstrapOrchestrator(config, store=store, embeddings=embeddings)


# ── Error handling ────────────────────────────────────────────────────
async def legal_search_exception_handler(request: Request, exc: LegalSearchError) -> JSONResponse:
    """Render a :class:`LegalSearchError` as ``{"error": message}``."""
    logger.error("%s %s failed with %d: %s", request.method, request.url.path, exc.status_code, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


_INVALID_BODY_MESSAGES = {
    "/ingest": "targetIndex is required",
    "/search": "Query is required",
}


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Answer a malformed or mistyped body with 400 and the route's own message."""
    message = _INVALID_BODY_MESSAGES.get(request.url.path, "Invalid request body")
    logger.error("%s %s rejected: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"error": message})


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Keep the ``{"error": ...}`` contract for failures nothing else mapped."""
    logger.exception("Unexpected error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


# ── Application ───────────────────────────────────────────────────────
def create_app() -> FastAPI:
    """Build the API.

    Routes are synchronous so blocking provider calls run in the threadpool;
    /bootstrap in particular calls back into /ingest on the same server.
    """
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Legal Search API",
        version=__version__,
        description="Bootstrap a Pinecone index from legal PDFs and search it semantically.",
    )
    app.add_exception_handler(LegalSearchError, legal_search_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    @app.get("/health")
    def health() -> dict[str, str]:
        """Liveness check."""
        return {"status": "ok"}

    @app.get("/ready")
    def ready(store: VectorStoreBase = Depends(get_vector_store)) -> JSONResponse:
        """Readiness: 503 until the vector database answers."""
        if not store.health_check():
            return JSONResponse(status_code=503, content={"status": "unavailable"})
        return JSONResponse(content={"status": "ok"})

    @app.post("/bootstrap", response_model=SuccessResponse)
    def bootstrap(cfg: Settings = Depends(get_settings)) -> SuccessResponse:
        """Bootstrap the configured index through the ingest endpoint."""
        cfg.require("pinecone_index")
        initiate_bootstrapping(cfg.pinecone_index, cfg)
        return SuccessResponse()

    @app.post("/ingest", response_model=SuccessResponse)
    def ingest(
        payload: IngestRequest | None = None,
        orchestrator: BootstrapOrchestrator = Depends(get_orchestrator),
    ) -> SuccessResponse:
        """Populate ``targetIndex`` from the documents directory unless it already has vectors."""
        target_index = payload.target_index if payload else None
        if not target_index:
            raise InvalidRequestError("targetIndex is required")
        handle_bootstrapping(target_index, orchestrator)
        return SuccessResponse()

    @app.post("/search", response_model=SearchResponse)
    def search(
        payload: SearchRequest | None = None,
        service: LegalSearchService = Depends(get_search_service),
    ) -> SearchResponse:
        """Embed the query, run an MMR search and deduplicate hits by title."""
        results = service.search(payload.query if payload else None)
        return SearchResponse(results=results)

    return app


app = create_app()


def main(**uvicorn_kwargs: Any) -> None:
    """Serve the API with uvicorn."""
    import uvicorn

    uvicorn.run(app, host=uvicorn_kwargs.pop("host", "0.0.0.0"), port=uvicorn_kwargs.pop("port", 8000), **uvicorn_kwargs)


if __name__ == "__main__":
    main()
