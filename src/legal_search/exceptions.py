"""Error taxonomy shared by the ingestion, retrieval and serving layers.

Every error carries the HTTP status the API answers with, so route
handlers only have to decide *which* error applies.
"""

from __future__ import annotations

import requests
import urllib3.exceptions


class LegalSearchError(Exception):
    """Base exception for the legal search service."""

    def __init__(self, message: str, status_code: int = 500) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class ConfigurationError(LegalSearchError):
    """A required setting (API key, index name) is missing."""

    def __init__(self, message: str) -> None:
        super().__init__(message, status_code=500)


class InvalidRequestError(LegalSearchError):
    """The caller sent missing or malformed input."""

    def __init__(self, message: str) -> None:
        super().__init__(message, status_code=400)


class NoDocumentsError(InvalidRequestError):
    """The source directory holds no PDF documents."""

    def __init__(self, message: str = "No documents found in the docs directory") -> None:
        super().__init__(message)


class ProviderTimeoutError(LegalSearchError):
    """An external provider could not be reached in time."""

    def __init__(self, message: str = "Operation timed out - please try again") -> None:
        super().__init__(message, status_code=504)


class SearchError(LegalSearchError):
    """Embedding the query or searching the index failed."""

    def __init__(self, message: str = "Error searching for query") -> None:
        super().__init__(message, status_code=500)


class BootstrapError(LegalSearchError):
    """Ingestion aborted outside of an individual batch."""

    def __init__(self, message: str = "Bootstrap procedure failed") -> None:
        super().__init__(message, status_code=500)


class BootstrapRequestError(LegalSearchError):
    """The ingest endpoint answered the bootstrap trigger with a non-2xx status."""

    def __init__(self, upstream_status: int) -> None:
        self.upstream_status = upstream_status
        super().__init__(f"API request failed with status {upstream_status}", status_code=502)


class BootstrapConnectionError(LegalSearchError):
    """The ingest endpoint could not be reached to trigger a bootstrap."""

    def __init__(self, message: str = "Could not reach the ingest endpoint") -> None:
        super().__init__(message, status_code=502)


_TIMEOUT_TYPES = (
    TimeoutError,
    requests.exceptions.Timeout,
    urllib3.exceptions.TimeoutError,
)


def is_timeout_error(exc: BaseException) -> bool:
    """Return ``True`` if *exc* or anything in its cause chain is a timeout."""
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        if isinstance(current, (_TIMEOUT_TYPES, ProviderTimeoutError)):
            return True
        seen.add(id(current))
        current = current.__cause__ or current.__context__
    return False
