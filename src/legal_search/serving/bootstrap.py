"""Bootstrap trigger: populate an index, either over HTTP or in-process.

:func:`initiate_bootstrapping` posts to this service's own ``/ingest``
endpoint (on ``PRODUCTION_URL`` when set, on ``LOCAL_BASE_URL``
otherwise).  :func:`bootstrap_directly` calls the orchestrator in the
current process.  Both end in the same ingestion run.
"""

from __future__ import annotations

import logging

import requests

from legal_search.config import Settings, settings as default_settings
from legal_search.exceptions import BootstrapConnectionError, BootstrapRequestError, ProviderTimeoutError
from legal_search.ingestion.pipeline import BootstrapOrchestrator, handle_bootstrapping
from legal_search.retrieval.models import IngestionReport

logger = logging.getLogger(__name__)


def initiate_bootstrapping(
    target_index: str,
    config: Settings | None = None,
    *,
    session: requests.Session | None = None,
) -> None:
    """Ask the ingest endpoint to bootstrap *target_index*.

    Raises
    ------
    BootstrapRequestError
        When the endpoint answers with a non-2xx status.
    BootstrapConnectionError
        When the endpoint cannot be reached (refused connection, DNS or TLS
        failure).
    ProviderTimeoutError
        When the endpoint does not answer within ``bootstrap_timeout``.
    """
    config = config or default_settings
    url = f"{config.base_url}/ingest"
    http = session or requests
    logger.info("Requesting bootstrap of index %s via %s", target_index, url)
    try:
        response = http.post(
            url,
            json={"targetIndex": target_index},
            headers={"Content-Type": "application/json"},
            timeout=config.bootstrap_timeout,
        )
    except requests.exceptions.Timeout as exc:
        raise ProviderTimeoutError() from exc
    except requests.exceptions.RequestException as exc:
        logger.error("Could not reach ingest endpoint %s: %s", url, exc)
        raise BootstrapConnectionError() from exc

    if not response.ok:
        logger.error("Ingest endpoint answered %d: %s", response.status_code, response.text[:500])
        raise BootstrapRequestError(response.status_code)


def bootstrap_directly(
    target_index: str,
    config: Settings | None = None,
    *,
    orchestrator: BootstrapOrchestrator | None = None,
) -> IngestionReport:
    """Bootstrap *target_index* in-process, without the HTTP hop."""
    if orchestrator is None:
        orchestrator = BootstrapOrchestrator(config)
    return handle_bootstrapping(target_index, orchestrator)
