"""Document loading, metadata side-file handling and content validation."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from langchain_community.document_loaders import DirectoryLoader, PyPDFLoader

if TYPE_CHECKING:
    from langchain_core.documents import Document

logger = logging.getLogger(__name__)


def load_directory(path: str | Path, glob: str = "**/*.pdf") -> list[Document]:
    """Load every PDF under *path*, one ``Document`` per page.

    A missing directory yields an empty list.
    """
    if not Path(path).is_dir():
        logger.warning("Document directory %s does not exist", path)
        return []
    loader = DirectoryLoader(
        str(path),
        glob=glob,
        loader_cls=PyPDFLoader,  # type: ignore[arg-type]
        show_progress=False,
    )
    return loader.load()


def read_metadata(path: str | Path) -> list[dict[str, Any]]:
    """Read per-file metadata records from the ``{"documents": [...]}`` side file.

    A missing or malformed file is logged and treated as having no records.
    """
    try:
        with open(path, encoding="utf-8") as fh:
            parsed = json.load(fh)
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Error reading metadata file %s: %s", path, exc)
        return []

    records = parsed.get("documents") if isinstance(parsed, dict) else None
    if not isinstance(records, list):
        logger.warning("Metadata file %s has no 'documents' list", path)
        return []
    return [r for r in records if isinstance(r, dict)]


def is_valid_content(page_content: Any, max_length: int = 8192) -> bool:
    """Return ``True`` when the trimmed text is non-empty and shorter than *max_length*."""
    if not page_content or not isinstance(page_content, str):
        return False
    trimmed = page_content.strip()
    return 0 < len(trimmed) < max_length


def merge_metadata(documents: list[Document], records: list[dict[str, Any]]) -> None:
    """Overlay the side-file record whose ``filename`` matches each document's source.

    Mutates *documents* in place; the first matching record wins.
    """
    by_filename: dict[str, dict[str, Any]] = {}
    for record in records:
        filename = record.get("filename")
        if filename and filename not in by_filename:
            by_filename[filename] = record

    for doc in documents:
        source = doc.metadata.get("source")
        if not source:
            continue
        record = by_filename.get(Path(source).name)
        if record:
            doc.metadata = {**doc.metadata, **record}


def flatten_metadata(metadata: dict[str, Any]) -> dict[str, Any]:
    """Reduce *metadata* to the flat scalar values a vector store accepts.

    Page counts nested under ``pdf`` are lifted to ``total_pages``; the
    ``loc`` block and any other nested mapping are dropped, ``None`` is
    dropped, and lists become lists of strings.
    """
    flat: dict[str, Any] = {}
    pdf = metadata.get("pdf")
    if isinstance(pdf, dict):
        page_count = pdf.get("pageCount") or pdf.get("totalPages")
        if page_count:
            flat["total_pages"] = page_count

    for key, value in metadata.items():
        if key in ("pdf", "loc") or value is None:
            continue
        if isinstance(value, (str, int, float, bool)):
            flat[key] = value
        elif isinstance(value, (list, tuple)):
            flat[key] = [str(v) for v in value if v is not None]
    return flat
