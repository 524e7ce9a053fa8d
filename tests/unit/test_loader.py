"""Unit tests for document loading, metadata handling and content validation."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from langchain_core.documents import Document

from legal_search.ingestion.loader import (
    flatten_metadata,
    is_valid_content,
    load_directory,
    merge_metadata,
    read_metadata,
)


class TestLoadDirectory:
    def test_missing_directory_yields_no_documents(self, tmp_path: Path) -> None:
        assert load_directory(tmp_path / "nope") == []

    def test_directory_without_pdfs_yields_no_documents(self, docs_dir: Path) -> None:
        (docs_dir / "notes.txt").write_text("not a pdf")
        assert load_directory(docs_dir) == []


class TestReadMetadata:
    def test_reads_documents_list(self, tmp_path: Path) -> None:
        path = tmp_path / "db.json"
        path.write_text(json.dumps({"documents": [{"filename": "a.pdf", "title": "Smith v. Jones"}]}))
        assert read_metadata(path) == [{"filename": "a.pdf", "title": "Smith v. Jones"}]

    def test_missing_file_returns_empty(self, tmp_path: Path) -> None:
        assert read_metadata(tmp_path / "db.json") == []

    def test_malformed_json_returns_empty(self, tmp_path: Path) -> None:
        path = tmp_path / "db.json"
        path.write_text("{not json")
        assert read_metadata(path) == []

    def test_without_documents_key_returns_empty(self, tmp_path: Path) -> None:
        path = tmp_path / "db.json"
        path.write_text(json.dumps({"cases": []}))
        assert read_metadata(path) == []

    def test_non_mapping_records_are_ignored(self, tmp_path: Path) -> None:
        path = tmp_path / "db.json"
        path.write_text(json.dumps({"documents": ["a.pdf", {"filename": "b.pdf"}]}))
        assert read_metadata(path) == [{"filename": "b.pdf"}]


class TestIsValidContent:
    @pytest.mark.parametrize("content", [None, "", "   \n\t ", 42, "x" * 8192, " " + "x" * 8192])
    def test_rejects(self, content: object) -> None:
        assert is_valid_content(content) is False

    @pytest.mark.parametrize("content", ["a", "  The court held.  ", "x" * 8191])
    def test_accepts(self, content: str) -> None:
        assert is_valid_content(content) is True

    def test_custom_bound(self) -> None:
        assert is_valid_content("abcd", max_length=4) is False
        assert is_valid_content("abc", max_length=4) is True


class TestMergeMetadata:
    def test_merges_by_basename(self) -> None:
        doc = Document(page_content="text", metadata={"source": "/srv/docs/a.pdf", "page": 0})
        merge_metadata([doc], [{"filename": "a.pdf", "title": "Smith v. Jones", "year": 1999}])
        assert doc.metadata == {
            "source": "/srv/docs/a.pdf",
            "page": 0,
            "filename": "a.pdf",
            "title": "Smith v. Jones",
            "year": 1999,
        }

    def test_first_matching_record_wins(self) -> None:
        doc = Document(page_content="text", metadata={"source": "docs/a.pdf"})
        merge_metadata([doc], [{"filename": "a.pdf", "title": "First"}, {"filename": "a.pdf", "title": "Second"}])
        assert doc.metadata["title"] == "First"

    def test_unmatched_document_is_untouched(self) -> None:
        doc = Document(page_content="text", metadata={"source": "docs/b.pdf"})
        merge_metadata([doc], [{"filename": "a.pdf", "title": "Smith v. Jones"}])
        assert doc.metadata == {"source": "docs/b.pdf"}


class TestFlattenMetadata:
    def test_lifts_pdf_page_count(self) -> None:
        flat = flatten_metadata({"source": "a.pdf", "pdf": {"pageCount": 12, "info": {}}, "loc": {"pageNumber": 3}})
        assert flat == {"source": "a.pdf", "total_pages": 12}

    def test_drops_nested_and_none_values(self) -> None:
        flat = flatten_metadata({"title": "T", "court": None, "extra": {"a": 1}, "page": 2, "final": True})
        assert flat == {"title": "T", "page": 2, "final": True}

    def test_lists_become_strings(self) -> None:
        assert flatten_metadata({"judges": ["Roe", 3, None]}) == {"judges": ["Roe", "3"]}
