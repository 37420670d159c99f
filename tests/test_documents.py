"""
Test suite for document loading and the directory document store.
"""

import docx
import fitz
import pytest

from poliseek.documents import DirectoryDocumentStore, DocumentLoader
from poliseek.exceptions import ExtractionError
from poliseek.models import DocumentRecord


class TestDocumentLoader:
    """Test suite for page loading per file type."""

    def test_txt_should_split_on_form_feeds(self, tmp_path) -> None:
        path = tmp_path / "rules.txt"
        path.write_text("Article 1: Scope\nApplies to all.\fArticle 2: Leave\nStaff leave.")

        pages = DocumentLoader().load_pages(path)

        assert pages == ["Article 1: Scope\nApplies to all.", "Article 2: Leave\nStaff leave."]

    def test_docx_should_skip_cover_paragraph(self, tmp_path) -> None:
        # Arrange
        path = tmp_path / "handbook.docx"
        document = docx.Document()
        document.add_paragraph("Prepared by: Registrar")
        document.add_paragraph("Article 1:   Scope")
        document.add_paragraph("Applies to   all students.")
        document.save(str(path))

        # Act
        pages = DocumentLoader().load_pages(path)

        # Assert
        assert pages == ["Article 1: Scope\nApplies to all students."]

    def test_pdf_should_yield_one_text_per_page(self, tmp_path) -> None:
        path = tmp_path / "policy.pdf"
        document = fitz.open()
        for text in ("Article 1: Scope", "Article 2: Leave"):
            document.new_page().insert_text((72, 72), text)
        document.save(str(path))
        document.close()

        pages = DocumentLoader().load_pages(path)

        assert len(pages) == 2
        assert "Article 2: Leave" in pages[1]

    def test_unsupported_type_should_raise(self, tmp_path) -> None:
        path = tmp_path / "budget.xls"
        path.write_bytes(b"data")

        with pytest.raises(ExtractionError):
            DocumentLoader().load_pages(path)

    def test_file_without_text_should_raise(self, tmp_path) -> None:
        path = tmp_path / "empty.txt"
        path.write_text("  \n")

        with pytest.raises(ExtractionError) as exc_info:
            DocumentLoader().load_pages(path)

        assert exc_info.value.document_id == "empty.txt"

    def test_unreadable_file_should_raise(self, tmp_path) -> None:
        path = tmp_path / "broken.pdf"
        path.write_bytes(b"not a pdf")

        with pytest.raises(ExtractionError):
            DocumentLoader().load_pages(path)


class TestDirectoryDocumentStore:
    """Test suite for the directory-backed document store."""

    def test_should_list_supported_documents(self, tmp_path) -> None:
        (tmp_path / "leave.txt").write_text("Staff leave.")
        (tmp_path / "notes.md").write_text("Ignored.")

        records = DirectoryDocumentStore(tmp_path).list_documents()

        assert [r.document_id for r in records] == ["leave.txt"]
        assert records[0].file_name == "leave.txt"
        assert records[0].created_at is not None

    def test_missing_directory_should_have_no_documents(self, tmp_path) -> None:
        assert DirectoryDocumentStore(tmp_path / "missing").list_documents() == []

    def test_should_extract_pages_of_listed_document(self, tmp_path) -> None:
        (tmp_path / "leave.txt").write_text("Staff leave.")
        store = DirectoryDocumentStore(tmp_path)

        pages = store.extract_pages(store.list_documents()[0])

        assert pages == ["Staff leave."]

    def test_record_without_path_should_raise(self, tmp_path) -> None:
        record = DocumentRecord(document_id="ghost", file_name="ghost.txt")

        with pytest.raises(ExtractionError):
            DirectoryDocumentStore(tmp_path).extract_pages(record)


def test_extraction_error_should_allow_missing_document_id() -> None:
    error = ExtractionError("Unreadable file")

    assert error.document_id is None
    assert str(error) == "Unreadable file"
