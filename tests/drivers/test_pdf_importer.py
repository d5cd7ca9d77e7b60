"""Tests for PDF and LinkedIn importers."""

from unittest.mock import Mock

import pytest
import requests

from import_designers.drivers.pdf_importer import (
    MAX_FILE_SIZE,
    LinkedInImporter,
    PDFImporter,
    PdfImportSession,
)
from import_designers.errors import ApiError, DesignerImportError, FileValidationError
from import_designers.models import (
    BatchProcessingResult,
    ExtractedContact,
    PdfProcessingResult,
)


def contact(name, confidence=0.9):
    return ExtractedContact(name=name, confidence=confidence)


def batch(file_name, *contacts, success=True):
    return BatchProcessingResult(
        file_name=file_name,
        result=PdfProcessingResult(success=success, contacts=list(contacts)),
    )


class TestPdfValidation:
    """Test cases for client-side file checks."""

    def test_init(self, client):
        """Test PDF and LinkedIn importer initialization."""
        assert PDFImporter(client).source_name == "PDF"
        assert LinkedInImporter(client).source_name == "LinkedIn"

    def test_accepts_pdf_at_limit(self, client, make_pdf):
        """A PDF of exactly 10 MiB is accepted."""
        importer = PDFImporter(client)
        assert importer.check_file(make_pdf(size=MAX_FILE_SIZE)) is None

    def test_rejects_non_pdf(self, client, make_pdf, mock_session):
        """Only application/pdf passes, whatever the extension."""
        importer = PDFImporter(client)
        files = [make_pdf("a.pdf"), make_pdf("notes.pdf", content_type="text/plain")]

        with pytest.raises(FileValidationError) as exc_info:
            importer.prepare(files)

        assert exc_info.value.file_name == "notes.pdf"
        assert exc_info.value.title == "Invalid file type"
        assert exc_info.value.reason == "notes.pdf is not a PDF file"
        mock_session.request.assert_not_called()

    def test_oversize_file_aborts_batch(self, client, make_pdf, mock_session):
        """One file over 10 MiB stops the batch before any request."""
        importer = PDFImporter(client)
        files = [
            make_pdf("first.pdf"),
            make_pdf("huge.pdf", size=MAX_FILE_SIZE + 1),
            make_pdf("third.pdf"),
        ]

        with pytest.raises(FileValidationError, match="huge.pdf is larger than 10MB"):
            importer.prepare(files)

        mock_session.request.assert_not_called()

    def test_empty_selection(self, client):
        """Selecting nothing is rejected."""
        with pytest.raises(FileValidationError, match="No file selected"):
            PDFImporter(client).prepare([])


class TestPdfProcessing:
    """Test cases for sequential batch processing."""

    def test_single_file(self, client, make_pdf, mock_session, mock_response, extraction_payload):
        """A single file is accepted without wrapping it in a list."""
        mock_session.request.return_value = mock_response(extraction_payload("Ada Park"))

        session = PDFImporter(client).prepare(make_pdf("ada.pdf"))

        assert len(session.results) == 1
        assert session.results[0].file_name == "ada.pdf"
        assert session.results[0].result.file_name == "ada.pdf"
        assert session.all_contacts()[0].linked_in == "https://linkedin.com/in/adapark"
        assert session.progress == 100

        method, url = mock_session.request.call_args[0]
        assert method == "post"
        assert url == "https://tapestry.example.com/api/import/pdf/process"
        assert mock_session.request.call_args[1]["files"]["pdf"][0] == "ada.pdf"

    def test_failure_is_isolated(
        self, client, make_pdf, mock_session, mock_response, extraction_payload
    ):
        """A failing file is recorded and the next file still runs."""
        mock_session.request.side_effect = [
            mock_response(extraction_payload("Ada Park")),
            mock_response(status_code=500, text="Could not read PDF"),
            mock_response(extraction_payload("Ben Ortiz", "Cleo Tan")),
        ]
        progress = Mock()

        session = PDFImporter(client).prepare(
            [make_pdf("one.pdf"), make_pdf("two.pdf"), make_pdf("three.pdf")],
            on_progress=progress,
        )

        assert [b.file_name for b in session.results] == ["one.pdf", "two.pdf", "three.pdf"]
        assert [b.result.success for b in session.results] == [True, False, True]

        failed = session.results[1].result
        assert failed.contacts == []
        assert failed.errors == ["Could not read PDF"]
        assert failed.file_name == "two.pdf"

        assert mock_session.request.call_count == 3
        assert [c.args for c in progress.call_args_list] == [
            (pytest.approx(100 / 3), "one.pdf"),
            (pytest.approx(200 / 3), "two.pdf"),
            (100.0, "three.pdf"),
        ]
        assert session.progress == 100

        assert [c.name for c in session.all_contacts()] == ["Ada Park", "Ben Ortiz", "Cleo Tan"]
        assert session.total_contacts == 3
        assert session.successful_files == 2

    def test_transport_error_is_isolated(
        self, client, make_pdf, mock_session, mock_response, extraction_payload
    ):
        """Connection problems count as a failed file too."""
        mock_session.request.side_effect = [
            requests.ConnectionError("connection refused"),
            mock_response(extraction_payload("Ada Park")),
        ]

        session = PDFImporter(client).prepare([make_pdf("a.pdf"), make_pdf("b.pdf")])

        assert session.results[0].result.success is False
        assert "connection refused" in session.results[0].result.errors[0]
        assert session.results[1].result.success is True

    def test_unsuccessful_extraction_keeps_contacts(
        self, client, make_pdf, mock_session, mock_response
    ):
        """A 2xx reply with success false is kept as the server sent it."""
        mock_session.request.return_value = mock_response(
            {
                "success": False,
                "contacts": [{"name": "Ada Park", "confidence": 0.4}],
                "totalPages": 3,
                "errors": ["Page 2 unreadable"],
                "message": "Some contacts could not be extracted",
            }
        )

        session = PDFImporter(client).prepare(make_pdf())

        result = session.results[0].result
        assert result.success is False
        assert result.total_pages == 3
        assert len(result.contacts) == 1
        assert session.successful_files == 0


class TestPdfSession:
    """Test cases for the review session."""

    def test_high_confidence_count(self):
        """Only contacts at 0.8 or above count as high confidence."""
        session = PdfImportSession(
            results=[
                batch("a.pdf", contact("A", 0.8), contact("B", 0.79)),
                batch("b.pdf", contact("C", 0.95)),
            ]
        )
        assert session.high_confidence_contacts == 2

    def test_discard(self):
        """A discarded contact is no longer imported."""
        session = PdfImportSession(results=[batch("a.pdf", contact("A"), contact("B"))])

        removed = session.discard(0, 0)

        assert removed.name == "A"
        assert [c.name for c in session.all_contacts()] == ["B"]

    def test_discard_out_of_range(self):
        """Discarding a missing contact raises IndexError."""
        session = PdfImportSession(results=[batch("a.pdf", contact("A"))])

        with pytest.raises(IndexError):
            session.discard(0, 5)

    def test_clear(self):
        """Clearing drops every result and resets progress."""
        session = PdfImportSession(results=[batch("a.pdf", contact("A"))], progress=100)
        session.clear()

        assert session.results == []
        assert session.progress == 0


class TestPdfSubmit:
    """Test cases for submitting extracted contacts."""

    def test_submit_all_contacts_once(self, client, mock_session, mock_response):
        """Every file's contacts go out in one request."""
        mock_session.request.return_value = mock_response(
            {
                "success": True,
                "imported": 2,
                "skipped": 1,
                "errors": [{"contact": "Cleo Tan", "error": "Missing email"}],
            }
        )
        session = PdfImportSession(
            results=[
                batch("a.pdf", contact("Ada Park"), contact("Ben Ortiz")),
                batch("b.pdf", success=False),
                batch("c.pdf", contact("Cleo Tan", 0.5)),
            ]
        )

        result = LinkedInImporter(client).submit(session)

        assert mock_session.request.call_count == 1
        method, url = mock_session.request.call_args[0]
        assert url == "https://tapestry.example.com/api/import/pdf/import"
        sent = mock_session.request.call_args[1]["json"]["contacts"]
        assert [c["name"] for c in sent] == ["Ada Park", "Ben Ortiz", "Cleo Tan"]
        assert sent[2] == {"name": "Cleo Tan", "skills": [], "confidence": 0.5}

        assert result.imported == 2
        assert result.skipped == 1
        assert result.errors[0].row == "Cleo Tan"

    def test_submit_nothing(self, client, mock_session):
        """An empty session is not submitted."""
        with pytest.raises(DesignerImportError, match="No contacts to import"):
            PDFImporter(client).submit(PdfImportSession())

        mock_session.request.assert_not_called()

    def test_submit_server_error(self, client, mock_session, mock_response):
        """The raw response body becomes the error message."""
        mock_session.request.return_value = mock_response(
            status_code=500, text="Database unavailable"
        )
        session = PdfImportSession(results=[batch("a.pdf", contact("Ada Park"))])

        with pytest.raises(ApiError) as exc_info:
            PDFImporter(client).submit(session)

        assert str(exc_info.value) == "Database unavailable"
