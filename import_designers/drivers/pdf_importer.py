"""
PDF (LinkedIn export) designer importer implementation.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from ..errors import DesignerImportError
from ..interface import DesignerImporter, UploadFile
from ..models import (
    BatchProcessingResult,
    ExtractedContact,
    ImportResult,
    PdfProcessingResult,
)
from ..presenter import ConfidenceTier, confidence_tier

logger = logging.getLogger(__name__)

PDF_CONTENT_TYPE = "application/pdf"
MAX_FILE_SIZE = 10 * 1024 * 1024

ProgressCallback = Callable[[float, str], None]


@dataclass
class PdfImportSession:
    """Extraction results for every file of one batch"""

    results: list[BatchProcessingResult] = field(default_factory=list)
    progress: float = 0.0

    def all_contacts(self) -> list[ExtractedContact]:
        """Contacts of every file, flattened in file order"""
        return [contact for batch in self.results for contact in batch.result.contacts]

    @property
    def total_contacts(self) -> int:
        return sum(len(batch.result.contacts) for batch in self.results)

    @property
    def high_confidence_contacts(self) -> int:
        return sum(
            1
            for contact in self.all_contacts()
            if confidence_tier(contact.confidence) is ConfidenceTier.HIGH
        )

    @property
    def successful_files(self) -> int:
        return sum(1 for batch in self.results if batch.result.success)

    def discard(self, file_index: int, contact_index: int) -> ExtractedContact:
        """
        Drop one contact so it is not imported.

        Raises:
            IndexError: If either index is out of range
        """
        contacts = self.results[file_index].result.contacts
        return contacts.pop(contact_index)

    def clear(self) -> None:
        self.results = []
        self.progress = 0.0


class PDFImporter(DesignerImporter):
    """
    Importer for PDF contact exports.

    Each file goes to the remote extraction service in turn; a file that fails
    is recorded and the batch moves on. All extracted contacts are then
    submitted in a single request.
    """

    def __init__(self, client, source_name: str = "PDF"):
        super().__init__(source_name, client)

    def check_file(self, upload: UploadFile) -> tuple[str, str] | None:
        if upload.content_type != PDF_CONTENT_TYPE:
            return ("Invalid file type", f"{upload.name} is not a PDF file")
        if upload.size > MAX_FILE_SIZE:
            return ("File too large", f"{upload.name} is larger than 10MB")
        return None

    def process_file(self, upload: UploadFile) -> PdfProcessingResult:
        """
        Extract contacts from one PDF.

        Failures are folded into an unsuccessful result instead of raised.
        """
        try:
            result = self.client.process_pdf(upload)
        except DesignerImportError as e:
            logger.warning(f"{upload.name} failed: {e}")
            return PdfProcessingResult(
                success=False,
                contacts=[],
                total_pages=0,
                errors=[str(e)],
                file_name=upload.name,
            )

        if result.success:
            logger.info(f"{upload.name} processed: extracted {len(result.contacts)} contacts")
        else:
            logger.warning(
                f"{upload.name} processing issues: "
                f"{result.message or 'Some contacts could not be extracted'}"
            )
        return result

    def build_session(
        self,
        files: list[UploadFile],
        on_progress: ProgressCallback | None = None,
        **kwargs,
    ) -> PdfImportSession:
        """
        Process files one after another.

        Args:
            files: Validated PDF files
            on_progress: Called after each file with (percent done, file name)

        Returns:
            PdfImportSession holding one result per file, in order
        """
        session = PdfImportSession()
        total = len(files)

        for index, upload in enumerate(files):
            logger.debug(f"Processing {upload.name} ({index + 1}/{total})")
            result = self.process_file(upload)
            session.results.append(BatchProcessingResult(file_name=upload.name, result=result))

            session.progress = (index + 1) / total * 100
            if on_progress is not None:
                on_progress(session.progress, upload.name)

        logger.info(
            f"Processed {total} files, extracted {session.total_contacts} contacts "
            f"from {session.successful_files} successful files"
        )
        return session

    def submit(self, session: PdfImportSession) -> ImportResult:
        """
        Import every remaining contact of the session in one request.

        Raises:
            DesignerImportError: If there is nothing to import
            ApiError: If the server rejects the request
        """
        contacts = session.all_contacts()
        if not contacts:
            raise DesignerImportError("No contacts to import")

        result = self.client.import_contacts(contacts)
        logger.info(
            f"{self.source_name} import: {result.imported} imported, {result.skipped} skipped"
        )
        return result


class LinkedInImporter(PDFImporter):
    """Importer for LinkedIn connection and search-result PDF exports"""

    def __init__(self, client):
        super().__init__(client, source_name="LinkedIn")
