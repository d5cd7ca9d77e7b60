"""
Interface definitions for designer importers.
"""

import logging
import mimetypes
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .client import TapestryClient
from .errors import FileValidationError
from .models import ImportResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UploadFile:
    """A file selected for import, held in memory"""

    name: str
    data: bytes
    content_type: str = ""

    @property
    def size(self) -> int:
        return len(self.data)

    @classmethod
    def from_path(cls, path: str | Path) -> "UploadFile":
        """
        Read a local file, guessing its MIME type from the extension.

        Args:
            path: Path to the file

        Returns:
            UploadFile with the file's name, bytes and guessed type
        """
        file_path = Path(path)
        content_type, _ = mimetypes.guess_type(file_path.name)
        return cls(
            name=file_path.name,
            data=file_path.read_bytes(),
            content_type=content_type or "",
        )

    def as_multipart(self) -> tuple[str, bytes, str]:
        return (self.name, self.data, self.content_type or "application/octet-stream")


def as_file_list(files: UploadFile | Sequence[UploadFile]) -> list[UploadFile]:
    """Accept a single file or many and always hand back a list"""
    if isinstance(files, UploadFile):
        return [files]
    return list(files)


class DesignerImporter(ABC):
    """
    Abstract base class for designer importers.

    Each source (CSV, PDF, LinkedIn export, ...) implements this interface.
    Files are checked client-side before anything is sent: the first rejected
    file aborts the whole selection.
    """

    def __init__(self, source_name: str, client: TapestryClient):
        self.source_name = source_name
        self.client = client

    @abstractmethod
    def check_file(self, upload: UploadFile) -> tuple[str, str] | None:
        """
        Check one file against the source's type and size rules.

        Returns:
            (title, reason) when the file is rejected, None when accepted
        """

    @abstractmethod
    def build_session(self, files: list[UploadFile], **kwargs) -> Any:
        """
        Turn validated files into a reviewable import session.

        Args:
            files: Files that passed check_file
            **kwargs: Source-specific parameters
        """

    @abstractmethod
    def submit(self, session: Any) -> ImportResult:
        """
        Send a reviewed session to the Tapestry API.

        Raises:
            DesignerImportError: If the session cannot be submitted
        """

    def validate_files(self, files: list[UploadFile]) -> None:
        """
        Reject the selection if any file breaks the source's rules.

        Raises:
            FileValidationError: Naming the first offending file
        """
        for upload in files:
            rejection = self.check_file(upload)
            if rejection is not None:
                title, reason = rejection
                logger.warning(f"Rejected {upload.name} for {self.source_name} import: {reason}")
                raise FileValidationError(upload.name, title, reason)

    def prepare(self, files: UploadFile | Sequence[UploadFile], **kwargs) -> Any:
        """
        Validate the selected files, then build a session from them.

        Args:
            files: One file or several
            **kwargs: Passed through to build_session

        Returns:
            Source-specific import session
        """
        file_list = as_file_list(files)
        if not file_list:
            raise FileValidationError("", "No file selected", "Select at least one file to import")

        self.validate_files(file_list)
        return self.build_session(file_list, **kwargs)
