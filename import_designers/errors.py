"""
Exceptions raised by the designer import pipeline.
"""


class DesignerImportError(ImportError):
    """Base error for a failed import session"""


class FileValidationError(DesignerImportError):
    """A selected file was rejected before any request was sent"""

    def __init__(self, file_name: str, title: str, reason: str):
        self.file_name = file_name
        self.title = title
        self.reason = reason
        super().__init__(f"{title}: {reason}")


class IncompleteMappingError(DesignerImportError):
    """Required designer fields have no CSV column mapped to them"""

    def __init__(self, missing: list[str]):
        self.missing = list(missing)
        super().__init__(f"Required fields not mapped: {', '.join(self.missing)}")


class ApiError(DesignerImportError):
    """
    The Tapestry API could not be reached or answered with a non-2xx status.

    The message is the raw response body so the server's own wording reaches
    the user unchanged.
    """

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class ResponseSchemaError(DesignerImportError):
    """A 2xx response body did not match the expected shape"""
