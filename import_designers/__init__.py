"""
Import Designers Module

This module provides importers, models and an API client for bringing designer
contacts into a Tapestry workspace.
"""

from .client import TapestryClient, WorkspaceContext
from .drivers import CSVImporter, LinkedInImporter, PDFImporter
from .errors import (
    ApiError,
    DesignerImportError,
    FileValidationError,
    IncompleteMappingError,
    ResponseSchemaError,
)
from .factory import ImporterFactory
from .interface import DesignerImporter, UploadFile
from .models import ExtractedContact, FieldMapping, ImportResult, PdfProcessingResult

__all__ = [
    "DesignerImporter",
    "UploadFile",
    "ImportResult",
    "ExtractedContact",
    "FieldMapping",
    "PdfProcessingResult",
    "TapestryClient",
    "WorkspaceContext",
    "ImporterFactory",
    "CSVImporter",
    "PDFImporter",
    "LinkedInImporter",
    "DesignerImportError",
    "FileValidationError",
    "IncompleteMappingError",
    "ApiError",
    "ResponseSchemaError",
]
