"""
Drivers module for different designer import sources.

This module contains concrete implementations of the DesignerImporter interface
for the CSV upload and the PDF / LinkedIn export flows.
"""

from .csv_importer import CSVImporter
from .pdf_importer import LinkedInImporter, PDFImporter

__all__ = [
    "CSVImporter",
    "PDFImporter",
    "LinkedInImporter"
]
