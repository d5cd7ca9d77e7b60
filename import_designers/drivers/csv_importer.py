"""
CSV file designer importer implementation.
"""

import logging
from dataclasses import dataclass, field
from io import StringIO
from pathlib import Path

import pandas as pd

from ..errors import DesignerImportError, IncompleteMappingError
from ..interface import DesignerImporter, UploadFile
from ..mapping import (
    auto_map,
    is_complete,
    missing_required_fields,
    transform_data,
    update_mapping,
)
from ..models import OPTIONAL_FIELDS, REQUIRED_FIELDS, FieldMapping, ImportResult

logger = logging.getLogger(__name__)

CSV_CONTENT_TYPE = "text/csv"
PREVIEW_ROWS = 10

TEMPLATE_FILE_NAME = "designers_template.csv"
TEMPLATE_HEADERS: list[str] = REQUIRED_FIELDS + OPTIONAL_FIELDS
TEMPLATE_EXAMPLE_ROW: list[str] = [
    "John Doe",
    "Senior Product Designer",
    "john@example.com",
    "Senior",
    "San Francisco",
    "Acme Corp",
    "https://johndoe.com",
    "https://linkedin.com/in/johndoe",
    "UI Design,UX Research,Prototyping",
    "true",
    "Available for full-time roles",
]


@dataclass
class ParsedCsv:
    """Headers and rows of a parsed CSV file"""

    frame: pd.DataFrame

    @property
    def headers(self) -> list[str]:
        return [str(column) for column in self.frame.columns]

    @property
    def rows(self) -> list[dict[str, str]]:
        # Repeated headers collapse onto one key, later cell wins
        headers = self.headers
        return [
            dict(zip(headers, values))
            for values in self.frame.itertuples(index=False, name=None)
        ]

    def preview(self, limit: int = PREVIEW_ROWS) -> pd.DataFrame:
        return self.frame.head(limit)


def parse_csv(text: str) -> ParsedCsv:
    """
    Parse CSV text into headers and string-valued rows.

    Quoted fields may contain commas and escaped quotes. Blank lines are
    skipped and every header and value is trimmed. Header cells are kept as
    written: a blank header stays "" and repeated headers are not renamed.

    Args:
        text: Raw CSV content

    Returns:
        ParsedCsv (empty when the text holds no header)

    Raises:
        DesignerImportError: If the text is not valid CSV
    """
    try:
        df = pd.read_csv(
            StringIO(text),
            header=None,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            skipinitialspace=True,
            index_col=False,
        )
    except pd.errors.EmptyDataError:
        return ParsedCsv(pd.DataFrame())
    except pd.errors.ParserError as e:
        raise DesignerImportError(f"Failed to parse CSV file: {e}")

    # Short rows come back as NaN even with keep_default_na off
    df = df.fillna("").apply(lambda column: column.astype(str).str.strip())

    headers = list(df.iloc[0])
    frame = df.iloc[1:].reset_index(drop=True)
    frame.columns = headers

    return ParsedCsv(frame)


def preview_rows(rows: list[dict[str, str]], limit: int = PREVIEW_ROWS) -> list[dict[str, str]]:
    """First ``limit`` rows, as shown before importing"""
    return rows[:limit]


def build_template() -> str:
    """CSV text with every designer field as header and one example row"""
    template = pd.DataFrame([TEMPLATE_EXAMPLE_ROW], columns=TEMPLATE_HEADERS)
    return template.to_csv(index=False, lineterminator="\n")


def write_template(directory: str | Path = ".") -> Path:
    """Write the import template into ``directory`` and return its path"""
    output_path = Path(directory) / TEMPLATE_FILE_NAME
    output_path.write_text(build_template(), encoding="utf-8")
    logger.info(f"Wrote import template to {output_path}")
    return output_path


@dataclass
class CsvImportSession:
    """A parsed CSV file awaiting review of its column mappings"""

    upload: UploadFile
    parsed: ParsedCsv
    mappings: list[FieldMapping] = field(default_factory=list)

    @property
    def headers(self) -> list[str]:
        return self.parsed.headers

    @property
    def row_count(self) -> int:
        return len(self.parsed.frame)

    def preview(self) -> pd.DataFrame:
        return self.parsed.preview()

    def remap(self, csv_column: str, db_field: str) -> None:
        self.mappings = update_mapping(self.mappings, csv_column, db_field)

    def missing_required_fields(self) -> list[str]:
        return missing_required_fields(self.mappings)

    def can_import(self) -> bool:
        return self.row_count > 0 and is_complete(self.mappings)

    def mapped_preview(self) -> pd.DataFrame:
        """Preview rows with columns renamed to designer fields"""
        return transform_data(self.preview(), self.mappings)


class CSVImporter(DesignerImporter):
    """
    Importer for designer CSV files.

    Columns are auto-mapped to designer fields; the file and the reviewed
    mappings are then uploaded together and created server-side.
    """

    def __init__(self, client):
        super().__init__("CSV", client)

    def check_file(self, upload: UploadFile) -> tuple[str, str] | None:
        if upload.content_type != CSV_CONTENT_TYPE and not upload.name.endswith(".csv"):
            return ("Invalid file type", "Please upload a CSV file.")
        return None

    def build_session(self, files: list[UploadFile], **kwargs) -> CsvImportSession:
        """
        Parse the first selected file and auto-map its columns.

        Args:
            files: Selected files; only the first is read

        Returns:
            CsvImportSession ready for review
        """
        upload = files[0]

        try:
            text = upload.data.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise DesignerImportError(f"Failed to read CSV file {upload.name}: {e}")

        parsed = parse_csv(text)
        logger.info(
            f"Parsed {upload.name}: {len(parsed.headers)} columns, {len(parsed.frame)} rows"
        )

        return CsvImportSession(
            upload=upload, parsed=parsed, mappings=auto_map(parsed.headers)
        )

    def load(self, upload: UploadFile) -> CsvImportSession:
        return self.prepare(upload)

    def submit(self, session: CsvImportSession) -> ImportResult:
        """
        Upload the CSV file with its mappings.

        Raises:
            DesignerImportError: If the file has no data rows
            IncompleteMappingError: If a required field is not mapped
            ApiError: If the server rejects the request
        """
        if session.row_count == 0:
            raise DesignerImportError(f"{session.upload.name} contains no rows to import")

        missing = session.missing_required_fields()
        if missing:
            raise IncompleteMappingError(missing)

        result = self.client.import_designers_csv(session.upload, session.mappings)
        logger.info(
            f"CSV import of {session.upload.name}: {result.imported} imported, "
            f"{len(result.errors)} errors"
        )
        return result
