import logging
from pathlib import Path

import typer

from import_designers import (
    CSVImporter,
    DesignerImportError,
    FileValidationError,
    ImporterFactory,
    LinkedInImporter,
    PDFImporter,
    TapestryClient,
    UploadFile,
    WorkspaceContext,
)
from import_designers.config import Settings
from import_designers.database import ImportHistory, database_exists
from import_designers.drivers.csv_importer import PREVIEW_ROWS, write_template
from import_designers.feedback import format_feedback
from import_designers.presenter import (
    format_batch_results,
    format_contact_result,
    format_csv_result,
    format_mappings,
    format_table,
)

app = typer.Typer()

# Create a command group for import-designers commands
import_app = typer.Typer()
app.add_typer(
    import_app, name="import-designers", help="Import designers from CSV files or PDF exports"
)

# Register available importers
ImporterFactory.register("csv", CSVImporter)
ImporterFactory.register("pdf", PDFImporter)
ImporterFactory.register("linkedin", LinkedInImporter)


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging")):
    """
    Tapestry designer import tools.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _settings(base_url: str, workspace: str, history_db: str) -> Settings:
    return Settings.from_env().override(
        base_url=base_url, workspace=workspace, history_db=history_db
    )


def _build_client(settings: Settings) -> TapestryClient:
    return TapestryClient(
        settings.base_url,
        workspace=WorkspaceContext(settings.workspace),
        timeout=settings.timeout,
    )


def _echo_lines(lines: list[str]):
    for line in lines:
        typer.echo(line)


def _parse_overrides(overrides: list[str]) -> list[tuple[str, str]]:
    """Split COLUMN=FIELD options; an empty FIELD means don't import"""
    parsed = []
    for override in overrides or []:
        if "=" not in override:
            raise typer.BadParameter(f"Expected COLUMN=FIELD, got '{override}'", param_hint="--map")
        column, db_field = override.rsplit("=", 1)
        parsed.append((column.strip(), db_field.strip()))
    return parsed


@import_app.command("csv")
def import_csv(
    file_path: Path = typer.Argument(..., help="Path to CSV file", exists=True, dir_okay=False),
    mapping: list[str] = typer.Option(
        None, "--map", help="Override a column mapping, e.g. --map 'Job Role=title'"
    ),
    base_url: str = typer.Option(None, help="Tapestry base URL [env: TAPESTRY_BASE_URL]"),
    workspace: str = typer.Option(None, help="Workspace slug [env: TAPESTRY_WORKSPACE]"),
    history_db: str = typer.Option(None, help="Path to import history SQLite file"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Import without asking"),
):
    """
    Import designers from a CSV file.
    """
    settings = _settings(base_url, workspace, history_db)
    overrides = _parse_overrides(mapping)

    try:
        importer = ImporterFactory.create("csv", _build_client(settings))
        upload = UploadFile.from_path(file_path)

        typer.echo(f"Reading CSV file: {file_path}")
        session = importer.prepare(upload)

        for column, db_field in overrides:
            session.remap(column, db_field)

        typer.echo(f"\nField mapping ({len(session.headers)} columns):")
        _echo_lines(format_mappings(session.mappings))

        typer.echo(f"\nPreview (first {PREVIEW_ROWS} of {session.row_count} rows):")
        _echo_lines(format_table(session.preview()))

        if session.row_count == 0:
            typer.echo("❌ No rows to import", err=True)
            raise typer.Exit(1)

        missing = session.missing_required_fields()
        if missing:
            typer.echo(
                f"❌ Required fields not mapped: {', '.join(missing)}. "
                "Use --map COLUMN=FIELD to map them.",
                err=True,
            )
            raise typer.Exit(1)

        if not yes and not typer.confirm(f"Import {session.row_count} designers?"):
            typer.echo("Import cancelled.")
            raise typer.Exit(0)

        result = importer.submit(session)
        ImportHistory(settings.history_db).record(
            "csv", result, files=[upload.name], workspace=settings.workspace
        )

        _echo_lines(format_csv_result(result))

    except (DesignerImportError, ValueError, OSError) as e:
        typer.echo(f"❌ Error importing CSV data: {e}", err=True)
        raise typer.Exit(1)


def _import_pdf_files(
    source: str,
    files: list[Path],
    settings: Settings,
    yes: bool,
):
    importer = ImporterFactory.create(source, _build_client(settings))
    uploads = [UploadFile.from_path(path) for path in files]

    typer.echo(f"Processing {len(uploads)} file(s) from {importer.source_name}...")

    try:
        session = importer.prepare(
            uploads,
            on_progress=lambda progress, name: typer.echo(f"  [{progress:5.1f}%] {name}"),
        )
    except FileValidationError as e:
        typer.echo(f"❌ {e.title}: {e.reason}", err=True)
        raise typer.Exit(1)

    typer.echo("")
    _echo_lines(format_batch_results(session))

    contact_count = session.total_contacts
    if contact_count == 0:
        typer.echo("❌ No contacts extracted", err=True)
        raise typer.Exit(1)

    if not yes and not typer.confirm(f"Import all {contact_count} contacts?"):
        typer.echo("Import cancelled.")
        raise typer.Exit(0)

    result = importer.submit(session)
    ImportHistory(settings.history_db).record(
        source,
        result,
        files=[batch.file_name for batch in session.results],
        workspace=settings.workspace,
    )

    typer.echo("")
    _echo_lines(format_contact_result(result))


@import_app.command("pdf")
def import_pdf(
    files: list[Path] = typer.Argument(..., help="PDF files to process", exists=True, dir_okay=False),
    base_url: str = typer.Option(None, help="Tapestry base URL [env: TAPESTRY_BASE_URL]"),
    workspace: str = typer.Option(None, help="Workspace slug [env: TAPESTRY_WORKSPACE]"),
    history_db: str = typer.Option(None, help="Path to import history SQLite file"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Import without asking"),
):
    """
    Extract contacts from PDF files and import them as designers.
    """
    try:
        _import_pdf_files("pdf", files, _settings(base_url, workspace, history_db), yes)
    except (DesignerImportError, OSError) as e:
        typer.echo(f"❌ Error importing PDF data: {e}", err=True)
        raise typer.Exit(1)


@import_app.command("linkedin")
def import_linkedin(
    files: list[Path] = typer.Argument(
        ..., help="LinkedIn PDF exports to process", exists=True, dir_okay=False
    ),
    base_url: str = typer.Option(None, help="Tapestry base URL [env: TAPESTRY_BASE_URL]"),
    workspace: str = typer.Option(None, help="Workspace slug [env: TAPESTRY_WORKSPACE]"),
    history_db: str = typer.Option(None, help="Path to import history SQLite file"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Import without asking"),
):
    """
    Import contacts from LinkedIn connection or search-result PDF exports.
    """
    try:
        _import_pdf_files("linkedin", files, _settings(base_url, workspace, history_db), yes)
    except (DesignerImportError, OSError) as e:
        typer.echo(f"❌ Error importing from LinkedIn: {e}", err=True)
        raise typer.Exit(1)


@import_app.command("template")
def download_template(
    output_dir: Path = typer.Option(Path("."), help="Directory to write the template into"),
):
    """
    Write a designers CSV template with every field and one example row.
    """
    try:
        output_path = write_template(output_dir)
    except OSError as e:
        typer.echo(f"❌ Error writing template: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"✅ Template saved to: {output_path.absolute()}")


@app.command()
def feedback(
    base_url: str = typer.Option(None, help="Tapestry base URL [env: TAPESTRY_BASE_URL]"),
    workspace: str = typer.Option(None, help="Workspace slug [env: TAPESTRY_WORKSPACE]"),
):
    """
    Show recommendation feedback analytics for a workspace.
    """
    settings = _settings(base_url, workspace, None)

    try:
        analytics = _build_client(settings).get_feedback_analytics()
    except DesignerImportError as e:
        typer.echo(f"❌ Unable to load feedback analytics: {e}", err=True)
        raise typer.Exit(1)

    typer.echo("\n📊 Feedback Analytics:")
    _echo_lines(format_feedback(analytics))


@app.command()
def show_history(
    history_db: str = typer.Option(None, help="Path to import history SQLite file"),
    limit: int = typer.Option(10, help="Number of records to display"),
    source: str = typer.Option(None, help="Filter by source (csv, pdf, linkedin)"),
):
    """
    Display past import sessions from the local history database.
    """
    settings = _settings(None, None, history_db)

    if not database_exists(settings.history_db):
        typer.echo(f"❌ History database not found: {settings.history_db}", err=True)
        raise typer.Exit(1)

    history = ImportHistory(settings.history_db)
    records = history.get_records(limit=limit, source=source)
    filter_msg = f" (filtered by source: {source})" if source else ""

    if not records:
        typer.echo(f"No import records found{filter_msg}.")
        return

    total_count = history.count_records(source=source)
    typer.echo(f"Showing {len(records)} of {total_count} import records{filter_msg}:")
    typer.echo("-" * 80)

    for record in records:
        status = "✅" if record.success else "⚠️ "
        typer.echo(f"{status} #{record.id} {record.source} at {record.created_at}")
        typer.echo(f"  Workspace: {record.workspace or '-'}")
        typer.echo(f"  Files: {record.files or '-'}")
        typer.echo(
            f"  Imported: {record.imported}  Skipped: {record.skipped}  Errors: {record.error_count}"
        )
        if record.message:
            typer.echo(f"  Message: {record.message}")
        typer.echo("-" * 80)


if __name__ == "__main__":
    app()
