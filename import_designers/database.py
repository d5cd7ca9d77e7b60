"""
Local journal of submitted import sessions.
"""

import logging
from datetime import datetime, timezone
from pathlib import Path

from sqlmodel import Field, Session, SQLModel, create_engine, select

from .models import ImportResult

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ImportRecord(SQLModel, table=True):
    """One submitted import session and its outcome"""

    id: int | None = Field(default=None, primary_key=True)

    source: str = Field(index=True, description="Importer source (csv, pdf, linkedin)")
    workspace: str | None = Field(default=None, description="Workspace slug")
    files: str | None = Field(default=None, description="Comma-separated file names")

    success: bool = Field(default=False)
    imported: int = Field(default=0)
    skipped: int = Field(default=0)
    error_count: int = Field(default=0)
    message: str | None = Field(default=None)

    created_at: datetime = Field(default_factory=_utcnow, description="Submission time")


def create_database_engine(db_path: str = "import_history.db"):
    """Create SQLite database engine"""
    sqlite_url = f"sqlite:///{db_path}"
    engine = create_engine(sqlite_url, echo=False)
    return engine


def create_tables(engine):
    """Create all tables in the database"""
    SQLModel.metadata.create_all(engine)


def database_exists(db_path: str) -> bool:
    """Check if database file exists"""
    return Path(db_path).exists()


class ImportHistory:
    """Database service for the import journal"""

    def __init__(self, db_path: str = "import_history.db"):
        self.db_path = db_path
        self.engine = create_database_engine(db_path)
        create_tables(self.engine)

    def record(
        self,
        source: str,
        result: ImportResult,
        files: list[str] | None = None,
        workspace: str | None = None,
    ) -> ImportRecord:
        """
        Journal the outcome of one submission.

        Args:
            source: Importer source key
            result: Result returned by the import endpoint
            files: Names of the files that were submitted
            workspace: Workspace slug the import ran against

        Returns:
            The stored ImportRecord
        """
        record = ImportRecord(
            source=source.lower(),
            workspace=workspace,
            files=", ".join(files) if files else None,
            success=result.success,
            imported=result.imported,
            skipped=result.skipped,
            error_count=len(result.errors),
            message=result.message,
        )

        with Session(self.engine) as session:
            session.add(record)
            session.commit()
            session.refresh(record)

        logger.debug(f"Recorded {record.source} import #{record.id} in {self.db_path}")
        return record

    def get_records(self, limit: int = None, source: str = None) -> list[ImportRecord]:
        """
        Retrieve journaled imports, newest first.

        Args:
            limit: Maximum number of records to return
            source: Filter by source (optional)

        Returns:
            List of ImportRecord objects
        """
        with Session(self.engine) as session:
            statement = select(ImportRecord).order_by(ImportRecord.id.desc())

            if source:
                statement = statement.where(ImportRecord.source == source.lower())

            if limit:
                statement = statement.limit(limit)

            records = session.exec(statement).all()
            return list(records)

    def count_records(self, source: str = None) -> int:
        """Count journaled imports, optionally for one source"""
        with Session(self.engine) as session:
            statement = select(ImportRecord)

            if source:
                statement = statement.where(ImportRecord.source == source.lower())

            return len(session.exec(statement).all())
