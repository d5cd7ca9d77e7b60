"""
Data models for the designer import pipeline.

Wire-facing models use the camelCase names the Tapestry API speaks and accept
snake_case names when built in Python.
"""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class TargetField(BaseModel):
    """A designer attribute that a CSV column can be mapped to"""

    model_config = ConfigDict(frozen=True)

    value: str
    label: str
    required: bool = False


DB_FIELDS: list[TargetField] = [
    TargetField(value="name", label="Name (Required)", required=True),
    TargetField(value="title", label="Title (Required)", required=True),
    TargetField(value="email", label="Email (Required)", required=True),
    TargetField(value="level", label="Level (Required)", required=True),
    TargetField(value="location", label="Location"),
    TargetField(value="company", label="Company"),
    TargetField(value="website", label="Website"),
    TargetField(value="linkedIn", label="LinkedIn"),
    TargetField(value="skills", label="Skills (comma-separated)"),
    TargetField(value="available", label="Available (true/false)"),
    TargetField(value="notes", label="Notes"),
]

REQUIRED_FIELDS: list[str] = [field.value for field in DB_FIELDS if field.required]
OPTIONAL_FIELDS: list[str] = [field.value for field in DB_FIELDS if not field.required]


def get_target_field(value: str) -> TargetField | None:
    """Look up a target field by its value"""
    for field in DB_FIELDS:
        if field.value == value:
            return field
    return None


class FieldMapping(BaseModel):
    """Association between a CSV column and a designer field ("" = skip)"""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    csv_column: str = Field(alias="csvColumn")
    db_field: str = Field(default="", alias="dbField")

    @property
    def is_mapped(self) -> bool:
        return self.db_field != ""


class ExtractedContact(BaseModel):
    """A contact record returned by the PDF extraction service"""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    title: str | None = None
    company: str | None = None
    location: str | None = None
    email: str | None = None
    linked_in: str | None = Field(default=None, alias="linkedIn")
    skills: list[str] = Field(default_factory=list)
    experience: str | None = None
    confidence: float = Field(ge=0, le=1)

    @field_validator("skills", mode="before")
    @classmethod
    def validate_skills(cls, v):
        return [] if v is None else v

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class PdfProcessingResult(BaseModel):
    """Outcome of extracting contacts from one PDF"""

    model_config = ConfigDict(populate_by_name=True)

    success: bool
    contacts: list[ExtractedContact] = Field(default_factory=list)
    total_pages: int = Field(default=0, alias="totalPages")
    errors: list[str] = Field(default_factory=list)
    message: str | None = None
    file_name: str | None = Field(default=None, alias="fileName")

    @field_validator("contacts", "errors", mode="before")
    @classmethod
    def validate_lists(cls, v):
        return [] if v is None else v


class BatchProcessingResult(BaseModel):
    file_name: str
    result: PdfProcessingResult


class RowError(BaseModel):
    """
    One failed row or contact reported by an import endpoint.

    The CSV endpoint identifies rows by number (``row``), the contact endpoint
    by contact name (``contact``); both end up in ``row`` as text.
    """

    model_config = ConfigDict(frozen=True)

    row: str = Field(validation_alias=AliasChoices("row", "contact"))
    error: str

    @field_validator("row", mode="before")
    @classmethod
    def validate_row(cls, v):
        if v is None:
            return ""
        return v if isinstance(v, str) else str(v)


class ImportResult(BaseModel):
    """Summary of one bulk submission"""

    model_config = ConfigDict(frozen=True)

    success: bool
    imported: int = 0
    skipped: int = 0
    errors: tuple[RowError, ...] = ()
    message: str | None = None

    @field_validator("errors", mode="before")
    @classmethod
    def validate_errors(cls, v):
        return () if v is None else v
