"""
Automatic mapping of CSV columns to designer fields.

A column is matched against ``EXACT_MATCHES`` first. On a miss the
``PATTERN_RULES`` are tried in declaration order and the first rule with a
substring hit wins, so "Company Name" maps to ``name``, not ``company``.
"""

import logging

import pandas as pd

from .models import DB_FIELDS, REQUIRED_FIELDS, FieldMapping, get_target_field

logger = logging.getLogger(__name__)

EXACT_MATCHES: dict[str, str] = {
    "name": "name",
    "title": "title",
    "email": "email",
    "level": "level",
    "location": "location",
    "company": "company",
    "website": "website",
    "linkedin": "linkedIn",
    "skills": "skills",
    "available": "available",
    "notes": "notes",
}

# Order matters: the first rule whose substrings hit decides the field
PATTERN_RULES: list[tuple[tuple[str, ...], str]] = [
    (("name",), "name"),
    (("title", "position"), "title"),
    (("email",), "email"),
    (("level", "seniority"), "level"),
    (("location", "city"), "location"),
    (("company", "organization"), "company"),
    (("website", "url"), "website"),
    (("linkedin",), "linkedIn"),
    (("skill",), "skills"),
    (("available",), "available"),
    (("note",), "notes"),
]


def normalize_column(column: str) -> str:
    return column.strip().lower()


def auto_map_column(column: str) -> str:
    """
    Guess the designer field for a CSV column.

    Args:
        column: CSV header as it appears in the file

    Returns:
        Target field value, or "" when nothing matches
    """
    key = normalize_column(column)

    if key in EXACT_MATCHES:
        return EXACT_MATCHES[key]

    for needles, db_field in PATTERN_RULES:
        if any(needle in key for needle in needles):
            return db_field

    return ""


def auto_map(columns: list[str]) -> list[FieldMapping]:
    """Build one mapping per column, in column order"""
    mappings = [
        FieldMapping(csv_column=column, db_field=auto_map_column(column))
        for column in columns
    ]
    logger.debug(
        f"Auto-mapped {sum(m.is_mapped for m in mappings)} of {len(mappings)} columns"
    )
    return mappings


def update_mapping(
    mappings: list[FieldMapping], csv_column: str, db_field: str
) -> list[FieldMapping]:
    """
    Return a copy of ``mappings`` with one column pointed at a new field.

    Args:
        mappings: Current mapping set
        csv_column: Column to change
        db_field: Target field value, or "" to stop importing the column

    Raises:
        ValueError: If the column or the field is unknown
    """
    if db_field and get_target_field(db_field) is None:
        available = ", ".join(field.value for field in DB_FIELDS)
        raise ValueError(f"Unknown field '{db_field}'. Available fields: {available}")

    if not any(mapping.csv_column == csv_column for mapping in mappings):
        raise ValueError(f"Unknown CSV column '{csv_column}'")

    return [
        FieldMapping(csv_column=mapping.csv_column, db_field=db_field)
        if mapping.csv_column == csv_column
        else mapping
        for mapping in mappings
    ]


def mapped_required_fields(mappings: list[FieldMapping]) -> list[str]:
    """Required fields with at least one column mapped, in declared order"""
    mapped = {mapping.db_field for mapping in mappings if mapping.is_mapped}
    return [field for field in REQUIRED_FIELDS if field in mapped]


def missing_required_fields(mappings: list[FieldMapping]) -> list[str]:
    mapped = set(mapped_required_fields(mappings))
    return [field for field in REQUIRED_FIELDS if field not in mapped]


def is_complete(mappings: list[FieldMapping]) -> bool:
    """True when every required field has a column mapped to it"""
    return not missing_required_fields(mappings)


def required_mapping_count(mappings: list[FieldMapping]) -> int:
    """Number of columns mapped onto a required field"""
    return sum(1 for mapping in mappings if mapping.db_field in REQUIRED_FIELDS)


def transform_data(df: pd.DataFrame, mappings: list[FieldMapping]) -> pd.DataFrame:
    """
    Project CSV rows onto designer fields.

    When several columns map to the same field the later column wins, and a
    repeated header reads its later column.

    Args:
        df: Parsed CSV data
        mappings: Column to field mappings

    Returns:
        DataFrame whose columns are designer field values
    """
    transformed_data = {}

    for mapping in mappings:
        if mapping.is_mapped and mapping.csv_column in df.columns:
            values = df.loc[:, mapping.csv_column]
            if isinstance(values, pd.DataFrame):
                values = values.iloc[:, -1]
            transformed_data[mapping.db_field] = values

    return pd.DataFrame(transformed_data, index=df.index)
