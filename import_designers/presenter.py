"""
Text rendering of import previews and results.
"""

from enum import Enum

import pandas as pd

from .mapping import required_mapping_count
from .models import REQUIRED_FIELDS, ExtractedContact, FieldMapping, ImportResult, get_target_field


HIGH_CONFIDENCE = 0.8
MEDIUM_CONFIDENCE = 0.6


class ConfidenceTier(Enum):
    HIGH = ("High", "green")
    MEDIUM = ("Medium", "yellow")
    LOW = ("Low", "red")

    def __init__(self, label: str, color: str):
        self.label = label
        self.color = color


def confidence_tier(confidence: float) -> ConfidenceTier:
    """Bucket an extraction confidence; each lower edge is inclusive"""
    if confidence >= HIGH_CONFIDENCE:
        return ConfidenceTier.HIGH
    if confidence >= MEDIUM_CONFIDENCE:
        return ConfidenceTier.MEDIUM
    return ConfidenceTier.LOW


def format_table(df: pd.DataFrame) -> list[str]:
    if df.empty:
        return ["(no rows)"]
    return df.to_string(index=False).splitlines()


def format_mappings(mappings: list[FieldMapping]) -> list[str]:
    lines = []
    width = max((len(mapping.csv_column) for mapping in mappings), default=0)

    for mapping in mappings:
        target = get_target_field(mapping.db_field)
        if target is None:
            lines.append(f"  {mapping.csv_column:<{width}}  ->  Don't import")
            continue
        marker = "  [Required]" if target.required else ""
        lines.append(f"  {mapping.csv_column:<{width}}  ->  {target.label}{marker}")

    lines.append(
        f"{required_mapping_count(mappings)} of {len(REQUIRED_FIELDS)} required fields mapped"
    )
    return lines


def format_contact(contact: ExtractedContact) -> str:
    """One-line summary: name, title, company, first two skills, confidence"""
    parts = [contact.name]
    if contact.title:
        parts.append(contact.title)
    if contact.company:
        parts.append(f"at {contact.company}")

    line = " · ".join(parts)

    if contact.skills:
        skills = ", ".join(contact.skills[:2])
        if len(contact.skills) > 2:
            skills += f" +{len(contact.skills) - 2}"
        line += f" [{skills}]"

    tier = confidence_tier(contact.confidence)
    return f"{line} ({tier.label})"


def format_batch_results(session) -> list[str]:
    """Summary counts followed by each file's contacts and errors"""
    lines = [
        f"Files processed: {len(session.results)}",
        f"Total contacts: {session.total_contacts}",
        f"High confidence: {session.high_confidence_contacts}",
        f"Successful files: {session.successful_files}",
    ]

    for batch in session.results:
        status = "✅" if batch.result.success else "❌"
        lines.append("")
        lines.append(f"{status} {batch.file_name} ({len(batch.result.contacts)} contacts)")
        for contact in batch.result.contacts:
            lines.append(f"    {format_contact(contact)}")
        if batch.result.errors:
            lines.append("    Errors:")
            lines.extend(f"      - {error}" for error in batch.result.errors)

    return lines


def format_csv_result(result: ImportResult) -> list[str]:
    if result.success:
        lines = [f"✅ Successfully imported {result.imported} designers."]
    else:
        lines = [f"⚠️  Import completed with errors. {result.imported} designers imported."]
        if result.message:
            lines.append(f"  {result.message}")

    if result.errors:
        lines.append("Errors:")
        lines.extend(
            f"  Row {error.row}: {error.error}" if error.row else f"  {error.error}"
            for error in result.errors
        )
    return lines


def format_contact_result(result: ImportResult) -> list[str]:
    status = "✅" if result.success else "⚠️ "
    lines = [
        f"{status} Successfully imported: {result.imported}",
        f"   Skipped (duplicates): {result.skipped}",
    ]
    if result.message and not result.success:
        lines.append(f"  {result.message}")

    if result.errors:
        lines.append("Import errors:")
        lines.extend(
            f"  {error.row}: {error.error}" if error.row else f"  {error.error}"
            for error in result.errors
        )
    return lines
