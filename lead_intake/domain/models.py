from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

DEFAULT_CITY = "Not specified"
DEFAULT_DETAILS = ""
DEFAULT_FORM_TYPE = "general"
DEFAULT_SOURCE = "website"

# Column order of the lead sheet. Appended rows must follow it exactly.
HEADER_ROW: tuple[str, ...] = (
    "Timestamp",
    "Name",
    "Email",
    "Phone",
    "City",
    "Details",
    "Form Type",
    "Source",
    "Submission Time",
)


@dataclass(frozen=True)
class SubmissionInput:
    """Caller-supplied form fields, untyped and possibly missing."""

    name: object = None
    email: object = None
    phone: object = None
    city: object = None
    details: object = None
    form_type: object = None
    timestamp: object = None
    source: object = None

    @classmethod
    def from_mapping(cls, raw: Mapping[str, object]) -> SubmissionInput:
        return cls(
            name=raw.get("name"),
            email=raw.get("email"),
            phone=raw.get("phone"),
            city=raw.get("city"),
            details=raw.get("details"),
            form_type=raw.get("formType"),
            timestamp=raw.get("timestamp"),
            source=raw.get("source"),
        )


@dataclass(frozen=True)
class LeadFields:
    timestamp: str
    name: str
    email: str
    phone: str
    city: str
    details: str
    form_type: str
    source: str


@dataclass(frozen=True)
class CanonicalRow:
    fields: LeadFields
    submitted_at_local: str

    def as_values(self) -> list[str]:
        return [
            self.fields.timestamp,
            self.fields.name,
            self.fields.email,
            self.fields.phone,
            self.fields.city,
            self.fields.details,
            self.fields.form_type,
            self.fields.source,
            self.submitted_at_local,
        ]


def _quote_sheet_name(sheet_name: str) -> str:
    escaped = sheet_name.replace("'", "''")
    return f"'{escaped}'"


def header_range(sheet_name: str) -> str:
    return f"{_quote_sheet_name(sheet_name)}!A1:I1"


def rows_range(sheet_name: str) -> str:
    return f"{_quote_sheet_name(sheet_name)}!A:I"


def preview_range(sheet_name: str) -> str:
    return f"{_quote_sheet_name(sheet_name)}!A1:I10"
