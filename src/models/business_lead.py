from __future__ import annotations

from dataclasses import dataclass

"""BusinessLead model and the positional mapping schema.

BusinessLead represents one company row from a leads export after header
detection and defaulting. The schema below is the single place where the
positional column order and per-field defaults are declared.
"""

__all__ = [
    "BusinessLead",
    "FieldSpec",
    "LEAD_SCHEMA",
    "LEAD_ID_PREFIX",
]

LEAD_ID_PREFIX = "lead-"


@dataclass(frozen=True)
class BusinessLead:
    """A single business lead (read-only catalog entry).

    ``id`` is derived from ingestion order (``lead-<n>``) and is only unique
    within one ingestion run.
    """
    id: str
    name: str
    description: str
    primary_industry: str
    location: str
    country: str
    domain: str
    linkedin_url: str

    def values(self) -> list[str]:
        """Field values in schema order (id excluded)."""
        return [getattr(self, field.attribute) for field in LEAD_SCHEMA]

    def content_equals(self, other: BusinessLead) -> bool:
        # id はラン毎に変わるので比較対象外
        return self.values() == other.values()


@dataclass(frozen=True)
class FieldSpec:
    """Positional column -> attribute mapping with a default for missing/empty cells."""
    attribute: str
    label: str  # エクスポート時のヘッダ名
    default: str = ""


LEAD_SCHEMA: tuple[FieldSpec, ...] = (
    FieldSpec("name", "Name", "Unknown Company"),  # primary key column
    FieldSpec("description", "Description", ""),
    FieldSpec("primary_industry", "Primary Industry", "Not Specified"),
    FieldSpec("location", "Location", "Unknown"),
    FieldSpec("country", "Country", "Unknown"),
    FieldSpec("domain", "Domain", ""),
    FieldSpec("linkedin_url", "LinkedIn URL", ""),
)
