from __future__ import annotations

import csv
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

import pandas as pd

from ..models.business_lead import LEAD_SCHEMA, BusinessLead

"""CSV export of the current lead view.

Every field is quote-wrapped unconditionally and embedded quotes are doubled,
so the output always re-tokenizes to the same values. Lines are separated by
a single LF with no trailing terminator.
"""

__all__ = [
    "EXPORT_FILENAME",
    "EXPORT_CONTENT_TYPE",
    "EXPORT_COLUMNS",
    "ExportArtifact",
    "export_leads",
    "build_export_artifact",
    "write_export",
]

EXPORT_FILENAME = "business-leads.csv"
EXPORT_CONTENT_TYPE = "text/csv"
EXPORT_COLUMNS: list[str] = [field.label for field in LEAD_SCHEMA]


@dataclass(frozen=True)
class ExportArtifact:
    """Downloadable export (fixed file name + content type)."""
    filename: str
    content_type: str
    text: str

    def encode(self) -> bytes:
        return self.text.encode("utf-8")


def leads_to_frame(leads: Sequence[BusinessLead]) -> pd.DataFrame:
    """Build a string-typed DataFrame with one column per schema label."""
    data = [lead.values() for lead in leads]
    return pd.DataFrame(data, columns=EXPORT_COLUMNS, dtype=object)


def export_leads(leads: Sequence[BusinessLead]) -> str:
    '''Serialize leads to quote-wrapped CSV text.

    Examples:
        >>> lead = BusinessLead("lead-0", 'Acme "A"', "", "Mfg", "NY", "US", "", "")
        >>> print(export_leads([lead]))
        "Name","Description","Primary Industry","Location","Country","Domain","LinkedIn URL"
        "Acme ""A""","","Mfg","NY","US","",""
    '''
    frame = leads_to_frame(leads)
    text = frame.to_csv(
        index=False,
        quoting=csv.QUOTE_ALL,
        doublequote=True,
        lineterminator="\n",
    )
    # to_csv は末尾に改行を付けるので 1 つだけ落とす (フィールド内改行は引用符内)
    if text.endswith("\n"):
        text = text[:-1]
    return text


def build_export_artifact(leads: Sequence[BusinessLead]) -> ExportArtifact:
    return ExportArtifact(
        filename=EXPORT_FILENAME,
        content_type=EXPORT_CONTENT_TYPE,
        text=export_leads(leads),
    )


def write_export(leads: Sequence[BusinessLead], directory: Path) -> Path:
    """Write the export artifact into ``directory`` and return the file path."""
    artifact = build_export_artifact(leads)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / artifact.filename
    path.write_bytes(artifact.encode())
    return path
