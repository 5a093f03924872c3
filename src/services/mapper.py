from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from ..delimited.tokenizer import RawRow
from ..logging.init import get_logger
from ..models.business_lead import LEAD_ID_PREFIX, LEAD_SCHEMA, BusinessLead, FieldSpec

"""Positional mapping of data rows into BusinessLead records.

Rows strictly after the header are mapped column-by-column onto the schema.
Ragged rows are tolerated: missing or empty cells resolve to the field
default. A row whose primary key column (first schema field) is empty is
discarded rather than kept as a blank lead.
"""

__all__ = [
    "MappingOutcome",
    "map_row",
    "map_rows",
]


@dataclass(frozen=True)
class MappingOutcome:
    records: list[BusinessLead] = field(default_factory=list)
    discarded_rows: int = 0
    defaulted_rows: int = 0  # 列数不足で補完した行 (除外行は含まない)


def map_row(
    row: RawRow, position: int, schema: Sequence[FieldSpec] = LEAD_SCHEMA
) -> BusinessLead | None:
    """Map one raw row; ``position`` is the row offset after the header.

    Returns None when the primary key column is empty.
    """
    primary = row[0].strip() if row else ""
    if not primary:
        return None
    values: dict[str, str] = {}
    for col, column in enumerate(schema):
        raw = row[col].strip() if col < len(row) else ""
        values[column.attribute] = raw or column.default
    return BusinessLead(id=f"{LEAD_ID_PREFIX}{position}", **values)


def map_rows(
    rows: Sequence[RawRow], header_index: int, schema: Sequence[FieldSpec] = LEAD_SCHEMA
) -> MappingOutcome:
    """Map every row after ``header_index``, preserving order."""
    logger = get_logger()
    records: list[BusinessLead] = []
    discarded = 0
    defaulted = 0
    expected = len(schema)
    for position, row in enumerate(rows[header_index + 1:]):
        lead = map_row(row, position, schema)
        if lead is None:
            discarded += 1
            logger.debug(f"row discarded (empty primary key) row={header_index + 1 + position}")
            continue
        if len(row) < expected:
            defaulted += 1
            logger.debug(
                f"row defaulted row={header_index + 1 + position} columns={len(row)}/{expected}"
            )
        records.append(lead)
    return MappingOutcome(records=records, discarded_rows=discarded, defaulted_rows=defaulted)
