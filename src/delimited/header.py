from __future__ import annotations

from collections.abc import Sequence

from .tokenizer import RawRow

"""Header row detection.

Exports often prepend title/metadata rows, so the header is located by
content rather than assumed at row 0. Marker tokens are matched by case-insensitive
substring on the leading columns.
"""

__all__ = [
    "DEFAULT_HEADER_MARKERS",
    "DEFAULT_MIN_COLUMNS",
    "HeaderNotFoundError",
    "is_header_row",
    "locate_header",
]

DEFAULT_HEADER_MARKERS: tuple[str, ...] = ("name", "description")
DEFAULT_MIN_COLUMNS = 7


class HeaderNotFoundError(Exception):
    """Raised when no row satisfies the header heuristic."""


def is_header_row(
    row: RawRow,
    markers: Sequence[str] = DEFAULT_HEADER_MARKERS,
    min_columns: int = DEFAULT_MIN_COLUMNS,
) -> bool:
    if len(row) < max(min_columns, len(markers)):
        return False
    return all(marker.lower() in row[pos].lower() for pos, marker in enumerate(markers))


def locate_header(
    rows: Sequence[RawRow],
    markers: Sequence[str] = DEFAULT_HEADER_MARKERS,
    min_columns: int = DEFAULT_MIN_COLUMNS,
) -> int:
    """Return the zero-based index of the first row that qualifies as header.

    Raises:
        HeaderNotFoundError: If no row qualifies
    """
    for index, row in enumerate(rows):
        if is_header_row(row, markers, min_columns):
            return index
    raise HeaderNotFoundError(
        f"header row not found (markers={list(markers)} min_columns={min_columns} rows={len(rows)})"
    )
