from __future__ import annotations

from ..models.ingestion_result import IngestionResult

"""SUMMARY line rendering for an ingestion run."""


def _format_seconds(value: float) -> str:
    # Handle very small numbers and integer values appropriately
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        # Format very small numbers to avoid scientific notation
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return f"{value:.3f}".rstrip("0").rstrip(".")


def render_summary_line(result: IngestionResult) -> str:
    """Render a SUMMARY line from an IngestionResult.

    Format:
    SUMMARY source={source} status={status} rows={raw} records={n}
    discarded={d} defaulted={m} header_row={i} elapsed_sec={t}

    Examples:
        >>> from datetime import datetime, timezone
        >>> from src.models.ingestion_result import IngestionStatus
        >>> start = datetime(2024, 1, 1, 10, 0, 0, tzinfo=timezone.utc)
        >>> end = datetime(2024, 1, 1, 10, 0, 2, tzinfo=timezone.utc)
        >>> result = IngestionResult(
        ...     source="data/Companies.csv", status=IngestionStatus.LOADED,
        ...     start_time=start, end_time=end, header_index=1, raw_row_count=3,
        ... )
        >>> render_summary_line(result)
        'SUMMARY source=data/Companies.csv status=loaded rows=3 records=0 discarded=0 defaulted=0 header_row=1 elapsed_sec=2'
    """
    return (
        f"SUMMARY source={result.source} "
        f"status={result.status.value} "
        f"rows={result.raw_row_count} "
        f"records={len(result.records)} "
        f"discarded={result.discarded_rows} "
        f"defaulted={result.defaulted_rows} "
        f"header_row={result.header_index} "
        f"elapsed_sec={_format_seconds(result.elapsed_seconds)}"
    )
