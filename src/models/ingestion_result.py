from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from .business_lead import BusinessLead

"""Ingestion result models for the business leads catalog.

An ingestion run fetches one document, tokenizes it, locates the header and
maps the data rows. The result is returned to the caller whether the run
succeeded or not; a failed run carries an empty record list plus the error
classification so that "failed" is never confused with "zero leads".
"""

__all__ = [
    "IngestionStatus",
    "IngestionResult",
    "TRANSPORT_ERROR",
    "HEADER_NOT_FOUND",
]

TRANSPORT_ERROR = "TRANSPORT_ERROR"
HEADER_NOT_FOUND = "HEADER_NOT_FOUND"


class IngestionStatus(Enum):
    """Status of a lead loader.

    State transitions: pending → loading → (loaded | failed)

    - PENDING: nothing loaded yet
    - LOADING: a run is in flight (second trigger is rejected)
    - LOADED: records available (possibly zero legitimate records)
    - FAILED: transport failure or header not found
    """
    PENDING = "pending"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


@dataclass(frozen=True)
class IngestionResult:
    """Outcome of a single ingestion run."""
    source: str
    status: IngestionStatus
    start_time: datetime
    end_time: datetime
    records: list[BusinessLead] = field(default_factory=list)
    header_index: int = -1  # 不明な場合 -1
    raw_row_count: int = 0  # tokenizer が返した行数 (ヘッダ・メタ行含む)
    discarded_rows: int = 0  # 先頭列が空で除外された行
    defaulted_rows: int = 0  # 列不足でデフォルト補完された行
    error_type: str | None = None  # UPPER_SNAKE
    error_message: str | None = None

    @property
    def ok(self) -> bool:
        return self.status is IngestionStatus.LOADED

    @property
    def elapsed_seconds(self) -> float:
        return (self.end_time - self.start_time).total_seconds()
