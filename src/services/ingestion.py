from __future__ import annotations

import threading
from datetime import UTC, datetime
from pathlib import Path

import httpx

from ..config.loader import LeadsConfig
from ..delimited.header import (
    DEFAULT_HEADER_MARKERS,
    DEFAULT_MIN_COLUMNS,
    HeaderNotFoundError,
    locate_header,
)
from ..delimited.tokenizer import tokenize
from ..logging.error_log import LOGS_DIR, ErrorLogBuffer
from ..logging.init import get_logger
from ..models.error_record import ErrorRecord
from ..models.ingestion_result import (
    HEADER_NOT_FOUND,
    TRANSPORT_ERROR,
    IngestionResult,
    IngestionStatus,
)
from .fetch import IngestionTransportError, fetch_document
from .mapper import map_rows

"""Ingestion orchestration: fetch -> tokenize -> locate header -> map.

ingest_text() / ingest_leads() never raise for the two fatal ingestion
conditions (transport failure, header not found). They return an
IngestionResult with status FAILED and an empty record list, log an ERROR
line and append a JSON Lines error record. Callers render an empty state
and may re-trigger ingestion.
"""

__all__ = [
    "IngestionInFlightError",
    "LeadLoader",
    "ingest_leads",
    "ingest_text",
]


class IngestionInFlightError(Exception):
    """Raised when a load is triggered while another one is still running."""


def _failed(
    source: str,
    start_time: datetime,
    error_type: str,
    error: Exception,
    error_log: ErrorLogBuffer | None,
    raw_row_count: int = 0,
) -> IngestionResult:
    logger = get_logger()
    logger.error(f"ingestion failed source={source} type={error_type}: {error}")
    if error_log is not None:
        error_log.append(ErrorRecord.create(source, -1, error_type, str(error)))
        path = error_log.flush()
        if path is not None:
            logger.debug(f"error log written: {path}")
    return IngestionResult(
        source=source,
        status=IngestionStatus.FAILED,
        start_time=start_time,
        end_time=datetime.now(UTC),
        raw_row_count=raw_row_count,
        error_type=error_type,
        error_message=str(error),
    )


def ingest_text(
    text: str,
    *,
    source: str = "<memory>",
    markers: tuple[str, ...] = DEFAULT_HEADER_MARKERS,
    min_columns: int = DEFAULT_MIN_COLUMNS,
    error_log: ErrorLogBuffer | None = None,
    start_time: datetime | None = None,
) -> IngestionResult:
    """Run the synchronous part of ingestion over already-loaded text."""
    if start_time is None:
        start_time = datetime.now(UTC)
    rows = tokenize(text)
    try:
        header_index = locate_header(rows, markers, min_columns)
    except HeaderNotFoundError as e:
        return _failed(source, start_time, HEADER_NOT_FOUND, e, error_log, raw_row_count=len(rows))

    outcome = map_rows(rows, header_index)
    get_logger().debug(
        f"header_row={header_index} rows={len(rows)} records={len(outcome.records)} "
        f"discarded={outcome.discarded_rows} defaulted={outcome.defaulted_rows}"
    )
    return IngestionResult(
        source=source,
        status=IngestionStatus.LOADED,
        start_time=start_time,
        end_time=datetime.now(UTC),
        records=outcome.records,
        header_index=header_index,
        raw_row_count=len(rows),
        discarded_rows=outcome.discarded_rows,
        defaulted_rows=outcome.defaulted_rows,
    )


def ingest_leads(
    config: LeadsConfig,
    *,
    client: httpx.Client | None = None,
    error_log: ErrorLogBuffer | None = None,
) -> IngestionResult:
    """Fetch the configured source and build the lead record set."""
    start_time = datetime.now(UTC)
    source = config.source
    try:
        text = fetch_document(source, timeout=config.request_timeout_sec, client=client)
    except IngestionTransportError as e:
        return _failed(source, start_time, TRANSPORT_ERROR, e, error_log)
    return ingest_text(
        text,
        source=source,
        markers=config.header.markers,
        min_columns=config.header.min_columns,
        error_log=error_log,
        start_time=start_time,
    )


class LeadLoader:
    """Single-source loader with an "ingestion already in flight" guard.

    State transitions: pending → loading → (loaded | failed); ``load()`` may
    be called again after completion to retry or refresh.
    """

    def __init__(
        self,
        config: LeadsConfig,
        *,
        client: httpx.Client | None = None,
        logs_dir: Path = LOGS_DIR,
    ) -> None:
        self._config = config
        self._client = client
        self._logs_dir = logs_dir
        self._lock = threading.Lock()
        self._status = IngestionStatus.PENDING
        self._result: IngestionResult | None = None

    @property
    def status(self) -> IngestionStatus:
        return self._status

    @property
    def result(self) -> IngestionResult | None:
        return self._result

    def load(self) -> IngestionResult:
        if not self._lock.acquire(blocking=False):
            raise IngestionInFlightError(f"ingestion already in flight: {self._config.source}")
        try:
            self._status = IngestionStatus.LOADING
            result = ingest_leads(
                self._config,
                client=self._client,
                error_log=ErrorLogBuffer(self._logs_dir),
            )
            self._result = result
            self._status = result.status
            return result
        except Exception:
            # 想定外エラー: PENDING に戻して再試行可能にする
            self._status = IngestionStatus.PENDING
            raise
        finally:
            self._lock.release()
