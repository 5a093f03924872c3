"""Domain models for the business leads catalog.

This package contains the record, view-state and ingestion result models
shared by the delimited-text pipeline, the query engine and the CLI.
"""

from .business_lead import LEAD_SCHEMA, BusinessLead, FieldSpec
from .error_record import ErrorRecord
from .ingestion_result import IngestionResult, IngestionStatus
from .query_state import ALL, DEFAULT_PAGE_SIZE, LeadFacets, Page, QueryState, SortKey

__all__ = [
    # Record models
    "BusinessLead",
    "FieldSpec",
    "LEAD_SCHEMA",
    # View state
    "ALL",
    "DEFAULT_PAGE_SIZE",
    "LeadFacets",
    "Page",
    "QueryState",
    "SortKey",
    # Ingestion
    "ErrorRecord",
    "IngestionResult",
    "IngestionStatus",
]
