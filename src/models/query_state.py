from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum

from .business_lead import BusinessLead

"""View-state models for browsing the in-memory lead catalog.

QueryState is transient and never persisted. Every change to search, filters
or sort produces a new state with the page reset to 1; only ``with_page``
keeps the current filters.
"""

__all__ = [
    "ALL",
    "DEFAULT_PAGE_SIZE",
    "SortKey",
    "QueryState",
    "Page",
    "LeadFacets",
]

ALL = "all"  # categorical filter sentinel (制約なし)
DEFAULT_PAGE_SIZE = 20


class SortKey(Enum):
    """Named sort orders offered to the user.

    ORIGINAL keeps ingestion order (no-op comparator).
    """
    ORIGINAL = "original"
    NAME = "name"
    COUNTRY = "country"
    INDUSTRY = "industry"

    @property
    def attribute(self) -> str | None:
        return _SORT_ATTRIBUTES[self]


_SORT_ATTRIBUTES: dict[SortKey, str | None] = {
    SortKey.ORIGINAL: None,
    SortKey.NAME: "name",
    SortKey.COUNTRY: "country",
    SortKey.INDUSTRY: "primary_industry",
}


@dataclass(frozen=True)
class QueryState:
    search: str = ""
    industry: str = ALL
    country: str = ALL
    sort_key: SortKey = SortKey.ORIGINAL
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE

    def __post_init__(self) -> None:
        if self.page_size < 1:
            raise ValueError(f"page_size must be >= 1: {self.page_size}")

    def with_search(self, term: str) -> QueryState:
        return replace(self, search=term, page=1)

    def with_industry(self, industry: str) -> QueryState:
        return replace(self, industry=industry, page=1)

    def with_country(self, country: str) -> QueryState:
        return replace(self, country=country, page=1)

    def with_sort(self, sort_key: SortKey) -> QueryState:
        return replace(self, sort_key=sort_key, page=1)

    def with_page(self, page: int) -> QueryState:
        # clamp は総件数が分かる paginate() 側で行う
        return replace(self, page=page)


@dataclass(frozen=True)
class Page:
    """One page of the filtered view.

    ``start_index``/``end_index`` are the 1-based bounds used for the
    "Showing X to Y of Z results" line; both are 0 when the view is empty.
    """
    number: int
    total_pages: int
    page_size: int
    total_count: int
    items: list[BusinessLead] = field(default_factory=list)

    @property
    def start_index(self) -> int:
        if not self.items:
            return 0
        return (self.number - 1) * self.page_size + 1

    @property
    def end_index(self) -> int:
        if not self.items:
            return 0
        return self.start_index + len(self.items) - 1

    @property
    def has_previous(self) -> bool:
        return self.number > 1

    @property
    def has_next(self) -> bool:
        return self.number < self.total_pages


@dataclass(frozen=True)
class LeadFacets:
    """Distinct filter choices (first-seen order, empty values skipped)."""
    industries: list[str]
    countries: list[str]
    lead_count: int

    @property
    def industry_count(self) -> int:
        return len(self.industries)

    @property
    def country_count(self) -> int:
        return len(self.countries)
