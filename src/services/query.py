from __future__ import annotations

import math
import unicodedata
from collections.abc import Iterable, Sequence

import pandas as pd

from ..models.business_lead import BusinessLead
from ..models.query_state import ALL, DEFAULT_PAGE_SIZE, LeadFacets, Page, QueryState, SortKey

"""Query engine over the in-memory lead catalog.

The filtered view is recomputed from the full record set on every state
change (search -> categorical filters -> sort). No index is maintained; the
expected scale is hundreds to low thousands of leads per load.

Search: case-insensitive substring over name/description/industry/location/
country. Filters: exact, case-sensitive match unless set to "all".
Sort: stable, using an accent- and case-folded collation key.
"""

__all__ = [
    "SEARCH_ATTRIBUTES",
    "LeadBrowser",
    "apply_query",
    "collation_key",
    "collect_facets",
    "paginate",
]

SEARCH_ATTRIBUTES: tuple[str, ...] = (
    "name",
    "description",
    "primary_industry",
    "location",
    "country",
)


def collation_key(text: str) -> str:
    """Locale-insensitive approximation of a user-facing string ordering."""
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(c for c in decomposed if not unicodedata.combining(c)).casefold()


def _to_frame(records: Sequence[BusinessLead]) -> pd.DataFrame:
    # index = records 内の位置 (並べ替え後にレコードへ戻すため)
    return pd.DataFrame(
        {attr: [getattr(r, attr) for r in records] for attr in SEARCH_ATTRIBUTES},
        dtype=object,
    )


def apply_query(records: Sequence[BusinessLead], state: QueryState) -> list[BusinessLead]:
    """Return the filtered and sorted view for ``state`` (pagination excluded)."""
    if not records:
        return []
    frame = _to_frame(records)
    mask = pd.Series(True, index=frame.index)

    if state.search:
        needle = state.search.lower()
        hit = pd.Series(False, index=frame.index)
        for attr in SEARCH_ATTRIBUTES:
            hit |= frame[attr].str.lower().str.contains(needle, regex=False)
        mask &= hit

    if state.industry != ALL:
        mask &= frame["primary_industry"] == state.industry
    if state.country != ALL:
        mask &= frame["country"] == state.country

    selected = frame[mask.astype(bool)]
    attr = state.sort_key.attribute
    if attr is not None and not selected.empty:
        selected = selected.sort_values(
            by=attr,
            key=lambda col: col.map(collation_key),
            kind="stable",
        )
    return [records[pos] for pos in selected.index]


def paginate(view: Sequence[BusinessLead], page: int, page_size: int = DEFAULT_PAGE_SIZE) -> Page:
    """Slice one page out of ``view``; out-of-range pages are clamped, never an error."""
    if page_size < 1:
        raise ValueError(f"page_size must be >= 1: {page_size}")
    total = len(view)
    total_pages = math.ceil(total / page_size)
    number = min(max(page, 1), max(total_pages, 1))
    start = (number - 1) * page_size
    return Page(
        number=number,
        total_pages=total_pages,
        page_size=page_size,
        total_count=total,
        items=list(view[start:start + page_size]),
    )


def collect_facets(records: Iterable[BusinessLead]) -> LeadFacets:
    """Distinct industries/countries for filter choices, in first-seen order."""
    leads = list(records)
    industries = list(dict.fromkeys(r.primary_industry for r in leads if r.primary_industry))
    countries = list(dict.fromkeys(r.country for r in leads if r.country))
    return LeadFacets(industries=industries, countries=countries, lead_count=len(leads))


class LeadBrowser:
    """Holds the immutable lead set plus the current QueryState.

    Every state change recomputes the view from scratch. Changing search,
    filters or sort resets the page to 1.
    """

    def __init__(
        self,
        records: Iterable[BusinessLead],
        state: QueryState | None = None,
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> None:
        self._records: tuple[BusinessLead, ...] = tuple(records)
        self._state = state if state is not None else QueryState(page_size=page_size)
        self._view = apply_query(self._records, self._state)

    @property
    def records(self) -> tuple[BusinessLead, ...]:
        return self._records

    @property
    def state(self) -> QueryState:
        return self._state

    @property
    def view(self) -> list[BusinessLead]:
        return list(self._view)

    def _set_state(self, state: QueryState) -> Page:
        self._state = state
        self._view = apply_query(self._records, state)
        page = paginate(self._view, state.page, state.page_size)
        if page.number != state.page:
            self._state = state.with_page(page.number)
        return page

    def update(
        self,
        *,
        search: str | None = None,
        industry: str | None = None,
        country: str | None = None,
        sort_key: SortKey | None = None,
    ) -> Page:
        state = self._state
        if search is not None:
            state = state.with_search(search)
        if industry is not None:
            state = state.with_industry(industry)
        if country is not None:
            state = state.with_country(country)
        if sort_key is not None:
            state = state.with_sort(sort_key)
        return self._set_state(state)

    def reset(self) -> Page:
        return self._set_state(QueryState(page_size=self._state.page_size))

    def go_to(self, page: int) -> Page:
        return self._set_state(self._state.with_page(page))

    def next_page(self) -> Page:
        return self.go_to(self._state.page + 1)

    def previous_page(self) -> Page:
        return self.go_to(self._state.page - 1)

    def current_page(self) -> Page:
        return paginate(self._view, self._state.page, self._state.page_size)

    def facets(self) -> LeadFacets:
        return collect_facets(self._records)
