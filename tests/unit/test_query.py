from __future__ import annotations

import pytest

from src.models.business_lead import BusinessLead
from src.models.query_state import ALL, QueryState, SortKey
from src.services.query import LeadBrowser, apply_query, collation_key, collect_facets, paginate


def _names(view: list[BusinessLead]) -> list[str]:
    return [lead.name for lead in view]


def test_default_state_returns_everything_in_original_order(leads):
    assert apply_query(leads, QueryState()) == leads


def test_search_is_case_insensitive_and_keeps_relative_order(make_lead):
    records = [make_lead(0, "Acme Corp"), make_lead(1, "Global Foods"), make_lead(2, "Acme Robotics")]
    for term in ("acme", "ACME", "AcMe"):
        assert _names(apply_query(records, QueryState(search=term))) == ["Acme Corp", "Acme Robotics"]


def test_search_matches_any_search_field(leads):
    # "acme" は description にも出現する
    assert _names(apply_query(leads, QueryState(search="acme"))) == [
        "Acme Corp",
        "Acme Robotics",
        "bolt works",
    ]
    assert _names(apply_query(leads, QueryState(search="india"))) == ["Global Foods", "bolt works"]


def test_search_does_not_look_at_domain(make_lead):
    records = [make_lead(0, "Alpha", domain="hidden.example")]
    assert apply_query(records, QueryState(search="hidden")) == []


def test_search_is_literal_substring(make_lead):
    records = [make_lead(0, "A.B (Holdings)"), make_lead(1, "AxB")]
    assert _names(apply_query(records, QueryState(search="a.b ("))) == ["A.B (Holdings)"]


def test_industry_filter_is_exact_and_case_sensitive(leads):
    assert _names(apply_query(leads, QueryState(industry="Manufacturing"))) == ["Acme Corp", "bolt works"]
    assert apply_query(leads, QueryState(industry="manufacturing")) == []


def test_filters_and_search_compose_with_and(leads):
    state = QueryState(search="acme", industry="Manufacturing", country="India")
    assert _names(apply_query(leads, state)) == ["bolt works"]


def test_sort_by_name_is_case_and_accent_insensitive(leads):
    view = apply_query(leads, QueryState(sort_key=SortKey.NAME))
    assert _names(view) == ["Acme Corp", "Acme Robotics", "Ärzte Supply", "bolt works", "Global Foods"]


def test_sort_is_stable_for_ties(leads):
    view = apply_query(leads, QueryState(sort_key=SortKey.INDUSTRY))
    manufacturing = [lead.id for lead in view if lead.primary_industry == "Manufacturing"]
    assert manufacturing == ["lead-0", "lead-3"]


def test_sort_by_country(leads):
    view = apply_query(leads, QueryState(sort_key=SortKey.COUNTRY))
    assert [lead.country for lead in view] == ["China", "Germany", "India", "India", "US"]


def test_empty_records():
    assert apply_query([], QueryState(search="x", sort_key=SortKey.NAME)) == []


def test_collation_key():
    assert collation_key("Ärzte") == "arzte"
    assert collation_key("STRASSE") == collation_key("straße")


@pytest.mark.parametrize(
    "count,page_size,pages,last_len",
    [(0, 20, 0, 0), (1, 20, 1, 1), (20, 20, 1, 20), (21, 20, 2, 1), (57, 20, 3, 17)],
)
def test_paginate_page_count_and_last_page(count, page_size, pages, last_len, make_lead):
    view = [make_lead(i, f"L{i}") for i in range(count)]
    last = paginate(view, 10_000, page_size)
    assert last.total_pages == pages
    assert len(last.items) == last_len
    if count:
        assert 1 <= len(last.items) <= page_size


def test_paginate_clamps_out_of_range_pages(make_lead):
    view = [make_lead(i, f"L{i}") for i in range(45)]
    assert paginate(view, 0, 20).number == 1
    assert paginate(view, -3, 20).number == 1
    assert paginate(view, 99, 20).number == 3
    empty = paginate([], 5, 20)
    assert empty.number == 1 and empty.items == [] and empty.total_pages == 0


def test_page_bounds(make_lead):
    view = [make_lead(i, f"L{i}") for i in range(45)]
    page = paginate(view, 2, 20)
    assert (page.start_index, page.end_index, page.total_count) == (21, 40, 45)
    assert page.has_previous and page.has_next
    assert [lead.name for lead in page.items][:2] == ["L20", "L21"]


def test_browser_resets_page_when_filters_change(make_lead):
    records = [make_lead(i, f"Lead {i}", country="US" if i % 2 else "India") for i in range(50)]
    browser = LeadBrowser(records, page_size=10)
    browser.go_to(4)
    assert browser.state.page == 4
    page = browser.update(country="US")
    assert browser.state.page == 1
    assert page.total_count == 25
    browser.go_to(3)
    browser.update(sort_key=SortKey.NAME)
    assert browser.state.page == 1


def test_browser_clamps_and_steps_pages(make_lead):
    browser = LeadBrowser([make_lead(i, f"L{i}") for i in range(25)], page_size=10)
    assert browser.go_to(50).number == 3
    assert browser.state.page == 3
    assert browser.next_page().number == 3
    assert browser.previous_page().number == 2
    assert browser.go_to(0).number == 1


def test_browser_view_recomputed_and_reset(leads):
    browser = LeadBrowser(leads)
    browser.update(search="acme")
    assert len(browser.view) == 3
    browser.update(search="")
    assert browser.view == leads
    browser.update(industry="Healthcare")
    browser.reset()
    assert browser.state == QueryState()
    assert browser.view == leads
    assert browser.records == tuple(leads)


def test_browser_all_sentinel_is_identity(leads):
    browser = LeadBrowser(leads)
    browser.update(search="", industry=ALL, country=ALL, sort_key=SortKey.ORIGINAL)
    assert browser.view == leads


def test_collect_facets_first_seen_order(leads, make_lead):
    extra = make_lead(9, "Blank", primary_industry="", country="")
    facets = collect_facets([*leads, extra])
    assert facets.industries == ["Manufacturing", "Agriculture", "Electronics", "Healthcare"]
    assert facets.countries == ["US", "India", "China", "Germany"]
    assert facets.lead_count == 6
    assert facets.industry_count == 4 and facets.country_count == 4
