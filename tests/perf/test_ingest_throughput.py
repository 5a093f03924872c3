from __future__ import annotations

import csv
import time

import numpy as np
import pandas as pd
import pytest

from src.delimited.writer import export_leads
from src.models.query_state import QueryState, SortKey
from src.services.ingestion import ingest_text
from src.services.query import LeadBrowser, apply_query

"""Throughput smoke test at the upper end of the expected scale.

A few thousand leads per load; ingestion and a full query recomputation
must stay well within interactive budgets.
"""

ROWS = 5_000
INGEST_BUDGET_SEC = 5.0
QUERY_BUDGET_SEC = 1.0


def _generate_csv(rows: int) -> str:
    rng = np.random.default_rng(42)
    industries = rng.choice(["Manufacturing", "Textiles", "Agriculture", "Logistics"], rows)
    countries = rng.choice(["India", "China", "Germany", "United States"], rows)
    df = pd.DataFrame(
        {
            "Name": [f"Company {i:05d}" for i in range(rows)],
            "Description": [f"Supplier, line {i}\nsecond line" for i in range(rows)],
            "Primary Industry": industries,
            "Location": ["City"] * rows,
            "Country": countries,
            "Domain": [f"c{i}.example.com" for i in range(rows)],
            "LinkedIn": [""] * rows,
        }
    )
    return "Export Date: 2024-01-01\r\n" + df.to_csv(index=False, quoting=csv.QUOTE_MINIMAL, lineterminator="\r\n")


@pytest.mark.perf
def test_ingest_and_query_budget():
    text = _generate_csv(ROWS)

    t0 = time.perf_counter()
    result = ingest_text(text)
    ingest_elapsed = time.perf_counter() - t0
    assert result.ok
    assert len(result.records) == ROWS
    assert ingest_elapsed < INGEST_BUDGET_SEC

    t1 = time.perf_counter()
    view = apply_query(result.records, QueryState(search="line 4", country="India", sort_key=SortKey.NAME))
    query_elapsed = time.perf_counter() - t1
    assert all(lead.country == "India" for lead in view)
    assert query_elapsed < QUERY_BUDGET_SEC


@pytest.mark.perf
def test_browser_page_walk_and_export():
    result = ingest_text(_generate_csv(1_000))
    browser = LeadBrowser(result.records, page_size=20)
    seen = 0
    page = browser.current_page()
    while True:
        seen += len(page.items)
        if not page.has_next:
            break
        page = browser.next_page()
    assert seen == 1_000
    assert page.number == 50
    assert "\r" not in export_leads(browser.view)
