from __future__ import annotations

from dataclasses import dataclass

from ..models.business_lead import BusinessLead
from ..models.query_state import LeadFacets, Page

"""Text rendering helpers for lead listings (CLI output)."""

__all__ = [
    "DESCRIPTION_PREVIEW_LIMIT",
    "NO_DESCRIPTION",
    "DescriptionPreview",
    "description_preview",
    "website_url",
    "render_lead_line",
    "render_page_status",
    "render_facets",
]

DESCRIPTION_PREVIEW_LIMIT = 150
NO_DESCRIPTION = "No description available"


@dataclass(frozen=True)
class DescriptionPreview:
    text: str
    truncated: bool  # True の場合 "Show more" 相当


def description_preview(description: str, limit: int = DESCRIPTION_PREVIEW_LIMIT) -> DescriptionPreview:
    if not description:
        return DescriptionPreview(NO_DESCRIPTION, False)
    if len(description) <= limit:
        return DescriptionPreview(description, False)
    return DescriptionPreview(description[:limit].rstrip() + "...", True)


def website_url(lead: BusinessLead) -> str | None:
    if not lead.domain:
        return None
    if lead.domain.startswith(("http://", "https://")):
        return lead.domain
    return f"https://{lead.domain}"


def render_lead_line(lead: BusinessLead, *, full_description: bool = False) -> str:
    if full_description:
        desc = lead.description or NO_DESCRIPTION
    else:
        desc = description_preview(lead.description).text
    parts = [
        lead.name,
        lead.primary_industry,
        f"{lead.location}, {lead.country}",
        desc,
    ]
    url = website_url(lead)
    if url:
        parts.append(url)
    if lead.linkedin_url:
        parts.append(lead.linkedin_url)
    return " | ".join(parts)


def render_page_status(page: Page) -> str:
    """e.g. ``Showing 21 to 40 of 57 results (Page 2 of 3)``."""
    if page.total_count == 0:
        return "No business leads found"
    return (
        f"Showing {page.start_index} to {page.end_index} of {page.total_count} results "
        f"(Page {page.number} of {page.total_pages})"
    )


def render_facets(facets: LeadFacets) -> list[str]:
    return [
        f"{facets.lead_count} leads • {facets.industry_count} industries • {facets.country_count} countries",
        "industries: " + ", ".join(facets.industries),
        "countries: " + ", ".join(facets.countries),
    ]
