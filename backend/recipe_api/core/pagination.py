"""
Pagination metadata and hypermedia links.
"""
import math
from typing import Optional

from pydantic import BaseModel, Field


class Pagination(BaseModel):
    """Page metadata for a paginated query."""
    total_count: int = Field(..., ge=0, description="Total number of documents")
    page: int = Field(..., ge=1, description="Current page (1-based)")
    per_page: int = Field(..., ge=1, description="Documents per page")
    total_pages: int = Field(..., ge=0, description="Number of pages")


def calculate_pagination(total_count: int, page: int, per_page: int) -> Pagination:
    """
    Derive page metadata from a page/per_page/total_count triple.

    Args:
        total_count: Number of documents matching the query
        page: Requested page (1-based)
        per_page: Page size

    Returns:
        Pagination with ``total_pages = ceil(total_count / per_page)``
    """
    return Pagination(
        total_count=total_count,
        page=page,
        per_page=per_page,
        total_pages=math.ceil(total_count / per_page),
    )


def _page_url(base_url: str, page: int, per_page: int) -> str:
    return f"{base_url}?page={page}&per_page={per_page}"


def build_page_links(base_url: str, pagination: Pagination) -> dict[str, str]:
    """
    Build the ordered link set for a page.

    ``next`` is present iff there is a later page and ``prev`` iff the page
    is after the first. ``first`` and ``last`` are always present; ``last``
    points at page 1 when the collection is empty.
    """
    page = pagination.page
    per_page = pagination.per_page
    last_page = max(pagination.total_pages, 1)

    links: dict[str, str] = {}
    if page < pagination.total_pages:
        links["next"] = _page_url(base_url, page + 1, per_page)
    if page > 1:
        links["prev"] = _page_url(base_url, page - 1, per_page)
    links["first"] = _page_url(base_url, 1, per_page)
    links["last"] = _page_url(base_url, last_page, per_page)
    return links


def link_header(links: dict[str, str]) -> str:
    """Render links as an HTTP ``Link`` header value."""
    return ", ".join(f'<{url}>; rel="{rel}"' for rel, url in links.items())


def pagination_headers(pagination: Pagination, links: Optional[dict[str, str]] = None) -> dict[str, str]:
    """Response headers describing a page."""
    headers = {
        "X-Total-Count": str(pagination.total_count),
        "X-Page": str(pagination.page),
        "X-Per-Page": str(pagination.per_page),
        "X-Total-Pages": str(pagination.total_pages),
    }
    if links:
        headers["Link"] = link_header(links)
    return headers
