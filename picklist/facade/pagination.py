from __future__ import annotations

import math

from pydantic import BaseModel, Field

from picklist.facade.types import Page

DEFAULT_PAGE_SIZE = 20


class PageQuery(BaseModel):
    """Query-string parameters; numeric strings are coerced."""

    page: int = Field(default=1, ge=1)
    limit: int = Field(default=DEFAULT_PAGE_SIZE, ge=1)
    filter: str | None = None


def paginate(
    ids: list[int],
    *,
    page: int = 1,
    limit: int = DEFAULT_PAGE_SIZE,
    filter: str | None = None,
) -> Page:
    """Filter *ids* by substring of their decimal form, then slice one page."""
    if filter:
        needle = filter.lower()
        ids = [eid for eid in ids if needle in str(eid)]

    total = len(ids)
    start = (page - 1) * limit
    return Page(
        data=ids[start : start + limit],
        total=total,
        page=page,
        total_pages=math.ceil(total / limit),
    )
