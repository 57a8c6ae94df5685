"""Page windows over the filtered activity table.

An empty table still has one (empty) page, so the UI never shows
"Page 1 of 0" and ``current_page`` always lies in ``[1, total_pages]``.
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses
import math
import typing as typ

if typ.TYPE_CHECKING:
    from hookboard.events.models import EventRecord

DEFAULT_PAGE_SIZE: typ.Final = 10


@dataclasses.dataclass(frozen=True, slots=True)
class EventPage:
    """One page of the activity table."""

    items: tuple[EventRecord, ...]
    current_page: int
    total_pages: int
    total_items: int
    page_size: int
    has_previous: bool
    has_next: bool


def _require_page_size(page_size: int) -> None:
    if page_size < 1:
        msg = f"page_size must be positive, got: {page_size}"
        raise ValueError(msg)


def total_pages(item_count: int, page_size: int = DEFAULT_PAGE_SIZE) -> int:
    """Return ``ceil(item_count / page_size)``, never less than 1."""
    _require_page_size(page_size)
    return max(1, math.ceil(item_count / page_size))


def clamp_page(page: int, pages: int) -> int:
    """Clamp ``page`` into ``[1, pages]``."""
    return min(max(page, 1), max(pages, 1))


def next_page(page: int, pages: int) -> int:
    """Advance one page without passing the last page."""
    return clamp_page(page + 1, pages)


def previous_page(page: int) -> int:
    """Go back one page without passing the first page."""
    return max(1, page - 1)


def paginate(
    events: cabc.Sequence[EventRecord],
    page_size: int = DEFAULT_PAGE_SIZE,
    current_page: int = 1,
) -> EventPage:
    """Return the clamped page ``current_page`` of ``events``.

    Requests beyond the last page return the last page, and requests below 1
    return the first page.
    """
    pages = total_pages(len(events), page_size)
    page = clamp_page(current_page, pages)
    start = (page - 1) * page_size
    return EventPage(
        items=tuple(events[start : start + page_size]),
        current_page=page,
        total_pages=pages,
        total_items=len(events),
        page_size=page_size,
        has_previous=page > 1,
        has_next=page < pages,
    )
