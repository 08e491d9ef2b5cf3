"""Page slicing helpers for the order list."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TypeVar

T = TypeVar("T")

ELLIPSIS = -1


@dataclass(frozen=True)
class PaginationInfo:
    total_pages: int
    has_next_page: bool
    has_prev_page: bool
    first_item: int
    last_item: int


def paginate(items: Sequence[T], page: int, per_page: int) -> list[T]:
    """Return the slice of *items* shown on 1-based *page*."""
    start = max(page - 1, 0) * per_page
    return list(items[start:start + per_page])


def pagination_info(total_items: int, page: int, per_page: int) -> PaginationInfo:
    total_pages = math.ceil(total_items / per_page) if per_page > 0 else 0
    return PaginationInfo(
        total_pages=total_pages,
        has_next_page=page < total_pages,
        has_prev_page=page > 1,
        first_item=0 if total_items == 0 else (page - 1) * per_page + 1,
        last_item=min(page * per_page, total_items),
    )


def page_numbers(current_page: int, total_pages: int, max_pages: int = 5) -> list[int]:
    """Page links for a pager widget.

    Shows a window of *max_pages* around the current page, always adds the
    first and last page, and puts ``ELLIPSIS`` (-1) where pages are skipped.
    """
    if total_pages <= max_pages:
        return list(range(1, total_pages + 1))

    half = max_pages // 2
    start = max(current_page - half, 1)
    end = start + max_pages - 1
    if end > total_pages:
        end = total_pages
        start = max(end - max_pages + 1, 1)

    pages = list(range(start, end + 1))

    if start > 1:
        if start > 2:
            pages.insert(0, ELLIPSIS)
        pages.insert(0, 1)

    if end < total_pages:
        if end < total_pages - 1:
            pages.append(ELLIPSIS)
        pages.append(total_pages)

    return pages
