"""Pagination helpers: page slicing, page counts and the footer page window."""

from __future__ import annotations

import math
from typing import List, Sequence, TypeVar

from datagrid.settings import PAGE_WINDOW_SIZE

T = TypeVar("T")

__all__ = ["paginate", "total_pages", "clamp_page", "page_window"]


def paginate(seq: Sequence[T], page_number: int, page_size: int) -> List[T]:
    """Return the rows of 1-based ``page_number``; past the end yields ``[]``."""
    size = max(1, page_size)
    page = max(1, page_number)
    start = (page - 1) * size
    return list(seq[start : start + size])


def total_pages(count: int, page_size: int) -> int:
    # An empty result still counts as one (empty) page
    return max(1, math.ceil(count / max(1, page_size)))


def clamp_page(page: int, pages: int) -> int:
    return min(max(1, page), max(1, pages))


def page_window(current: int, pages: int, window_size: int = PAGE_WINDOW_SIZE) -> List[int]:
    """Page numbers to show as buttons, at most ``window_size`` of them.

    Near the start the window is pinned to the first pages, near the end to
    the last pages, otherwise it is centred on ``current``.
    """
    half = window_size // 2
    if current <= half + 1:
        first = 1
    elif current >= pages - half:
        first = pages - window_size + 1
    else:
        first = current - half
    return [p for p in range(first, first + window_size) if 1 <= p <= pages]
