"""
Portfolio Kernel — Pagination

Page math over a filtered view. Pages are 1-based.
"""

from __future__ import annotations

import math
from typing import TypeVar

from portfolio.kernel.types import ITEMS_PER_PAGE

T = TypeVar("T")


def total_pages(item_count: int, per_page: int = ITEMS_PER_PAGE) -> int:
    """ceil(count / per_page). 0 for an empty view."""
    return math.ceil(item_count / per_page)


def clamp_page(page: int, pages: int) -> int:
    """Clamp into [1, max(1, pages)]."""
    return max(1, min(page, pages or 1))


def page_slice(items: list[T], page: int, per_page: int = ITEMS_PER_PAGE) -> list[T]:
    """Items on `page`. Empty list when out of range, never raises."""
    if page < 1:
        return []
    start = (page - 1) * per_page
    return items[start:start + per_page]
