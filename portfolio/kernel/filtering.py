"""
Portfolio Kernel — Filter & Sort

Pure functions: (content, filter) → filtered view.
No IO. Deterministic: same input → same output, always.
"""

from __future__ import annotations

import logging
from typing import Any

from portfolio.kernel.types import FILTER_ALL, ContentItem, is_valid_filter

logger = logging.getLogger(__name__)


def normalize_filter(value: Any) -> str:
    """Unknown filters coerce to "all". Never raises."""
    if is_valid_filter(value):
        return value
    logger.warning("Invalid filter: %r. Using '%s' instead.", value, FILTER_ALL)
    return FILTER_ALL


def apply_filter(items: list[ContentItem], active_filter: str) -> list[ContentItem]:
    if active_filter == FILTER_ALL:
        return list(items)
    return [item for item in items if item.type == active_filter]


def sort_newest_first(items: list[ContentItem]) -> list[ContentItem]:
    """
    Stable sort by publication timestamp, newest first.
    Undated items (timestamp 0) sink to the end; ties keep input order.
    """
    return sorted(items, key=lambda item: item.timestamp, reverse=True)


def derive_filtered_view(items: list[ContentItem], active_filter: str) -> list[ContentItem]:
    return sort_newest_first(apply_filter(items, active_filter))
