"""
Portfolio Kernel — Content State Store

Owns the canonical collections (profile, achievements, content) and the
user-selected filter and page. Every public mutation runs to completion
synchronously:

  validate → mutate → recompute view → notify → persist

Only ValidationError escapes. Listener and storage failures are logged and
absorbed (see events.dispatch and persistence.PersistenceLayer).

One store per page session; construct as many as you like in tests.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from portfolio.kernel.events import Listener, NotificationHub
from portfolio.kernel.filtering import derive_filtered_view, normalize_filter
from portfolio.kernel.pagination import clamp_page, page_slice, total_pages
from portfolio.kernel.persistence import PersistenceLayer
from portfolio.kernel.storage import KeyValueStorage, MemoryStorage
from portfolio.kernel.types import (
    CACHE_MAX_BYTES,
    CACHE_TTL_MS,
    EVENT_ACHIEVEMENTS,
    EVENT_CONTENT,
    EVENT_FILTER,
    EVENT_FILTERED_CONTENT,
    EVENT_PAGINATION,
    EVENT_PROFILE,
    EVENT_RESET,
    FILTER_ALL,
    ITEMS_PER_PAGE,
    Achievement,
    ContentItem,
    Profile,
    StateSnapshot,
    now_ms,
)
from portfolio.kernel.validators import build_achievements, build_content_items, build_profile

logger = logging.getLogger(__name__)


class ContentStateStore:
    def __init__(
        self,
        durable: KeyValueStorage | None = None,
        session: KeyValueStorage | None = None,
        *,
        clock: Callable[[], int] = now_ms,
        cache_ttl_ms: int = CACHE_TTL_MS,
        cache_max_bytes: int = CACHE_MAX_BYTES,
    ):
        self._profile: Profile | None = None
        self._achievements: list[Achievement] = []
        self._content: list[ContentItem] = []
        self._filtered_content: list[ContentItem] = []
        self._current_filter = FILTER_ALL
        self._current_page = 1
        self._items_per_page = ITEMS_PER_PAGE

        self._hub = NotificationHub()
        self._persistence = PersistenceLayer(
            durable if durable is not None else MemoryStorage(),
            session if session is not None else MemoryStorage(),
            clock=clock,
            cache_ttl_ms=cache_ttl_ms,
            cache_max_bytes=cache_max_bytes,
        )

        restored = self._persistence.load_persisted_state()
        if restored is not None:
            self._current_filter, self._current_page = restored

    # -- profile --

    def set_profile(self, data: dict[str, Any] | None) -> None:
        """Replace the profile. None clears it without validation or persistence."""
        if data is None:
            self._profile = None
            self._hub.notify(EVENT_PROFILE, None)
            return

        self._profile = build_profile(data)
        self._hub.notify(EVENT_PROFILE, self._profile)
        self.persist_state()

    def get_profile(self) -> Profile | None:
        return self._profile

    # -- achievements --

    def set_achievements(self, data: Any) -> None:
        """
        Replace the achievements collection.
        Non-list input clears it. Any invalid element fails the whole call.
        """
        if not isinstance(data, (list, tuple)):
            self._achievements = []
            self._hub.notify(EVENT_ACHIEVEMENTS, self._achievements)
            return

        self._achievements = build_achievements(list(data))
        self._hub.notify(EVENT_ACHIEVEMENTS, self._achievements)
        self.persist_state()

    def get_achievements(self) -> list[Achievement]:
        return self._achievements

    # -- content --

    def set_content(self, data: Any) -> None:
        """
        Replace the content collection and recompute the filtered view.
        Listeners on "content" get the canonical list, not the view.
        """
        if not isinstance(data, (list, tuple)):
            self._content = []
            self._refresh_filtered_view()
            self._hub.notify(EVENT_CONTENT, self._content)
            return

        self._content = build_content_items(list(data))
        self._refresh_filtered_view()
        self._hub.notify(EVENT_CONTENT, self._content)
        self.persist_state()

    def get_content(self) -> list[ContentItem]:
        return self._content

    # -- filter --

    def set_current_filter(self, value: Any) -> None:
        """Switch filter. Unknown values fall back to "all" without raising."""
        self._current_filter = normalize_filter(value)
        # Page reset happens before the recompute so the clamp sees page 1.
        self._current_page = 1
        self._recompute()
        self._hub.notify(EVENT_FILTER, self._current_filter)
        self._hub.notify(EVENT_FILTERED_CONTENT, self._filtered_content)
        self.persist_state()

    def get_current_filter(self) -> str:
        return self._current_filter

    def get_filtered_content(self) -> list[ContentItem]:
        return self._filtered_content

    # -- pagination --

    def get_total_pages(self) -> int:
        return total_pages(len(self._filtered_content), self._items_per_page)

    def set_current_page(self, page: int | float) -> None:
        """
        Clamp and move to `page`. Same clamped page is a no-op.
        Whole-number floats (2.0) count as integers; anything else is ignored.
        """
        if isinstance(page, float) and page.is_integer():
            page = int(page)
        if isinstance(page, bool) or not isinstance(page, int):
            logger.warning("Ignoring non-integer page: %r", page)
            return

        pages = self.get_total_pages()
        new_page = clamp_page(page, pages)
        if new_page == self._current_page:
            return

        self._current_page = new_page
        self._hub.notify(EVENT_PAGINATION, {"currentPage": new_page, "totalPages": pages})
        self.persist_state()

    def get_current_page(self) -> int:
        return self._current_page

    def get_items_per_page(self) -> int:
        return self._items_per_page

    def get_paginated_content(self) -> list[ContentItem]:
        return page_slice(self._filtered_content, self._current_page, self._items_per_page)

    # -- listeners --

    def add_event_listener(self, event: str, callback: Listener) -> None:
        self._hub.add_listener(event, callback)

    def remove_event_listener(self, event: str, callback: Listener) -> None:
        self._hub.remove_listener(event, callback)

    def notify_listeners(self, event: str, payload: Any = None) -> None:
        self._hub.notify(event, payload)

    # -- persistence --

    def persist_state(self) -> None:
        """Write preferences to durable storage and refresh the view cache."""
        self._persistence.persist_state(self._current_filter, self._current_page)
        self._persistence.cache_computed_data(self._filtered_content, self._current_filter)

    def clear_persisted_state(self) -> None:
        self._persistence.clear_persisted_state()

    def load_cached_view(self) -> list[ContentItem] | None:
        """
        Cached view for the active filter, if still fresh.
        Advisory only: the store's own view is not touched.
        """
        return self._persistence.load_cached_data(self._current_filter)

    # -- utilities --

    def reset(self) -> None:
        """Back to filter "all", page 1."""
        self._current_filter = FILTER_ALL
        self._current_page = 1
        self._refresh_filtered_view()
        self._hub.notify(EVENT_RESET, None)
        self.persist_state()

    def get_state_snapshot(self) -> StateSnapshot:
        return StateSnapshot(
            profile=self._profile,
            achievements=list(self._achievements),
            content=list(self._content),
            current_filter=self._current_filter,
            current_page=self._current_page,
            items_per_page=self._items_per_page,
            filtered_content_count=len(self._filtered_content),
            total_pages=self.get_total_pages(),
            paginated_content=self.get_paginated_content(),
        )

    # -- internals --

    def _recompute(self) -> None:
        """
        Re-derive the filtered view from canonical content + active filter.
        A page past the new last page goes back to 1, not to the last page.
        """
        self._persistence.evict_cache()
        self._filtered_content = derive_filtered_view(self._content, self._current_filter)

        if self._current_page > max(1, self.get_total_pages()):
            self._current_page = 1

        self._persistence.cache_computed_data(self._filtered_content, self._current_filter)

    def _refresh_filtered_view(self) -> None:
        self._recompute()
        self._hub.notify(EVENT_FILTERED_CONTENT, self._filtered_content)
