"""
Portfolio Kernel — Persistence & Cache Layer

Sits between the store and the two key-value backends.

  durable storage  → user preferences (filter, page), no expiry
  session storage  → trimmed copy of the filtered view, freshness window

Nothing in here raises to the caller. Storage and serialization failures are
logged and the store's in-memory state stays authoritative. Canonical data
(profile, achievements, content) is never persisted or restored.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from portfolio.kernel.storage import KeyValueStorage
from portfolio.kernel.types import (
    CACHE_KEY,
    CACHE_MAX_BYTES,
    CACHE_TTL_MS,
    PREFERENCES_KEY,
    ContentItem,
    is_valid_filter,
    now_ms,
)
from portfolio.kernel.validators import ValidationError, build_content_items

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Wire models
# ---------------------------------------------------------------------------


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PreferenceSnapshot(_CamelModel):
    """Durable payload: {currentFilter, currentPage, timestamp}."""

    current_filter: str
    current_page: int = Field(ge=1)
    timestamp: int


class CachedContentItem(_CamelModel):
    """Display-relevant projection of a ContentItem."""

    id: str
    title: str
    type: str
    publication_date: Any = None
    description: str
    external_link: str | None = None


class CacheEntry(_CamelModel):
    """Session payload: {filteredContent, filter, timestamp}."""

    filtered_content: list[CachedContentItem]
    filter: str
    timestamp: int


# ---------------------------------------------------------------------------
# Persistence layer
# ---------------------------------------------------------------------------


class PersistenceLayer:
    def __init__(
        self,
        durable: KeyValueStorage,
        session: KeyValueStorage,
        *,
        clock: Callable[[], int] = now_ms,
        cache_ttl_ms: int = CACHE_TTL_MS,
        cache_max_bytes: int = CACHE_MAX_BYTES,
    ):
        self._durable = durable
        self._session = session
        self._clock = clock
        self.cache_ttl_ms = cache_ttl_ms
        self.cache_max_bytes = cache_max_bytes

    # -- preferences --

    def persist_state(self, current_filter: str, current_page: int) -> bool:
        """Write the preference snapshot. Returns False if it could not be stored."""
        try:
            snapshot = PreferenceSnapshot(
                current_filter=current_filter,
                current_page=current_page,
                timestamp=self._clock(),
            )
            self._durable.set(PREFERENCES_KEY, snapshot.model_dump_json(by_alias=True))
        except Exception as e:
            logger.warning("Failed to persist state: %s", e)
            return False
        return True

    def load_persisted_state(self) -> tuple[str, int] | None:
        """
        Restore (filter, page) from durable storage.
        Returns None when absent, unreadable or malformed.
        """
        try:
            raw = self._durable.get(PREFERENCES_KEY)
        except Exception as e:
            logger.warning("Failed to load persisted state: %s", e)
            return None
        if raw is None:
            return None

        try:
            snapshot = PreferenceSnapshot.model_validate_json(raw)
        except PydanticValidationError:
            logger.debug("Ignoring malformed persisted state")
            return None
        if not is_valid_filter(snapshot.current_filter):
            logger.debug("Ignoring persisted state with unknown filter %r", snapshot.current_filter)
            return None

        return snapshot.current_filter, snapshot.current_page

    def clear_persisted_state(self) -> None:
        try:
            self._durable.remove(PREFERENCES_KEY)
        except Exception as e:
            logger.warning("Failed to clear persisted state: %s", e)

    # -- derived view cache --

    def cache_computed_data(self, filtered_content: list[ContentItem], current_filter: str) -> bool:
        """
        Cache the filtered view. Skipped (returns False) when the encoded
        payload is at or over the byte cap, or when storage fails.
        """
        try:
            entry = CacheEntry(
                filtered_content=[
                    CachedContentItem.model_validate(item.to_cache_dict())
                    for item in filtered_content
                ],
                filter=current_filter,
                timestamp=self._clock(),
            )
            payload = entry.model_dump_json(by_alias=True)
            size = len(payload.encode("utf-8"))
            if size >= self.cache_max_bytes:
                logger.info("Skipping view cache: %d bytes exceeds %d", size, self.cache_max_bytes)
                return False
            self._session.set(CACHE_KEY, payload)
        except Exception as e:
            logger.warning("Failed to cache computed data: %s", e)
            return False
        return True

    def load_cached_data(self, current_filter: str) -> list[ContentItem] | None:
        """
        Return the cached view if present, fresh and cached under
        `current_filter`. Expired or unreadable entries are evicted.
        """
        try:
            raw = self._session.get(CACHE_KEY)
        except Exception as e:
            logger.warning("Failed to load cached data: %s", e)
            return None
        if raw is None:
            return None

        try:
            entry = CacheEntry.model_validate_json(raw)
        except PydanticValidationError:
            logger.debug("Evicting malformed view cache")
            self.evict_cache()
            return None

        if self._is_expired(entry):
            self.evict_cache()
            return None
        if entry.filter != current_filter:
            return None

        try:
            return build_content_items(
                [item.model_dump(by_alias=True) for item in entry.filtered_content]
            )
        except ValidationError:
            logger.debug("Evicting view cache with invalid items")
            self.evict_cache()
            return None

    def evict_cache(self) -> None:
        try:
            self._session.remove(CACHE_KEY)
        except Exception as e:
            logger.warning("Failed to evict cached data: %s", e)

    def sweep_expired(self) -> bool:
        """Evict the view cache if it is past its freshness window. Returns True if evicted."""
        try:
            raw = self._session.get(CACHE_KEY)
        except Exception as e:
            logger.warning("Failed to sweep cached data: %s", e)
            return False
        if raw is None:
            return False

        try:
            entry = CacheEntry.model_validate_json(raw)
        except PydanticValidationError:
            self.evict_cache()
            return True
        if self._is_expired(entry):
            self.evict_cache()
            return True
        return False

    def _is_expired(self, entry: CacheEntry) -> bool:
        return self._clock() - entry.timestamp >= self.cache_ttl_ms
