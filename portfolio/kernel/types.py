"""
Portfolio Kernel — Shared Types

Record types, constants and small helpers used across validators, store,
persistence and renderer. These are the contracts that bind the kernel together.

Records are frozen dataclasses. They are only ever built by the validators
(portfolio.kernel.validators); downstream code reads them, never assembles them.
"""

from __future__ import annotations

import math
import time
from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from typing import Any

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

CONTENT_TYPES: tuple[str, ...] = ("talk", "blog", "whitepaper", "article")

FILTER_ALL = "all"
VALID_FILTERS: tuple[str, ...] = (FILTER_ALL, *CONTENT_TYPES)

ITEMS_PER_PAGE = 6

# Storage keys shared with the browser build of the site
PREFERENCES_KEY = "portfolioAppState"
CACHE_KEY = "portfolioFilterCache"

CACHE_TTL_MS = 5 * 60 * 1000
CACHE_MAX_BYTES = 50_000

# Event names announced by the store
EVENT_PROFILE = "profile"
EVENT_ACHIEVEMENTS = "achievements"
EVENT_CONTENT = "content"
EVENT_FILTERED_CONTENT = "filteredContent"
EVENT_FILTER = "filter"
EVENT_PAGINATION = "pagination"
EVENT_RESET = "reset"


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ProfileImage:
    src: str
    fallback_initials: str
    alt: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "src": self.src,
            "alt": self.alt,
            "fallbackInitials": self.fallback_initials,
        }


@dataclass(frozen=True)
class Profile:
    """The site owner. Replaced wholesale, never edited in place."""

    name: str
    bio: str
    profile_image: ProfileImage
    linkedin_url: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "bio": self.bio,
            "profileImage": self.profile_image.to_dict(),
            "linkedinUrl": self.linkedin_url,
        }


@dataclass(frozen=True)
class Achievement:
    """
    One achievement card. `order` is only used by the renderer for display
    ordering; the store passes it through untouched.
    """

    id: str
    title: str
    description: str
    order: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "order": self.order,
        }


@dataclass(frozen=True)
class ContentItem:
    """
    A talk, blog post, whitepaper or article.

    `publication_date` keeps whatever date-like value the data source gave
    (ISO string, date, datetime, epoch-ms number or None). Use `timestamp`
    for ordering.
    """

    id: str
    title: str
    type: str
    description: str
    publication_date: Any = None
    external_link: str | None = None
    featured: bool = False

    @property
    def timestamp(self) -> float:
        return coerce_timestamp(self.publication_date)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "type": self.type,
            "publicationDate": serialize_date(self.publication_date),
            "description": self.description,
            "externalLink": self.external_link,
            "featured": self.featured,
        }

    def to_cache_dict(self) -> dict[str, Any]:
        """Display-relevant projection written to the session cache."""
        return {
            "id": self.id,
            "title": self.title,
            "type": self.type,
            "publicationDate": serialize_date(self.publication_date),
            "description": self.description,
            "externalLink": self.external_link,
        }


@dataclass
class StateSnapshot:
    """Point-in-time view of the store, for debugging and the renderer."""

    profile: Profile | None
    achievements: list[Achievement]
    content: list[ContentItem]
    current_filter: str
    current_page: int
    items_per_page: int
    filtered_content_count: int
    total_pages: int
    paginated_content: list[ContentItem] = field(default_factory=list)


@dataclass
class RenderOptions:
    """Options controlling what the renderer includes in output."""

    title: str | None = None  # defaults to the profile name
    stylesheet: str = "css/styles.css"
    footer: str | None = None


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def is_valid_filter(value: Any) -> bool:
    return isinstance(value, str) and value in VALID_FILTERS


def coerce_timestamp(value: Any) -> float:
    """
    Turn a date-like value into epoch milliseconds.

    Missing or unparseable values coerce to 0 so they sort after every real date.
    Values outside the float range (huge epoch integers) also coerce to 0.
    Naive datetimes and bare dates are read as UTC.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return 0.0
        return number if math.isfinite(number) else 0.0
    if isinstance(value, datetime):
        dt = value if value.tzinfo else value.replace(tzinfo=UTC)
        try:
            return dt.timestamp() * 1000
        except (OverflowError, OSError, ValueError):
            return 0.0
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=UTC).timestamp() * 1000
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        try:
            dt = datetime.fromisoformat(text)
        except ValueError:
            return 0.0
        return coerce_timestamp(dt)
    return 0.0


def serialize_date(value: Any) -> Any:
    """JSON-safe form of a publication date."""
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return value


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)
