"""
Portfolio Kernel — Record Validation

Validates raw record payloads (plain dicts from a data file or a caller)
before they reach the store. Every canonical record goes through here.

validate_* functions return a list of error strings. Empty list = valid.
build_* functions validate and return a frozen record, or raise ValidationError.

Dates are deliberately not validated: an unparseable publicationDate is
coerced to epoch 0 at sort time instead of being rejected.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import urlparse

from portfolio.kernel.types import (
    CONTENT_TYPES,
    Achievement,
    ContentItem,
    Profile,
    ProfileImage,
)

# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ValidationError(Exception):
    """Record payload failed required-field checks. Store state is unchanged."""

    def __init__(self, message: str, errors: list[str] | None = None):
        super().__init__(message)
        self.errors = errors or []


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def validate_profile(data: Any) -> list[str]:
    """
    Validate a profile payload.

    Required: name, bio, profileImage.src, profileImage.fallbackInitials,
    linkedinUrl (absolute http/https URL). profileImage.alt is optional.
    """
    if not isinstance(data, dict):
        return ["Profile must be an object"]

    errors: list[str] = []
    if not _is_non_empty_str(data.get("name")):
        errors.append("Name is required and must be a non-empty string")
    if not _is_non_empty_str(data.get("bio")):
        errors.append("Bio is required and must be a non-empty string")

    image = data.get("profileImage")
    if not isinstance(image, dict):
        errors.append("Profile image is required and must be an object")
    else:
        if not _is_non_empty_str(image.get("src")):
            errors.append("Profile image src is required and must be a non-empty string")
        if "alt" in image and image["alt"] is not None and not isinstance(image["alt"], str):
            errors.append("Profile image alt text must be a string")
        if not _is_non_empty_str(image.get("fallbackInitials")):
            errors.append("Profile image fallback initials are required and must be a non-empty string")

    url = data.get("linkedinUrl")
    if not _is_non_empty_str(url):
        errors.append("LinkedIn URL is required and must be a non-empty string")
    elif not is_valid_url(url):
        errors.append(f"LinkedIn URL is not a valid URL: {url}")

    return errors


def validate_achievement(data: Any) -> list[str]:
    if not isinstance(data, dict):
        return ["Achievement must be an object"]

    errors: list[str] = []
    if not _is_non_empty_str(data.get("id")):
        errors.append("Achievement ID is required and must be a non-empty string")
    if not _is_non_empty_str(data.get("title")):
        errors.append("Achievement title is required and must be a non-empty string")
    if not _is_non_empty_str(data.get("description")):
        errors.append("Achievement description is required and must be a non-empty string")

    order = data.get("order", 0)
    if isinstance(order, bool) or not isinstance(order, int) or order < 0:
        errors.append("Achievement order must be a non-negative integer")

    return errors


def validate_content_item(data: Any) -> list[str]:
    if not isinstance(data, dict):
        return ["Content item must be an object"]

    errors: list[str] = []
    if not _is_non_empty_str(data.get("id")):
        errors.append("Content item ID is required and must be a non-empty string")
    if not _is_non_empty_str(data.get("title")):
        errors.append("Content item title is required and must be a non-empty string")
    if data.get("type") not in CONTENT_TYPES:
        errors.append(f"Content item type must be one of: {', '.join(CONTENT_TYPES)}")
    if not _is_non_empty_str(data.get("description")):
        errors.append("Content item description is required and must be a non-empty string")

    # "" link and null featured are normalized to None and False by the builder
    link = data.get("externalLink")
    if link not in (None, "") and not _is_non_empty_str(link):
        errors.append("Content item external link must be null or a non-empty string")

    featured = data.get("featured")
    if featured is not None and not isinstance(featured, bool):
        errors.append("Content item featured flag must be a boolean")

    return errors


def validate_achievements(items: list[Any]) -> list[str]:
    """Validate every element and id uniqueness. Errors are prefixed by index."""
    return _validate_collection(items, "Achievement", validate_achievement)


def validate_content_items(items: list[Any]) -> list[str]:
    """Validate every element and id uniqueness. Errors are prefixed by index."""
    return _validate_collection(items, "Content item", validate_content_item)


def build_profile(data: Any) -> Profile:
    errors = validate_profile(data)
    if errors:
        raise ValidationError(f"Profile validation failed: {', '.join(errors)}", errors)

    image = data["profileImage"]
    return Profile(
        name=data["name"],
        bio=data["bio"],
        profile_image=ProfileImage(
            src=image["src"],
            alt=image.get("alt") or "",
            fallback_initials=image["fallbackInitials"],
        ),
        linkedin_url=data["linkedinUrl"],
    )


def build_achievements(items: list[Any]) -> list[Achievement]:
    errors = validate_achievements(items)
    if errors:
        raise ValidationError(f"Achievements validation failed: {', '.join(errors)}", errors)

    return [
        Achievement(
            id=d["id"],
            title=d["title"],
            description=d["description"],
            order=d.get("order", 0),
        )
        for d in items
    ]


def build_content_items(items: list[Any]) -> list[ContentItem]:
    errors = validate_content_items(items)
    if errors:
        raise ValidationError(f"Content validation failed: {', '.join(errors)}", errors)

    return [
        ContentItem(
            id=d["id"],
            title=d["title"],
            type=d["type"],
            description=d["description"],
            publication_date=d.get("publicationDate"),
            external_link=d.get("externalLink") or None,
            featured=d.get("featured") or False,
        )
        for d in items
    ]


def is_valid_url(value: str) -> bool:
    """Absolute http(s) URL with a host."""
    parsed = urlparse(value.strip())
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


# ---------------------------------------------------------------------------
# Internals
# ---------------------------------------------------------------------------


def _is_non_empty_str(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _validate_collection(items: list[Any], label: str, validator) -> list[str]:
    errors: list[str] = []
    seen_ids: set[str] = set()

    for index, data in enumerate(items):
        item_errors = validator(data)
        if item_errors:
            errors.append(f"{label} {index}: {', '.join(item_errors)}")
            continue
        item_id = data["id"]
        if item_id in seen_ids:
            errors.append(f"{label} {index}: duplicate ID {item_id}")
        seen_ids.add(item_id)

    return errors
