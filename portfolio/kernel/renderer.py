"""
Portfolio Kernel — Renderer

Pure function: store state → HTML string for the static portfolio page.
No IO. Deterministic: same state → same output, always.

Sections: hero (profile), achievements (by `order`), content filters,
content cards for the current page, pagination controls.
Templates are Mustache, rendered with chevron (which HTML-escapes {{values}}).
"""

from __future__ import annotations

import re
from datetime import UTC, date, datetime
from typing import Any

import chevron

from portfolio.kernel.store import ContentStateStore
from portfolio.kernel.types import (
    VALID_FILTERS,
    Achievement,
    ContentItem,
    Profile,
    RenderOptions,
)

DESCRIPTION_LIMIT = 120

FILTER_LABELS: dict[str, str] = {
    "all": "All",
    "talk": "Talks",
    "blog": "Blogs",
    "whitepaper": "Whitepapers",
    "article": "Articles",
}

# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------

PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <title>{{title}}</title>
  <link rel="stylesheet" href="{{stylesheet}}">
</head>
<body>
  <main class="portfolio">
{{{hero}}}
{{{achievements}}}
{{{content}}}
  </main>
{{#footer}}
  <footer class="site-footer">{{footer}}</footer>
{{/footer}}
</body>
</html>"""

HERO_TEMPLATE = """    <section class="hero" aria-labelledby="hero-name">
      <div class="profile-image" data-fallback-initials="{{initials}}">
        <img src="{{src}}" alt="{{alt}}" loading="eager">
        <span class="profile-initials" aria-hidden="true">{{initials}}</span>
      </div>
      <h1 id="hero-name">{{name}}</h1>
      <p class="hero-bio">{{bio}}</p>
      <a class="linkedin-link" href="{{linkedin_url}}" target="_blank" rel="noopener noreferrer" aria-label="{{name}} on LinkedIn">LinkedIn</a>
    </section>"""

ACHIEVEMENTS_TEMPLATE = """    <section class="achievements" aria-labelledby="achievements-heading">
      <h2 id="achievements-heading">Achievements</h2>
      <div class="achievements-grid">
{{#achievements}}
        <article class="achievement-card" data-achievement-id="{{id}}">
          <h3 class="achievement-title">{{title}}</h3>
          <p class="achievement-description">{{description}}</p>
        </article>
{{/achievements}}
      </div>
    </section>"""

CONTENT_TEMPLATE = """    <section class="content" aria-labelledby="content-heading">
      <h2 id="content-heading">Thought Leadership</h2>
      <div class="content-filters" role="group" aria-label="Filter content by type">
{{#filters}}
        <button class="filter-btn{{#active}} active{{/active}}" data-filter="{{value}}" aria-pressed="{{pressed}}">{{label}}</button>
{{/filters}}
      </div>
      <div class="content-grid">
{{#cards}}
        <div class="content-card{{#has_link}} clickable{{/has_link}}" data-content-id="{{id}}"{{#has_link}} data-external-link="{{link}}" tabindex="0" role="button"{{/has_link}}>
          <div class="content-meta">
            <span class="content-type">{{type}}</span>
            <span class="content-date">{{date}}</span>
          </div>
          <h3 class="content-title">{{title}}</h3>
          <p class="content-description">{{description}}</p>
        </div>
{{/cards}}
{{^cards}}
        <p class="content-empty">No content available.</p>
{{/cards}}
      </div>
{{{pagination}}}
    </section>"""

PAGINATION_TEMPLATE = """      <nav class="pagination-controls" aria-label="Content pages">
        <button class="pagination-btn" data-page="{{prev}}"{{#first}} disabled{{/first}} aria-label="Previous page">Previous</button>
{{#pages}}
        <button class="pagination-btn{{#current}} active{{/current}}" data-page="{{number}}"{{#current}} aria-current="page"{{/current}} aria-label="Page {{number}}">{{number}}</button>
{{/pages}}
        <button class="pagination-btn" data-page="{{next}}"{{#last}} disabled{{/last}} aria-label="Next page">Next</button>
      </nav>"""


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def render_page(store: ContentStateStore, options: RenderOptions | None = None) -> str:
    """
    Render the complete page for the store's current state.
    Pure function. No side effects. No IO.
    """
    opts = options or RenderOptions()
    profile = store.get_profile()
    title = opts.title or (profile.name if profile else "Portfolio")

    return chevron.render(PAGE_TEMPLATE, {
        "title": title,
        "stylesheet": opts.stylesheet,
        "hero": render_hero(profile),
        "achievements": render_achievements(store.get_achievements()),
        "content": render_content(store),
        "footer": opts.footer,
    })


def render_hero(profile: Profile | None) -> str:
    if profile is None:
        return ""
    return chevron.render(HERO_TEMPLATE, {
        "name": profile.name,
        "bio": profile.bio,
        "src": profile.profile_image.src,
        "alt": profile.profile_image.alt or profile.name,
        "initials": profile.profile_image.fallback_initials,
        "linkedin_url": profile.linkedin_url,
    })


def render_achievements(achievements: list[Achievement]) -> str:
    if not achievements:
        return ""
    ordered = sorted(achievements, key=lambda a: a.order)
    return chevron.render(ACHIEVEMENTS_TEMPLATE, {
        "achievements": [a.to_dict() for a in ordered],
    })


def render_content(store: ContentStateStore) -> str:
    current_filter = store.get_current_filter()
    filters = [
        {
            "value": value,
            "label": FILTER_LABELS[value],
            "active": value == current_filter,
            "pressed": "true" if value == current_filter else "false",
        }
        for value in VALID_FILTERS
    ]
    return chevron.render(CONTENT_TEMPLATE, {
        "filters": filters,
        "cards": [_card_context(item) for item in store.get_paginated_content()],
        "pagination": render_pagination(store.get_current_page(), store.get_total_pages()),
    })


def render_pagination(current_page: int, total_pages: int) -> str:
    """Empty when there is at most one page."""
    if total_pages <= 1:
        return ""
    return chevron.render(PAGINATION_TEMPLATE, {
        "prev": current_page - 1,
        "next": current_page + 1,
        "first": current_page == 1,
        "last": current_page == total_pages,
        "pages": [
            {"number": n, "current": n == current_page}
            for n in range(1, total_pages + 1)
        ],
    })


def format_date(value: Any) -> str:
    """'Oct 15, 2018' style. 'No date' when missing, 'Invalid date' when unparseable."""
    if value is None or value == "":
        return "No date"

    dt = _to_datetime(value)
    if dt is None:
        return "Invalid date"
    return f"{dt:%b} {dt.day}, {dt.year}"


_SENTENCE_BREAK_RE = re.compile(r"[.!?]\s+|\n")


def truncate_to_first_line(text: str, limit: int = DESCRIPTION_LIMIT) -> str:
    """
    Shorten a description to its first sentence.

    A very short first sentence (< 30 chars) absorbs the next one if the pair
    fits in `limit`. Anything longer than `limit` is cut at a word boundary.
    '...' is appended whenever text was dropped.
    """
    if not text:
        return ""

    sentences = _SENTENCE_BREAK_RE.split(text)
    first_line = sentences[0].strip()

    if len(first_line) < 30 and len(sentences) > 1 and sentences[1]:
        combined = first_line + ". " + sentences[1].strip()
        if len(combined) <= limit:
            first_line = combined

    if len(first_line) > limit:
        truncated = ""
        for word in first_line.split(" "):
            if len(truncated + " " + word) > limit:
                break
            truncated += (" " if truncated else "") + word
        first_line = truncated

    needs_ellipsis = len(first_line) < len(text) or len(sentences) > 1
    return first_line + "..." if needs_ellipsis else first_line


# ---------------------------------------------------------------------------
# Internals
# ---------------------------------------------------------------------------


def _card_context(item: ContentItem) -> dict[str, Any]:
    return {
        "id": item.id,
        "title": item.title,
        "type": item.type,
        "date": format_date(item.publication_date),
        "description": truncate_to_first_line(item.description or "No description available."),
        "link": item.external_link or "",
        "has_link": bool(item.external_link),
    }


def _to_datetime(value: Any) -> datetime | None:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000, UTC)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    return None
