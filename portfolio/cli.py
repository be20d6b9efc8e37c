"""
portfolio-build — render the static portfolio page from a data file.

Usage:
  portfolio-build                               # sample data, saved filter/page, to stdout
  portfolio-build --data site.json --out dist/index.html
  portfolio-build --filter talk --page 2        # also saved for the next run
  portfolio-build --reset                       # forget saved filter/page

The selected filter and page are kept in durable storage under
PORTFOLIO_STATE_DIR, the same way the browser keeps them in localStorage.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from portfolio import __version__
from portfolio.config import settings
from portfolio.kernel.loader import DataFileError, load_site_data, populate_store
from portfolio.kernel.renderer import render_page
from portfolio.kernel.storage import JsonFileStorage, MemoryStorage
from portfolio.kernel.store import ContentStateStore
from portfolio.kernel.types import RenderOptions
from portfolio.kernel.validators import ValidationError

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="portfolio-build", description="Render the portfolio page")
    p.add_argument("--data", default=settings.DATA_FILE or None, help="JSON data file (default: bundled sample)")
    p.add_argument("--out", type=Path, help="Output HTML file (default: stdout)")
    p.add_argument("--filter", dest="content_filter", help="Content filter: all, talk, blog, whitepaper, article")
    p.add_argument("--page", type=int, help="Content page (1-based)")
    p.add_argument("--state-dir", default=settings.STATE_DIR)
    p.add_argument("--reset", action="store_true", help="Clear saved filter and page first")
    p.add_argument("--title", help="Page title (default: profile name)")
    p.add_argument("-v", "--verbose", action="store_true")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p


def make_store(state_dir: str | Path) -> ContentStateStore:
    """Store with durable preferences in `state_dir` and an in-process session cache."""
    return ContentStateStore(
        durable=JsonFileStorage(Path(state_dir) / "state.json"),
        session=MemoryStorage(),
        cache_ttl_ms=settings.CACHE_TTL_MS,
        cache_max_bytes=settings.CACHE_MAX_BYTES,
    )


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.LOG_LEVEL,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    store = make_store(args.state_dir)
    if args.reset:
        store.clear_persisted_state()
        store.reset()

    try:
        populate_store(store, load_site_data(args.data))
    except (DataFileError, ValidationError) as e:
        logger.error("%s", e)
        return 1

    if args.content_filter is not None:
        store.set_current_filter(args.content_filter)
    if args.page is not None:
        store.set_current_page(args.page)

    html = render_page(store, RenderOptions(title=args.title))

    if args.out is None:
        sys.stdout.write(html + "\n")
    else:
        args.out.parent.mkdir(parents=True, exist_ok=True)
        args.out.write_text(html + "\n", encoding="utf-8")
        logger.info(
            "Wrote %s (filter=%s, page %d of %d)",
            args.out,
            store.get_current_filter(),
            store.get_current_page(),
            store.get_total_pages(),
        )
    return 0


if __name__ == "__main__":
    sys.exit(main())
