"""
Portfolio Kernel — Site Data Loader

Reads the bulk data document ({profile, achievements, content}) and feeds it
into a store through the normal mutation API, so it is validated like any
other input.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from portfolio.kernel.store import ContentStateStore

logger = logging.getLogger(__name__)

SAMPLE_DATA_PATH = Path(__file__).resolve().parent.parent / "data" / "sample_data.json"


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class DataFileError(Exception):
    """Data file is missing or not a JSON object."""
    pass


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_site_data(path: str | Path | None = None) -> dict[str, Any]:
    """Load a data file. Defaults to the bundled sample data."""
    data_path = Path(path) if path is not None else SAMPLE_DATA_PATH
    if not data_path.exists():
        raise DataFileError(f"Data file not found: {data_path}")

    try:
        with open(data_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise DataFileError(f"Data file is not valid JSON: {data_path}: {e}") from e

    if not isinstance(data, dict):
        raise DataFileError(f"Data file must contain a JSON object: {data_path}")
    return data


def populate_store(store: ContentStateStore, data: dict[str, Any]) -> ContentStateStore:
    """
    Feed profile, achievements and content into the store, in that order.
    ValidationError from any step propagates.
    """
    store.set_profile(data.get("profile"))
    store.set_achievements(data.get("achievements"))
    store.set_content(data.get("content"))

    logger.info(
        "Loaded site data: %d achievements, %d content items",
        len(store.get_achievements()),
        len(store.get_content()),
    )
    return store
