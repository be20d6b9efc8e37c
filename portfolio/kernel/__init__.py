"""
Portfolio Kernel — the reactive content state engine.

Components:
  validators   — record validation before anything enters the store
  store        — canonical collections + filter/page state, mutation API
  filtering    — filtered, newest-first view
  pagination   — page math over the view
  events       — named-event listener hub
  persistence  — durable preferences + short-lived view cache
  renderer     — static page HTML from store state
"""

from portfolio.kernel.events import NotificationHub, dispatch
from portfolio.kernel.loader import DataFileError, load_site_data, populate_store
from portfolio.kernel.persistence import PersistenceLayer
from portfolio.kernel.renderer import render_page
from portfolio.kernel.storage import JsonFileStorage, KeyValueStorage, MemoryStorage
from portfolio.kernel.store import ContentStateStore
from portfolio.kernel.validators import ValidationError

__all__ = [
    "ContentStateStore",
    "ValidationError",
    "NotificationHub",
    "dispatch",
    "PersistenceLayer",
    "KeyValueStorage",
    "MemoryStorage",
    "JsonFileStorage",
    "DataFileError",
    "load_site_data",
    "populate_store",
    "render_page",
]
