"""
Portfolio configuration — all environment variables in one place.

Read from environment at runtime.
"""

from __future__ import annotations

import os


class Settings:
    """Application settings from environment variables."""

    # Durable storage (preferences survive between runs)
    STATE_DIR: str = os.environ.get("PORTFOLIO_STATE_DIR", ".portfolio")

    # Session cache for the derived content view
    CACHE_TTL_SECONDS: int = int(os.environ.get("PORTFOLIO_CACHE_TTL_SECONDS", "300"))
    CACHE_MAX_BYTES: int = int(os.environ.get("PORTFOLIO_CACHE_MAX_BYTES", "50000"))

    # Bulk data file; bundled sample data when empty
    DATA_FILE: str = os.environ.get("PORTFOLIO_DATA_FILE", "")

    # Logging
    LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO")

    @property
    def CACHE_TTL_MS(self) -> int:
        return self.CACHE_TTL_SECONDS * 1000


settings = Settings()
