"""Configuration helpers for the search tool server."""
from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional


@dataclass
class Settings:
    """Centralized environment-driven configuration.

    Values are read once at import time; `get_settings` hands out a cached
    instance. Only the API key is mandatory, and its absence is checked when
    the application starts rather than here.
    """

    brave_api_key: Optional[str] = os.getenv("BRAVE_API_KEY")
    brave_api_base_url: str = os.getenv("BRAVE_API_BASE_URL", "https://api.search.brave.com/res/v1")
    request_timeout: float = float(os.getenv("BRAVE_REQUEST_TIMEOUT", "30"))
    # Free plan quota
    rate_limit_per_second: int = int(os.getenv("BRAVE_RATE_LIMIT_PER_SECOND", "1"))
    rate_limit_per_month: int = int(os.getenv("BRAVE_RATE_LIMIT_PER_MONTH", "15000"))
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3004"))
    log_level: str = os.getenv("LOG_LEVEL", "INFO")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached settings instance to avoid repeated environment reads."""

    return Settings()


settings = get_settings()
