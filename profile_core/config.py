from __future__ import annotations

import math
import os
from dataclasses import dataclass

DEFAULT_SCRAPER_API_URL = "http://localhost:5000"
# the scraper backend allows up to two minutes for page navigation
DEFAULT_SCRAPER_TIMEOUT = 150.0
LOG_LEVELS = ("CRITICAL", "FATAL", "ERROR", "WARNING", "WARN", "INFO", "DEBUG", "NOTSET")


@dataclass(frozen=True)
class Settings:
    scraper_api_url: str = DEFAULT_SCRAPER_API_URL
    scraper_timeout: float = DEFAULT_SCRAPER_TIMEOUT
    log_level: str = "INFO"


def load_settings() -> Settings:
    raw_timeout = os.getenv("SCRAPER_TIMEOUT")
    try:
        timeout = float(raw_timeout) if raw_timeout else DEFAULT_SCRAPER_TIMEOUT
    except ValueError as exc:
        raise ValueError(f"SCRAPER_TIMEOUT must be a number of seconds, got {raw_timeout!r}") from exc
    if not math.isfinite(timeout) or timeout <= 0:
        raise ValueError(f"SCRAPER_TIMEOUT must be a positive finite number, got {raw_timeout!r}")

    log_level = (os.getenv("LOG_LEVEL") or "INFO").strip().upper()
    if log_level not in LOG_LEVELS:
        raise ValueError(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {log_level!r}")

    return Settings(
        scraper_api_url=(os.getenv("SCRAPER_API_URL") or DEFAULT_SCRAPER_API_URL).rstrip("/"),
        scraper_timeout=timeout,
        log_level=log_level,
    )
