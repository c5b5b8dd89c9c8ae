"""Configuration settings for repscribe (environment-driven)."""

from __future__ import annotations

import os
from functools import lru_cache

DEFAULT_MAX_INPUT_CHARS = 20_000


class Settings:
    """Runtime settings. Parsing lexicons are constants in parser.py, not settings."""

    LOG_LEVEL: str = "WARNING"
    MAX_INPUT_CHARS: int = DEFAULT_MAX_INPUT_CHARS

    def __init__(self) -> None:
        level = os.getenv("REPSCRIBE_LOG_LEVEL", "WARNING").strip().upper()
        if level in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            self.LOG_LEVEL = level
        else:
            self.LOG_LEVEL = "WARNING"

        raw_max = os.getenv("REPSCRIBE_MAX_INPUT_CHARS", "").strip()
        try:
            self.MAX_INPUT_CHARS = int(raw_max) if raw_max else DEFAULT_MAX_INPUT_CHARS
        except ValueError:
            self.MAX_INPUT_CHARS = DEFAULT_MAX_INPUT_CHARS
        if self.MAX_INPUT_CHARS <= 0:
            self.MAX_INPUT_CHARS = DEFAULT_MAX_INPUT_CHARS


@lru_cache
def get_settings() -> Settings:
    return Settings()
