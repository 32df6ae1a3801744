"""Centralized application configuration using Pydantic Settings (v2).

This module exposes a single, cached `settings` instance that reads from:
- Real environment variables (highest precedence)
- `.env` files in the working directory: .env, .env.local

Only values that are not part of the command line live here: the log level,
the translation server defaults and the liveness check interval. The CLI
overrides the translation host when `--translate-host` is given.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

LogLevelName = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

DEFAULT_TRANSLATE_HOST = "http://127.0.0.1:5000"


class Settings(BaseSettings):
    """Typed application configuration loaded from env and `.env` files.

    Attributes
    ----------
    log_level : LogLevelName
        Global log level string; maps from `LOG_LEVEL`.
    translate_host : str
        Base URL of the LibreTranslate server; maps from
        `CAPTIONSYNC_TRANSLATE_HOST`.
    translate_api_key : Optional[str]
        API key for LibreTranslate instances that require one; maps from
        `CAPTIONSYNC_TRANSLATE_API_KEY`.
    translate_timeout_seconds : float
        Network timeout for one translation request.
    check_interval_seconds : float
        Period of the fast cadence (liveness check + translation).
    """

    log_level: LogLevelName = Field(default="INFO", alias="LOG_LEVEL")
    translate_host: str = Field(default=DEFAULT_TRANSLATE_HOST, alias="CAPTIONSYNC_TRANSLATE_HOST")
    translate_api_key: str | None = Field(default=None, alias="CAPTIONSYNC_TRANSLATE_API_KEY")
    translate_timeout_seconds: float = Field(
        default=30.0, gt=0, alias="CAPTIONSYNC_TRANSLATE_TIMEOUT"
    )
    check_interval_seconds: float = Field(default=10.0, gt=0, alias="CAPTIONSYNC_CHECK_INTERVAL")

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def log_level_numeric(self) -> int:
        """Return the numeric logging level corresponding to `self.log_level`."""
        return getattr(logging, self.log_level, logging.INFO)


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    """Create and cache a `Settings` instance.

    We keep this behind an LRU cache so tests can force a rebuild via
    `load_settings.cache_clear()` after mutating `os.environ`.
    """
    return Settings()


# Export a ready-to-use singleton (import-time read of env / .env files).
settings: Settings = load_settings()


def get_logger(name: str = "captionsync") -> logging.Logger:
    """Return a process-global logger configured to the current `LOG_LEVEL`."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")
        )
        logger.addHandler(handler)
    logger.setLevel(load_settings().log_level_numeric())
    logger.propagate = False
    return logger
