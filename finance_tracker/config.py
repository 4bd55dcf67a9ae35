"""Configuration for the finance tracker."""

from __future__ import annotations

import argparse
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Sequence

from pydantic_settings import BaseSettings

DEFAULT_API_URL = "http://localhost:8080/api/transactions"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class Settings(BaseSettings):
    """Settings loaded from FINANCE_TRACKER_* environment variables."""

    api_url: str = DEFAULT_API_URL
    request_timeout: float = 10.0  # seconds, per request
    log_file: Path = Path("finance-tracker.log")
    debug: bool = False

    class Config:
        env_prefix = "FINANCE_TRACKER_"
        env_file = ".env"
        env_file_encoding = "utf-8"


def get_settings(argv: Optional[Sequence[str]] = None) -> Settings:
    """Return settings from CLI args > env vars > defaults."""
    parser = argparse.ArgumentParser(description="Personal finance tracker")
    parser.add_argument("--api-url", type=str, default=None, help="Transactions API URL")
    parser.add_argument("--timeout", type=float, default=None, help="Request timeout in seconds")
    parser.add_argument("--log-file", type=Path, default=None, help="Log file path")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    overrides = {}
    if args.api_url:
        overrides["api_url"] = args.api_url
    if args.timeout is not None:
        overrides["request_timeout"] = args.timeout
    if args.log_file is not None:
        overrides["log_file"] = args.log_file
    if args.debug:
        overrides["debug"] = True

    settings = Settings(**overrides)
    settings.api_url = settings.api_url.rstrip("/")
    return settings


def setup_logging(settings: Settings) -> None:
    """Send logs to a rotating file; the terminal belongs to the UI."""
    settings.log_file.parent.mkdir(parents=True, exist_ok=True)
    file_handler = RotatingFileHandler(
        settings.log_file,
        maxBytes=5 * 1024 * 1024,  # 5MB
        backupCount=3,
        encoding="utf-8",
    )
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        handlers=[file_handler],
        force=True,
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
