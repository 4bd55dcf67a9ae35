"""Tests for settings resolution and logging setup."""

import logging
from pathlib import Path

import pytest

from finance_tracker.config import DEFAULT_API_URL, get_settings, setup_logging


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("FINANCE_TRACKER_API_URL", "FINANCE_TRACKER_REQUEST_TIMEOUT", "FINANCE_TRACKER_DEBUG"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers = handlers
    root.setLevel(level)


class TestGetSettings:
    def test_defaults(self):
        settings = get_settings([])

        assert settings.api_url == DEFAULT_API_URL
        assert settings.request_timeout == 10.0
        assert settings.debug is False

    def test_env_var(self, monkeypatch):
        monkeypatch.setenv("FINANCE_TRACKER_API_URL", "http://finance.local/api/transactions/")
        monkeypatch.setenv("FINANCE_TRACKER_REQUEST_TIMEOUT", "3.5")

        settings = get_settings([])

        assert settings.api_url == "http://finance.local/api/transactions"
        assert settings.request_timeout == 3.5

    def test_cli_overrides_env(self, monkeypatch):
        monkeypatch.setenv("FINANCE_TRACKER_API_URL", "http://env/api/transactions")

        settings = get_settings(["--api-url", "http://cli/api/transactions", "--timeout", "1", "--debug"])

        assert settings.api_url == "http://cli/api/transactions"
        assert settings.request_timeout == 1.0
        assert settings.debug is True


def test_setup_logging_writes_to_file(tmp_path, restore_root_logger):
    log_file = tmp_path / "logs" / "tracker.log"
    settings = get_settings(["--log-file", str(log_file)])

    setup_logging(settings)
    logging.getLogger("finance_tracker.test").info("hello from the tracker")
    for handler in logging.getLogger().handlers:
        handler.flush()

    assert isinstance(settings.log_file, Path)
    content = log_file.read_text(encoding="utf-8")
    assert "finance_tracker.test - INFO - hello from the tracker" in content
