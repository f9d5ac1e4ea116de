"""Tests for logging configuration helpers."""

import logging

import pytest
import structlog

from inpatient.utils.logging import configure_logging, get_log_level, wants_json


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        handler.close()
    root.handlers = handlers
    root.setLevel(level)
    structlog.reset_defaults()


class TestLogLevel:
    def test_explicit_level_wins(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "error")
        assert get_log_level() == "ERROR"

    @pytest.mark.parametrize(
        "environment, expected",
        [("production", "INFO"), ("development", "DEBUG"), ("test", "WARNING"), ("elsewhere", "INFO")],
    )
    def test_environment_default(self, monkeypatch, environment, expected):
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        monkeypatch.setenv("ENVIRONMENT", environment)
        assert get_log_level() == expected


class TestRenderer:
    def test_json_in_production(self, monkeypatch):
        monkeypatch.delenv("LOG_FORMAT", raising=False)
        monkeypatch.setenv("ENVIRONMENT", "production")
        assert wants_json() is True

    def test_console_in_development(self, monkeypatch):
        monkeypatch.delenv("LOG_FORMAT", raising=False)
        monkeypatch.setenv("ENVIRONMENT", "development")
        assert wants_json() is False

    def test_format_override(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "development")
        monkeypatch.setenv("LOG_FORMAT", "json")
        assert wants_json() is True


class TestConfigureLogging:
    def test_creates_rotating_files(self, tmp_path, monkeypatch, restore_logging):
        monkeypatch.setenv("LOG_LEVEL", "INFO")
        configure_logging(tmp_path / "logs")

        assert (tmp_path / "logs" / "wardstream.log").exists()
        assert (tmp_path / "logs" / "wardstream_error.log").exists()
        assert logging.getLogger("protean").level == logging.WARNING
