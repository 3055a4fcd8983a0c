"""
Tests for structlog configuration.
"""

import logging

import pytest
import structlog

from ..observability import _get_log_level, configure_structlog


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    structlog.reset_defaults()


class TestConfigureStructlog:

    def test_production_renders_json(self, capsys):
        configure_structlog(environment="production")

        structlog.get_logger("test").info("session_started", session_id=7)

        out = capsys.readouterr().out
        assert '"event": "session_started"' in out
        assert '"session_id": 7' in out

    def test_development_uses_console_renderer(self):
        configure_structlog(environment="development")

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)

    def test_log_level_from_env(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "warning")
        assert _get_log_level() == logging.WARNING

        monkeypatch.setenv("LOG_LEVEL", "nonsense")
        assert _get_log_level() == logging.INFO
