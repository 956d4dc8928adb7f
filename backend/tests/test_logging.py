import logging

from bepo.core.logging import APP_LOGGER, configure_logging


def test_app_logger_level_can_differ_from_root(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "warning")
    monkeypatch.setenv("BEPO_LOG_LEVEL", "debug")
    try:
        configure_logging()
        assert logging.getLogger().level == logging.WARNING
        assert logging.getLogger(APP_LOGGER).level == logging.DEBUG
        assert logging.getLogger("bepo.services.calculator").getEffectiveLevel() == logging.DEBUG
        assert logging.getLogger(APP_LOGGER).propagate is False
    finally:
        monkeypatch.delenv("LOG_LEVEL")
        monkeypatch.delenv("BEPO_LOG_LEVEL")
        configure_logging()


def test_app_logger_follows_log_level_by_default(monkeypatch):
    monkeypatch.delenv("BEPO_LOG_LEVEL", raising=False)
    monkeypatch.setenv("LOG_LEVEL", "ERROR")
    try:
        configure_logging()
        assert logging.getLogger(APP_LOGGER).level == logging.ERROR
    finally:
        monkeypatch.delenv("LOG_LEVEL")
        configure_logging()
