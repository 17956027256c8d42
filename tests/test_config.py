import logging

from gradex.config import LOG_LEVEL_ENV, configure_logging


def test_configure_logging_reads_level_from_environment(monkeypatch):
    monkeypatch.setenv(LOG_LEVEL_ENV, "warning")
    assert configure_logging() == logging.WARNING


def test_configure_logging_explicit_level_and_fallback(monkeypatch):
    monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)
    assert configure_logging("debug") == logging.DEBUG
    assert configure_logging("not-a-level") == logging.INFO
    assert configure_logging() == logging.INFO
