"""Tests for chronoscharts logging configuration."""

import logging
import sys

import pytest

from chronoscharts.utils.logging import LOG_LEVEL_ENV_VAR, LOGGER_NAME, configure_logging, get_logger


@pytest.fixture
def clean_logger():
    logger = logging.getLogger(LOGGER_NAME)
    saved_handlers = logger.handlers[:]
    saved_level = logger.level
    logger.handlers = []
    yield logger
    logger.handlers = saved_handlers
    logger.setLevel(saved_level)


def _stderr_handlers(logger):
    return [h for h in logger.handlers if isinstance(h, logging.StreamHandler) and h.stream is sys.stderr]


def test_package_installs_null_handler():
    import chronoscharts  # noqa: F401

    logger = logging.getLogger(LOGGER_NAME)
    assert any(isinstance(h, logging.NullHandler) for h in logger.handlers)


def test_get_logger_names():
    assert get_logger().name == LOGGER_NAME
    assert get_logger("chronoscharts.chart.scales").name == "chronoscharts.chart.scales"


def test_configure_logging_level_from_env(clean_logger, monkeypatch):
    monkeypatch.setenv(LOG_LEVEL_ENV_VAR, "DEBUG")
    configure_logging()
    assert clean_logger.level == logging.DEBUG
    assert len(_stderr_handlers(clean_logger)) == 1


def test_configure_logging_is_idempotent(clean_logger):
    configure_logging("WARNING")
    configure_logging("WARNING")
    assert len(_stderr_handlers(clean_logger)) == 1
    assert clean_logger.level == logging.WARNING


def test_configure_logging_force_replaces_handlers(clean_logger):
    configure_logging("INFO")
    configure_logging("ERROR", force=True, fmt="%(message)s")
    handlers = _stderr_handlers(clean_logger)
    assert len(handlers) == 1
    assert handlers[0].formatter._fmt == "%(message)s"
    assert clean_logger.level == logging.ERROR


def test_configure_logging_never_touches_root(clean_logger):
    root_handlers = logging.getLogger().handlers[:]
    configure_logging("DEBUG")
    assert logging.getLogger().handlers == root_handlers


def test_computation_passes_log_debug_lines(caplog):
    from datetime import datetime

    from chronoscharts.analytics.entries import Entry
    from chronoscharts.analytics.periods import aggregate_by_period
    from chronoscharts.chart.scales import build_x_scale

    entries = [Entry(timestamp=datetime(2024, 1, d), value=float(d)) for d in (1, 2, 9)]
    with caplog.at_level(logging.DEBUG, logger=LOGGER_NAME):
        aggregate_by_period(entries, "week")
        build_x_scale([e.timestamp for e in entries], 400)
    names = {r.name for r in caplog.records if r.levelno == logging.DEBUG}
    assert "chronoscharts.analytics.periods" in names
    assert "chronoscharts.chart.scales" in names
    assert "into 2 week buckets" in caplog.text
