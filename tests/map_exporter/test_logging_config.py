import logging

import pytest
from pythonjsonlogger import jsonlogger

from map_exporter.logging_config import NOISY_LOGGERS, PACKAGE_LOGGER, configure_logging


@pytest.fixture(autouse=True)
def restore_loggers(monkeypatch):
    monkeypatch.delenv("MAP_EXPORTER_LOG_FORMAT", raising=False)
    monkeypatch.delenv("MAP_EXPORTER_LOG_LEVEL", raising=False)

    root = logging.getLogger()
    names = (PACKAGE_LOGGER,) + NOISY_LOGGERS
    saved_root = list(root.handlers), root.level
    saved_levels = {name: logging.getLogger(name).level for name in names}
    yield
    root.handlers[:] = saved_root[0]
    root.setLevel(saved_root[1])
    for name, level in saved_levels.items():
        logging.getLogger(name).setLevel(level)


def test_json_format_by_default():
    configure_logging()
    root = logging.getLogger()
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0].formatter, jsonlogger.JsonFormatter)


def test_plain_format_from_env(monkeypatch):
    monkeypatch.setenv("MAP_EXPORTER_LOG_FORMAT", "plain")
    configure_logging(level=logging.DEBUG)
    root = logging.getLogger()
    assert not isinstance(root.handlers[0].formatter, jsonlogger.JsonFormatter)
    assert root.level == logging.DEBUG


def test_repeated_calls_keep_one_handler():
    configure_logging()
    configure_logging(force_format="plain")
    assert len(logging.getLogger().handlers) == 1


def test_package_logger_follows_env_level(monkeypatch):
    monkeypatch.setenv("MAP_EXPORTER_LOG_LEVEL", "debug")
    configure_logging()
    assert logging.getLogger(PACKAGE_LOGGER).level == logging.DEBUG
    assert logging.getLogger().level == logging.DEBUG


def test_unknown_level_name_falls_back_to_info():
    configure_logging(level="chatty")
    assert logging.getLogger(PACKAGE_LOGGER).level == logging.INFO


def test_noisy_loggers_held_at_warning():
    configure_logging(level=logging.DEBUG)
    for name in NOISY_LOGGERS:
        assert logging.getLogger(name).level == logging.WARNING
