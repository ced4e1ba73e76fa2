import logging

import pytest

from utils.logger import LOG_LEVEL_ENV, get_logger


@pytest.fixture
def logger_name(request):
    name = f"test.{request.node.name}"
    yield name
    logging.getLogger(name).handlers.clear()


def test_get_logger_defaults_to_info(logger_name, monkeypatch):
    monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)
    logger = get_logger(logger_name)
    assert logger.name == logger_name
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 1


def test_get_logger_reads_env(logger_name, monkeypatch):
    monkeypatch.setenv(LOG_LEVEL_ENV, "debug")
    assert get_logger(logger_name).level == logging.DEBUG


def test_get_logger_explicit_level_wins(logger_name, monkeypatch):
    monkeypatch.setenv(LOG_LEVEL_ENV, "DEBUG")
    assert get_logger(logger_name, level="WARNING").level == logging.WARNING
    assert get_logger(logger_name, level=logging.ERROR).level == logging.ERROR


def test_get_logger_invalid_level_falls_back(logger_name):
    assert get_logger(logger_name, level="LOUD").level == logging.INFO


def test_get_logger_does_not_duplicate_handlers(logger_name):
    get_logger(logger_name)
    logger = get_logger(logger_name)
    assert len(logger.handlers) == 1
    assert logger.handlers[0].formatter._fmt == "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
