"""Tests for application logger setup."""

import logging

import pytest

from logging_config import APP_LOGGER, get_logger, setup_logging


@pytest.fixture
def app_logger():
    """Restore the app logger after setup_logging changes it."""
    logger = logging.getLogger(APP_LOGGER)
    saved = (logger.level, list(logger.handlers), logger.propagate)
    yield logger
    logger.setLevel(saved[0])
    logger.handlers = saved[1]
    logger.propagate = saved[2]


def test_setup_logging_configures_single_handler(app_logger):
    setup_logging("debug")
    setup_logging("debug")

    assert app_logger.level == logging.DEBUG
    assert len(app_logger.handlers) == 1
    assert app_logger.propagate is False


def test_unknown_level_falls_back_to_info(app_logger):
    setup_logging("chatty")
    assert app_logger.level == logging.INFO


def test_get_logger_is_namespaced():
    assert get_logger("store").name == "gym.store"
