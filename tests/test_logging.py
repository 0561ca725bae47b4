import logging

from shared.utils import get_logger
from shared.utils.logging import resolve_level


def test_resolve_level():
    assert resolve_level(None) == logging.INFO
    assert resolve_level("debug") == logging.DEBUG
    assert resolve_level(" WARNING ") == logging.WARNING
    assert resolve_level(logging.ERROR) == logging.ERROR
    assert resolve_level("chatty") == logging.INFO


def test_get_logger_adds_one_handler():
    logger = get_logger("tests.logging_probe", "debug")
    get_logger("tests.logging_probe")

    assert len(logger.handlers) == 1
    assert logger.level == logging.INFO
    assert not logger.propagate
