"""
Tests for logging setup.

Only handlers installed by setup_logging are inspected; test runners may
attach their own capture handlers to the same logger.
"""
import logging
import logging.handlers

import pytest
from finance_tracker.core.logging_config import (
    CONSOLE_HANDLER_NAME,
    FILE_HANDLER_NAME,
    ROOT_LOGGER_NAME,
    setup_logging,
)

OWN_HANDLERS = (CONSOLE_HANDLER_NAME, FILE_HANDLER_NAME)


def own_handlers(logger):
    return [h for h in logger.handlers if h.get_name() in OWN_HANDLERS]


@pytest.fixture
def clean_logger():
    """Package logger with any handlers from setup_logging removed."""
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    saved = own_handlers(logger)
    for handler in saved:
        logger.removeHandler(handler)
    yield logger
    for handler in own_handlers(logger):
        logger.removeHandler(handler)
        handler.close()
    for handler in saved:
        logger.addHandler(handler)


def test_console_only(clean_logger):
    logger = setup_logging("debug")

    assert logger is clean_logger
    assert logger.level == logging.DEBUG
    assert [h.get_name() for h in own_handlers(logger)] == [CONSOLE_HANDLER_NAME]
    assert logger.propagate is False


def test_rotating_file_handler(clean_logger, tmp_path):
    logger = setup_logging("INFO", str(tmp_path / "logs"))

    file_handlers = [
        h for h in own_handlers(logger) if isinstance(h, logging.handlers.RotatingFileHandler)
    ]
    assert len(file_handlers) == 1
    assert file_handlers[0].maxBytes == 10 * 1024 * 1024
    assert (tmp_path / "logs").is_dir()


def test_handlers_not_duplicated(clean_logger):
    setup_logging()
    setup_logging()
    assert len(own_handlers(clean_logger)) == 1


def test_foreign_handler_does_not_block_setup(clean_logger):
    """A handler attached by someone else must not stop setup_logging."""
    foreign = logging.NullHandler()
    clean_logger.addHandler(foreign)
    try:
        setup_logging()
        assert len(own_handlers(clean_logger)) == 1
        assert foreign in clean_logger.handlers
    finally:
        clean_logger.removeHandler(foreign)
