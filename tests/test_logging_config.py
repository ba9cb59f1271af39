# tests/test_logging_config.py
"""Tests for CLI logging setup."""

from __future__ import annotations

import logging
from typing import Generator

import pytest

from snackager.logging_config import LOG_FORMAT, configure_logging


@pytest.fixture
def restore_snackager_logger() -> Generator[logging.Logger, None, None]:
    logger = logging.getLogger("snackager")
    handlers, level = list(logger.handlers), logger.level
    yield logger
    logger.handlers[:] = handlers
    logger.setLevel(level)


def test_configure_logging_installs_single_handler(
    restore_snackager_logger: logging.Logger,
) -> None:
    configure_logging("DEBUG")
    configure_logging("WARNING")

    (handler,) = restore_snackager_logger.handlers
    assert isinstance(handler, logging.StreamHandler)
    assert handler.formatter is not None
    assert handler.formatter._fmt == LOG_FORMAT
    assert restore_snackager_logger.level == logging.WARNING
