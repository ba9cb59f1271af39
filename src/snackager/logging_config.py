"""Logging setup for snackager entry points."""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(level: int | str = logging.INFO) -> None:
    """Send snackager records to stderr; library code only ever calls getLogger."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root = logging.getLogger("snackager")
    root.handlers[:] = [handler]
    root.setLevel(level)


__all__ = ["LOG_FORMAT", "configure_logging"]
