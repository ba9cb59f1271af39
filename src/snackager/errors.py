# src/snackager/errors.py
"""Exception hierarchy for the snackager storage layer."""

from __future__ import annotations


class SnackagerError(Exception):
    """Base exception for all snackager errors."""

    pass


class ConfigurationError(SnackagerError):
    """Required storage configuration is missing or invalid.

    Raised at construction time so the process never starts serving with a
    half-configured backend.
    """

    pass


class StorageError(SnackagerError):
    """Base exception for storage failures that are escalated to callers."""

    pass


class CacheWriteError(StorageError):
    """A descriptor could not be written to the imports bucket."""

    def __init__(self, filename: str, reason: str) -> None:
        self.filename = filename
        self.reason = reason
        super().__init__(f"CacheObj failure for {filename}: {reason}")


__all__ = [
    "SnackagerError",
    "ConfigurationError",
    "StorageError",
    "CacheWriteError",
]
