"""
Success/Failure values returned by the provider operation wrappers.

A wrapper call never raises for a provider failure; it hands back a
``Failure`` carrying a :mod:`~snackager.storage.provider_errors` value and the
storage client decides whether that becomes a log line, ``None`` or ``False``.

Usage:
    >>> match await s3_ops.get_object("snack-imports", "abc.json"):
    ...     case Success(data):
    ...         print(len(data))
    ...     case Failure(ObjectMissing()):
    ...         print("cache miss")
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar


T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True)
class Success(Generic[T]):
    """The call completed; ``value`` is what the provider returned."""

    value: T

    def is_success(self) -> bool:
        return True

    def is_failure(self) -> bool:
        return False


@dataclass(frozen=True)
class Failure(Generic[E]):
    """The call failed; ``error`` says how."""

    error: E

    def is_success(self) -> bool:
        return False

    def is_failure(self) -> bool:
        return True


Result = Success[T] | Failure[E]


__all__ = ["Success", "Failure", "Result"]
