"""Failures reported by the S3 and GCS operation wrappers.

Both wrappers classify their SDK's exceptions onto the same small set of frozen
dataclasses, tagged with the provider and the object involved, so the storage
clients can log and collapse failures the same way on either backend.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..backend import StorageBackend


@dataclass(frozen=True)
class ObjectMissing:
    """The key (or, on GCS, possibly its bucket) does not exist."""

    provider: StorageBackend
    bucket: str
    key: str
    operation: str
    message: str


@dataclass(frozen=True)
class BucketMissing:
    """The bucket does not exist (S3 ``NoSuchBucket``)."""

    provider: StorageBackend
    bucket: str
    operation: str
    message: str


@dataclass(frozen=True)
class PermissionDenied:
    """
    Credentials were rejected or lack permission for the operation.

    Attributes:
        provider: Backend that refused the call
        bucket: Bucket being accessed
        key: Object key being accessed
        operation: Provider operation that was denied (``PutObject``, ``make_public``)
        message: Provider error message
    """

    provider: StorageBackend
    bucket: str
    key: str
    operation: str
    message: str


@dataclass(frozen=True)
class ProviderUnavailable:
    """Endpoint unreachable, timed out, throttled or answering 5xx."""

    provider: StorageBackend
    operation: str
    message: str


@dataclass(frozen=True)
class ProviderFailure:
    """Anything else, kept with the provider's own error code."""

    provider: StorageBackend
    operation: str
    code: str
    message: str


ProviderError = (
    ObjectMissing | BucketMissing | PermissionDenied | ProviderUnavailable | ProviderFailure
)


def describe(error: ProviderError) -> str:
    """One-line summary for log records."""
    match error:
        case ObjectMissing(provider, bucket, key, operation, _):
            return f"{provider} {operation}: {bucket}/{key} not found"
        case BucketMissing(provider, bucket, operation, _):
            return f"{provider} {operation}: bucket {bucket} not found"
        case PermissionDenied(provider, bucket, key, operation, message):
            return f"{provider} {operation}: access denied to {bucket}/{key} ({message})"
        case ProviderUnavailable(provider, operation, message):
            return f"{provider} {operation}: unavailable ({message})"
        case ProviderFailure(provider, operation, code, message):
            return f"{provider} {operation}: {code} ({message})"


__all__ = [
    "ObjectMissing",
    "BucketMissing",
    "PermissionDenied",
    "ProviderUnavailable",
    "ProviderFailure",
    "ProviderError",
    "describe",
]
