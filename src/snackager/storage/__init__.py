# src/snackager/storage/__init__.py
"""
Object storage over S3 or Google Cloud Storage.

One backend is active per process. Build the handle once at startup with
:func:`create_storage_context` and pass it to everything that touches storage.
"""

from __future__ import annotations

from ..backend import StorageBackend, select_backend
from .client import (
    ONE_YEAR_CACHE_CONTROL,
    PUBLIC_READ,
    StorageClient,
    UploadOptions,
    UploadResult,
    encode_key,
)
from .context import StorageContext, create_storage_context
from .gcs_client import GCSStorageClient
from .provider_errors import (
    BucketMissing,
    ObjectMissing,
    PermissionDenied,
    ProviderError,
    ProviderFailure,
    ProviderUnavailable,
    describe,
)
from .s3_client import S3StorageClient


__all__ = [
    # Backend selection
    "StorageBackend",
    "select_backend",
    # Client contract
    "StorageClient",
    "UploadOptions",
    "UploadResult",
    "ONE_YEAR_CACHE_CONTROL",
    "PUBLIC_READ",
    "encode_key",
    # Implementations
    "S3StorageClient",
    "GCSStorageClient",
    # Provider failures
    "ProviderError",
    "ObjectMissing",
    "BucketMissing",
    "PermissionDenied",
    "ProviderUnavailable",
    "ProviderFailure",
    "describe",
    # Facade
    "StorageContext",
    "create_storage_context",
]
