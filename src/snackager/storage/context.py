# src/snackager/storage/context.py
"""
The process-wide storage handle.

:func:`create_storage_context` is the only place a storage client is
constructed. The resulting :class:`StorageContext` is built once at startup and
passed explicitly to the upload utility, the artifact cache and the redirect
utility.

Usage:
    config = load_storage_config()
    async with create_storage_context(config) as storage:
        await upload_file(storage, "bundle.js", data)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import TracebackType
from typing import Self

from ..backend import StorageBackend
from ..config import StorageConfig
from .client import StorageClient
from .gcs_client import GCSStorageClient
from .protocols import GCSClientProtocol, SessionProtocol
from .s3_client import S3StorageClient


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StorageContext:
    """
    The single active storage client plus the bucket pair it serves.

    Attributes:
        backend: Backend identity fixed for the process lifetime
        client: The one storage client for that backend
        artifacts_bucket: Bucket for world-readable build output
        imports_bucket: Bucket for cached descriptor objects
    """

    backend: StorageBackend
    client: StorageClient
    artifacts_bucket: str
    imports_bucket: str

    async def __aenter__(self) -> Self:
        await self.client.__aenter__()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> bool | None:
        await self.client.__aexit__(exc_type, exc_val, exc_tb)
        return None


def create_storage_context(
    config: StorageConfig,
    *,
    s3_session: SessionProtocol | None = None,
    gcs_client: GCSClientProtocol | None = None,
) -> StorageContext:
    """
    Construct the storage client chosen by ``config.storage_backend``.

    Args:
        config: Validated storage configuration
        s3_session: Session override for the S3 client (tests, custom credentials)
        gcs_client: SDK client override for the GCS client

    Returns:
        StorageContext holding exactly one client

    Raises:
        ConfigurationError: If the selected backend's settings are incomplete
    """
    client: StorageClient
    if config.storage_backend == "gcs":
        logger.info("Using Google Cloud Storage backend")
        client = GCSStorageClient(config.gcs, client=gcs_client)
    else:
        logger.info("Using AWS S3 backend")
        client = S3StorageClient(config.aws, config.s3, session=s3_session)

    return StorageContext(
        backend=config.storage_backend,
        client=client,
        artifacts_bucket=config.artifacts_bucket,
        imports_bucket=config.imports_bucket,
    )


__all__ = ["StorageContext", "create_storage_context"]
