# src/snackager/storage/gcs_client.py
"""
Google Cloud Storage implementation of :class:`~snackager.storage.client.StorageClient`.

Public visibility is not part of the object write on this backend: a
``public-read`` upload is a save followed by a separate ``make_public`` call.
Between the two calls the object exists but is not yet publicly readable, and a
failing ``make_public`` is reported as a failed upload without removing the
object that was already written.
"""

from __future__ import annotations

import logging
from types import TracebackType
from typing import Self

from google.cloud import storage

from ..config import GCSSettings
from ..errors import ConfigurationError
from ..result import Failure, Success
from .client import UploadOptions, UploadResult, encode_key
from .gcs_operations import GCSOperations
from .protocols import GCSClientProtocol
from .provider_errors import describe


logger = logging.getLogger(__name__)

GCS_PUBLIC_HOST = "https://storage.googleapis.com"


class GCSStorageClient:
    """Storage client backed by ``google.cloud.storage.Client``."""

    def __init__(
        self,
        gcs: GCSSettings | None,
        *,
        client: GCSClientProtocol | None = None,
    ) -> None:
        """
        Initialize the GCS storage client.

        Args:
            gcs: Project identifier and bucket names
            client: Pre-built client (defaults to ``storage.Client(project=...)``,
                which resolves application-default credentials immediately)

        Raises:
            ConfigurationError: If the project identifier is missing
        """
        if gcs is None or not gcs.project_id:
            raise ConfigurationError(
                "GCS configuration is required when using GCS storage backend"
            )
        self.project_id = gcs.project_id
        self._client: GCSClientProtocol = client or storage.Client(project=gcs.project_id)
        self._ops = GCSOperations(self._client)

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> bool | None:
        """Release the HTTP session held by the SDK client."""
        self._client.close()
        return None

    async def upload_file(
        self,
        bucket: str,
        key: str,
        body: bytes,
        options: UploadOptions | None = None,
    ) -> UploadResult | None:
        """Save ``body`` with cache-control/content-type metadata, then publish if asked."""
        opts = options or UploadOptions()

        result = await self._ops.upload(
            bucket,
            key,
            body,
            cache_control=opts.cache_control,
            content_type=opts.content_type,
        )
        if opts.is_public and result.is_success():
            result = await self._ops.make_public(bucket, key)

        match result:
            case Success(_):
                return UploadResult(
                    location=self.get_public_url(bucket, key),
                    bucket=bucket,
                    key=key,
                )
            case Failure(error):
                logger.error(
                    f"unable to upload file to GCS: bucket={bucket} key={key} "
                    f"error={describe(error)}"
                )
                return None

    async def get_file(self, bucket: str, key: str) -> bytes | None:
        match await self._ops.download(bucket, key):
            case Success(data):
                return data
            case Failure(_):
                return None

    async def delete_file(self, bucket: str, key: str) -> None:
        result = await self._ops.delete(bucket, key)
        match result:
            case Failure(error):
                logger.debug(f"ignoring GCS delete failure: {describe(error)}")

    async def file_exists(self, bucket: str, key: str) -> bool:
        match await self._ops.exists(bucket, key):
            case Success(exists):
                return exists
            case Failure(_):
                return False

    def get_public_url(self, bucket: str, key: str) -> str:
        return f"{GCS_PUBLIC_HOST}/{bucket}/{encode_key(key)}"


__all__ = ["GCSStorageClient", "GCS_PUBLIC_HOST"]
