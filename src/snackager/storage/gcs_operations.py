"""Functional GCS operations wrapper using Result types.

google-cloud-storage is a blocking SDK, so each call runs on the default
executor through :func:`asyncio.to_thread`. Exceptions raised by the SDK are
mapped onto the same provider errors the S3 wrapper returns; nothing here logs
or retries.
"""

from __future__ import annotations

import asyncio
from typing import Callable, TypeVar

from google.api_core.exceptions import (
    Forbidden,
    GoogleAPICallError,
    NotFound,
    ServerError,
    TooManyRequests,
    Unauthorized,
)
from google.auth.exceptions import GoogleAuthError, TransportError
from google.cloud.storage.exceptions import DataCorruption

from ..result import Failure, Result, Success
from .protocols import BlobProtocol, GCSClientProtocol
from .provider_errors import (
    ObjectMissing,
    PermissionDenied,
    ProviderError,
    ProviderFailure,
    ProviderUnavailable,
)

T = TypeVar("T")


class GCSOperations:
    """Result-returning async interface over a google-cloud-storage client."""

    def __init__(self, gcs_client: GCSClientProtocol) -> None:
        self._client = gcs_client

    async def _run(
        self, bucket: str, key: str, operation: str, call: Callable[[BlobProtocol], T]
    ) -> Result[T, ProviderError]:
        # Bucket names are validated when the handle is built, so that happens
        # inside the guarded call too.
        def _on_blob() -> T:
            return call(self._client.bucket(bucket).blob(key))

        try:
            return Success(await asyncio.to_thread(_on_blob))
        except GoogleAPICallError as e:
            return Failure(self._classify_error(e, bucket, key, operation))
        except TransportError as e:
            return Failure(ProviderUnavailable("gcs", operation, str(e)))
        except GoogleAuthError as e:
            return Failure(PermissionDenied("gcs", bucket, key, operation, str(e)))
        except OSError as e:
            # requests.ConnectionError and friends derive from OSError
            return Failure(ProviderUnavailable("gcs", operation, str(e)))
        except (ValueError, DataCorruption) as e:
            return Failure(ProviderFailure("gcs", operation, type(e).__name__, str(e)))

    async def upload(
        self,
        bucket: str,
        key: str,
        body: bytes,
        cache_control: str | None = None,
        content_type: str | None = None,
    ) -> Result[None, ProviderError]:
        """Write ``body`` to the blob, setting cache-control and content-type metadata."""

        def _upload(blob: BlobProtocol) -> None:
            blob.cache_control = cache_control
            blob.upload_from_string(body, content_type=content_type)

        return await self._run(bucket, key, "upload", _upload)

    async def make_public(self, bucket: str, key: str) -> Result[None, ProviderError]:
        """Grant allUsers read access on an existing blob."""
        return await self._run(bucket, key, "make_public", lambda blob: blob.make_public())

    async def download(self, bucket: str, key: str) -> Result[bytes, ProviderError]:
        """Download the full blob content; a checksum mismatch is a failure."""
        return await self._run(bucket, key, "download", lambda blob: blob.download_as_bytes())

    async def delete(self, bucket: str, key: str) -> Result[None, ProviderError]:
        return await self._run(bucket, key, "delete", lambda blob: blob.delete())

    async def exists(self, bucket: str, key: str) -> Result[bool, ProviderError]:
        return await self._run(bucket, key, "exists", lambda blob: blob.exists())

    def _classify_error(
        self, error: GoogleAPICallError, bucket: str, key: str, operation: str
    ) -> ProviderError:
        """Map a google-api-core HTTP error onto a provider error."""
        message = str(error.message) if error.message else str(error)

        match error:
            case NotFound():
                return ObjectMissing("gcs", bucket, key, operation, message)

            case Forbidden() | Unauthorized():
                return PermissionDenied("gcs", bucket, key, operation, message)

            case TooManyRequests() | ServerError():
                return ProviderUnavailable("gcs", operation, message)

            case _:
                return ProviderFailure("gcs", operation, str(error.code), message)
