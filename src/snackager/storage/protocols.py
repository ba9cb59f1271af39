# src/snackager/storage/protocols.py
"""
Protocol definitions for the provider SDK surfaces the storage clients use.

Only the calls snackager actually makes are listed. The real SDK objects
(aioboto3 S3 client, google-cloud-storage ``Client``) satisfy them structurally,
and so do the in-memory fakes in the test-suite.
"""

from __future__ import annotations

from types import TracebackType
from typing import Protocol

from botocore.config import Config


# ---------------------------------------------------------------------------
# S3 (aioboto3)
# ---------------------------------------------------------------------------


class StreamingBodyProtocol(Protocol):
    """The ``Body`` of a GetObject response; read whole, never streamed."""

    async def read(self) -> bytes: ...


class S3ResponseProtocol(Protocol):
    """GetObject response mapping; only ``Body`` is read."""

    def __getitem__(self, key: str) -> StreamingBodyProtocol: ...


class S3ClientProtocol(Protocol):
    """Protocol for the async S3 client returned by ``session.client("s3")``."""

    async def put_object(self, **kwargs: object) -> object: ...
    async def get_object(self, **kwargs: object) -> S3ResponseProtocol: ...
    async def delete_object(self, **kwargs: object) -> object: ...
    async def head_object(self, **kwargs: object) -> object: ...


class AsyncContextManagerProtocol(Protocol):
    """What ``session.client("s3", ...)`` returns; entering it opens the client."""

    async def __aenter__(self) -> S3ClientProtocol: ...
    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> bool | None: ...


class SessionProtocol(Protocol):
    """The part of ``aioboto3.Session`` used to open S3 clients."""

    def client(
        self,
        service_name: str,
        endpoint_url: str | None = ...,
        config: Config | None = ...,
        **kwargs: object,
    ) -> AsyncContextManagerProtocol: ...


# ---------------------------------------------------------------------------
# GCS (google-cloud-storage)
# ---------------------------------------------------------------------------


class BlobProtocol(Protocol):
    """Protocol for google.cloud.storage.Blob."""

    cache_control: str | None

    def upload_from_string(self, data: bytes, content_type: str | None = ...) -> None: ...
    def download_as_bytes(self) -> bytes: ...
    def delete(self) -> None: ...
    def exists(self) -> bool: ...
    def make_public(self) -> None: ...


class BucketProtocol(Protocol):
    """Protocol for google.cloud.storage.Bucket."""

    def blob(self, blob_name: str) -> BlobProtocol: ...


class GCSClientProtocol(Protocol):
    """Protocol for google.cloud.storage.Client."""

    def bucket(self, bucket_name: str) -> BucketProtocol: ...
    def close(self) -> None: ...


__all__ = [
    "StreamingBodyProtocol",
    "S3ResponseProtocol",
    "S3ClientProtocol",
    "AsyncContextManagerProtocol",
    "SessionProtocol",
    "BlobProtocol",
    "BucketProtocol",
    "GCSClientProtocol",
]
