# src/snackager/storage/client.py
"""
The backend-agnostic storage client contract.

Both :class:`~snackager.storage.s3_client.S3StorageClient` and
:class:`~snackager.storage.gcs_client.GCSStorageClient` satisfy
:class:`StorageClient`. Recoverable provider failures never raise through this
interface: uploads and reads return ``None``, probes return ``False`` and
deletes are silent.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import TracebackType
from typing import Final, Protocol, Self
from urllib.parse import quote

ONE_YEAR_CACHE_CONTROL: Final = "public, max-age=31536000"
PUBLIC_READ: Final = "public-read"

# Characters JavaScript's encodeURIComponent leaves alone besides alphanumerics
# and "-_.~" (which urllib.parse.quote never escapes).
_URI_COMPONENT_SAFE: Final = "!*'()"


@dataclass(frozen=True)
class UploadResult:
    """Location of a freshly written object.

    Attributes:
        location: Fully-qualified public URL of the object
        bucket: Bucket name exactly as passed by the caller
        key: Object key exactly as passed by the caller
    """

    location: str
    bucket: str
    key: str


@dataclass(frozen=True)
class UploadOptions:
    """Per-upload settings.

    ``None`` means "let the backend decide", not "explicitly unset".
    """

    content_type: str | None = None
    cache_control: str = ONE_YEAR_CACHE_CONTROL
    acl: str | None = None

    @property
    def is_public(self) -> bool:
        return self.acl == PUBLIC_READ


def encode_key(key: str) -> str:
    """Percent-encode an object key the way encodeURIComponent does ("/" included)."""
    return quote(key, safe=_URI_COMPONENT_SAFE)


class StorageClient(Protocol):
    """Async object storage over a single provider."""

    async def __aenter__(self) -> Self: ...

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> bool | None: ...

    async def upload_file(
        self,
        bucket: str,
        key: str,
        body: bytes,
        options: UploadOptions | None = None,
    ) -> UploadResult | None:
        """Write ``body`` to ``(bucket, key)``; ``None`` on any provider error."""
        ...

    async def get_file(self, bucket: str, key: str) -> bytes | None:
        """Full object content; ``None`` when missing or on error."""
        ...

    async def delete_file(self, bucket: str, key: str) -> None:
        """Best-effort delete; errors are swallowed."""
        ...

    async def file_exists(self, bucket: str, key: str) -> bool:
        """``True`` only if a metadata probe succeeds."""
        ...

    def get_public_url(self, bucket: str, key: str) -> str:
        """Public HTTPS URL of the object."""
        ...


__all__ = [
    "ONE_YEAR_CACHE_CONTROL",
    "PUBLIC_READ",
    "UploadResult",
    "UploadOptions",
    "StorageClient",
    "encode_key",
]
