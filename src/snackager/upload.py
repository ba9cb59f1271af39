"""Upload of bundled artifacts to the artifacts bucket."""

from __future__ import annotations

from .storage.client import ONE_YEAR_CACHE_CONTROL, PUBLIC_READ, UploadOptions, UploadResult
from .storage.context import StorageContext

ARTIFACT_UPLOAD_OPTIONS = UploadOptions(acl=PUBLIC_READ, cache_control=ONE_YEAR_CACHE_CONTROL)


async def upload_file(storage: StorageContext, key: str, body: bytes) -> UploadResult | None:
    """Write a public, long-cached artifact. ``None`` means the upload failed."""
    return await storage.client.upload_file(
        storage.artifacts_bucket, key, body, ARTIFACT_UPLOAD_OPTIONS
    )
