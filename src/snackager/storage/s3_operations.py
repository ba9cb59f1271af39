"""Result-returning wrapper over an aioboto3 S3 client.

botocore ``ClientError`` and ``BotoCoreError`` exceptions are turned into
:mod:`~snackager.storage.provider_errors` values. Nothing here logs or
retries; the caller decides what a failure means.
"""

from __future__ import annotations

from typing import Awaitable, TypeVar

from botocore.exceptions import BotoCoreError, ClientError

from ..result import Failure, Result, Success
from .protocols import S3ClientProtocol
from .provider_errors import (
    BucketMissing,
    ObjectMissing,
    PermissionDenied,
    ProviderError,
    ProviderFailure,
    ProviderUnavailable,
)

T = TypeVar("T")

# HeadObject has no response body, so its failures only carry the HTTP status.
_MISSING_CODES = frozenset({"NoSuchKey", "NotFound", "404"})
_DENIED_CODES = frozenset(
    {"AccessDenied", "Forbidden", "403", "InvalidAccessKeyId", "SignatureDoesNotMatch"}
)
_UNAVAILABLE_CODES = frozenset(
    {"RequestTimeout", "ServiceUnavailable", "SlowDown", "InternalError", "500", "503"}
)


def classify_client_error(
    error: ClientError, bucket: str, key: str, operation: str
) -> ProviderError:
    """Map an S3 error code onto a provider error."""
    details = error.response.get("Error", {})
    code = str(details.get("Code", "Unknown"))
    message = str(details.get("Message", error))

    if code == "NoSuchBucket":
        return BucketMissing("s3", bucket, operation, message)
    if code in _MISSING_CODES:
        return ObjectMissing("s3", bucket, key, operation, message)
    if code in _DENIED_CODES:
        return PermissionDenied("s3", bucket, key, operation, message)
    if code in _UNAVAILABLE_CODES:
        return ProviderUnavailable("s3", operation, message)
    return ProviderFailure("s3", operation, code, message)


class S3Operations:
    """
    Object-level S3 calls that return ``Result`` instead of raising.

    Example:
        ```python
        s3_ops = S3Operations(s3_client)
        match await s3_ops.get_object("snack-imports", "abc.json"):
            case Success(data):
                use(data)
            case Failure(ObjectMissing()):
                recompute()
            case Failure(error):
                logger.error(describe(error))
        ```
    """

    def __init__(self, s3_client: S3ClientProtocol) -> None:
        self._client = s3_client

    async def _call(
        self, bucket: str, key: str, operation: str, pending: Awaitable[T]
    ) -> Result[T, ProviderError]:
        try:
            return Success(await pending)
        except ClientError as e:
            return Failure(classify_client_error(e, bucket, key, operation))
        except BotoCoreError as e:
            return Failure(ProviderUnavailable("s3", operation, str(e)))

    async def get_object(self, bucket: str, key: str) -> Result[bytes, ProviderError]:
        """Read the whole object body."""

        async def _read() -> bytes:
            response = await self._client.get_object(Bucket=bucket, Key=key)
            return await response["Body"].read()

        return await self._call(bucket, key, "GetObject", _read())

    async def put_object(
        self, bucket: str, key: str, body: bytes, **fields: object
    ) -> Result[object, ProviderError]:
        """
        Write an object.

        Args:
            bucket: Target bucket
            key: Object key
            body: Object content
            **fields: Extra PutObject fields (``ACL``, ``CacheControl``,
                ``ContentType``, ``WebsiteRedirectLocation``)

        Returns:
            Success(response) with the raw PutObject acknowledgment
            Failure(ProviderError) otherwise
        """
        return await self._call(
            bucket,
            key,
            "PutObject",
            self._client.put_object(Bucket=bucket, Key=key, Body=body, **fields),
        )

    async def delete_object(self, bucket: str, key: str) -> Result[None, ProviderError]:
        """Delete an object. A key that is already gone counts as deleted."""
        match await self._call(
            bucket, key, "DeleteObject", self._client.delete_object(Bucket=bucket, Key=key)
        ):
            case Success(_) | Failure(ObjectMissing()):
                return Success(None)
            case Failure(error):
                return Failure(error)

    async def head_object(self, bucket: str, key: str) -> Result[object, ProviderError]:
        """Fetch object metadata without the body."""
        return await self._call(
            bucket, key, "HeadObject", self._client.head_object(Bucket=bucket, Key=key)
        )


__all__ = ["S3Operations", "classify_client_error"]
