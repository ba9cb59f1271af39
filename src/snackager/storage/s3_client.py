# src/snackager/storage/s3_client.py
"""
S3 implementation of :class:`~snackager.storage.client.StorageClient`.

Usage:
    async with S3StorageClient(config.aws, config.s3) as client:
        result = await client.upload_file("snack-artifacts", "bundle.js", data)
"""

from __future__ import annotations

import logging
from types import TracebackType
from typing import Self

import aioboto3
from botocore.config import Config

from ..config import AwsCredentials, S3Settings
from ..errors import ConfigurationError
from ..result import Failure, Result, Success
from .client import PUBLIC_READ, UploadOptions, UploadResult, encode_key
from .protocols import AsyncContextManagerProtocol, SessionProtocol
from .provider_errors import ProviderError, ProviderFailure, describe
from .s3_operations import S3Operations


logger = logging.getLogger(__name__)


class S3StorageClient:
    """
    Storage client backed by an aioboto3 S3 client.

    Credentials and region are checked in ``__init__``; the underlying client is
    opened in ``__aenter__`` and shared by every concurrent call until
    ``__aexit__``.
    """

    def __init__(
        self,
        aws: AwsCredentials | None,
        s3: S3Settings | None,
        *,
        session: SessionProtocol | None = None,
    ) -> None:
        """
        Initialize the S3 storage client.

        Args:
            aws: Access/secret key pair
            s3: Region, buckets and optional endpoint URL
            session: Pre-built session (defaults to an ``aioboto3.Session``
                built from ``aws`` and ``s3.region``)

        Raises:
            ConfigurationError: If credentials or region are missing
        """
        if aws is None or s3 is None:
            raise ConfigurationError(
                "AWS/S3 configuration is required when using S3 storage backend"
            )
        if not (aws.access_key and aws.secret_key and s3.region):
            raise ConfigurationError(
                "AWS access key, secret key and S3 region must all be set"
            )

        self.region = s3.region
        self.endpoint_url = s3.endpoint_url
        self.session: SessionProtocol = session or aioboto3.Session(
            aws_access_key_id=aws.access_key,
            aws_secret_access_key=aws.secret_key,
            region_name=s3.region,
        )
        self.boto_config = Config(max_pool_connections=50)

        self._client_context: AsyncContextManagerProtocol | None = None
        self._s3_ops: S3Operations | None = None

    async def __aenter__(self) -> Self:
        """Open the underlying S3 client."""
        client_context = self.session.client(
            "s3",
            endpoint_url=self.endpoint_url,
            config=self.boto_config,
        )
        s3_client = await client_context.__aenter__()
        self._client_context = client_context
        self._s3_ops = S3Operations(s3_client)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> bool | None:
        """Close the underlying S3 client."""
        client_context = self._client_context
        self._client_context = None
        self._s3_ops = None
        if client_context is not None:
            await client_context.__aexit__(exc_type, exc_val, exc_tb)
        return None

    def _ops(self) -> Result[S3Operations, ProviderError]:
        if self._s3_ops is None:
            return Failure(
                ProviderFailure(
                    "s3",
                    "open",
                    "NotInitialized",
                    "S3 client not initialized. Use 'async with' context manager.",
                )
            )
        return Success(self._s3_ops)

    async def upload_file(
        self,
        bucket: str,
        key: str,
        body: bytes,
        options: UploadOptions | None = None,
    ) -> UploadResult | None:
        """Upload ``body``; ACL and ContentType are only sent when set."""
        opts = options or UploadOptions()
        extra: dict[str, object] = {"CacheControl": opts.cache_control}
        if opts.acl is not None:
            extra["ACL"] = opts.acl
        if opts.content_type is not None:
            extra["ContentType"] = opts.content_type

        match self._ops():
            case Failure(error):
                result: Result[object, ProviderError] = Failure(error)
            case Success(ops):
                result = await ops.put_object(bucket, key, body, **extra)

        match result:
            case Success(_):
                return UploadResult(
                    location=self.get_public_url(bucket, key),
                    bucket=bucket,
                    key=key,
                )
            case Failure(error):
                logger.error(
                    f"unable to upload file to S3: bucket={bucket} key={key} "
                    f"error={describe(error)}"
                )
                return None

    async def get_file(self, bucket: str, key: str) -> bytes | None:
        match self._ops():
            case Failure(_):
                return None
            case Success(ops):
                match await ops.get_object(bucket, key):
                    case Success(data):
                        return data
                    case Failure(_):
                        return None

    async def delete_file(self, bucket: str, key: str) -> None:
        match self._ops():
            case Success(ops):
                result: Result[None, ProviderError] = await ops.delete_object(bucket, key)
            case Failure(error):
                result = Failure(error)
        match result:
            case Failure(error):
                logger.debug(f"ignoring S3 delete failure: {describe(error)}")

    async def file_exists(self, bucket: str, key: str) -> bool:
        match self._ops():
            case Failure(_):
                return False
            case Success(ops):
                return (await ops.head_object(bucket, key)).is_success()

    async def put_redirect(
        self, bucket: str, key: str, location: str
    ) -> Result[object, ProviderError]:
        """
        Write an empty public object that S3 website hosting serves as a redirect.

        Args:
            bucket: Bucket configured for static website hosting
            key: Object key that will redirect
            location: Redirect target (``WebsiteRedirectLocation``)

        Returns:
            Success(response) with the raw PutObject acknowledgment
            Failure(ProviderError) if the write failed
        """
        match self._ops():
            case Failure(error):
                return Failure(error)
            case Success(ops):
                return await ops.put_object(
                    bucket,
                    key,
                    b"",
                    ACL=PUBLIC_READ,
                    CacheControl="no-cache",
                    WebsiteRedirectLocation=location,
                )

    def get_public_url(self, bucket: str, key: str) -> str:
        return f"https://s3-{self.region}.amazonaws.com/{bucket}/{encode_key(key)}"


__all__ = ["S3StorageClient"]
