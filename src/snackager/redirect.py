"""S3 website redirects for the artifacts bucket."""

from __future__ import annotations

import logging

from .result import Failure, Success
from .storage.provider_errors import describe
from .storage.context import StorageContext
from .storage.s3_client import S3StorageClient


logger = logging.getLogger(__name__)


async def add_s3_redirect(
    storage: StorageContext, key: str, destination: str
) -> object | None:
    """
    Make ``key`` in the artifacts bucket redirect to ``/destination``.

    Only the S3 backend supports redirect objects. On any other backend this
    logs a warning and returns ``None`` without touching storage.

    Returns:
        The raw PutObject acknowledgment, or ``None`` if unsupported or failed
    """
    client = storage.client
    if not isinstance(client, S3StorageClient):
        logger.warning(
            f"S3 redirect not supported with current storage backend: "
            f"backend={storage.backend} key={key} destination={destination}"
        )
        return None

    match await client.put_redirect(storage.artifacts_bucket, key, f"/{destination}"):
        case Success(response):
            return response
        case Failure(error):
            logger.error(
                f"unable to add s3 redirect: bucket={storage.artifacts_bucket} "
                f"key={key} destination={destination} error={describe(error)}"
            )
            return None
