# tests/test_upload.py
"""Tests for artifact uploads."""

from __future__ import annotations

import pytest

from snackager.storage import StorageContext
from snackager.upload import upload_file
from tests.helpers import FakeGCSClient, FakeS3Session


@pytest.mark.asyncio
async def test_upload_goes_to_artifacts_bucket(any_storage: StorageContext) -> None:
    result = await upload_file(any_storage, "lodash@4.17.21/bundle.js", b"bundle")

    assert result is not None
    assert result.bucket == any_storage.artifacts_bucket
    assert result.key == "lodash@4.17.21/bundle.js"
    assert result.location == any_storage.client.get_public_url(
        any_storage.artifacts_bucket, "lodash@4.17.21/bundle.js"
    )
    assert (
        await any_storage.client.get_file(any_storage.artifacts_bucket, "lodash@4.17.21/bundle.js")
        == b"bundle"
    )


@pytest.mark.asyncio
async def test_upload_is_public_and_long_cached_on_s3(
    s3_storage: StorageContext, fake_s3_session: FakeS3Session
) -> None:
    await upload_file(s3_storage, "bundle.js", b"bundle")

    params = fake_s3_session.s3.objects[("snack-artifacts", "bundle.js")].params
    assert params == {"ACL": "public-read", "CacheControl": "public, max-age=31536000"}


@pytest.mark.asyncio
async def test_upload_is_public_on_gcs(
    gcs_storage: StorageContext, fake_gcs_client: FakeGCSClient
) -> None:
    await upload_file(gcs_storage, "bundle.js", b"bundle")

    stored = fake_gcs_client.blobs[("snack-artifacts", "bundle.js")]
    assert stored.public is True
    assert stored.content_type is None
    assert stored.cache_control == "public, max-age=31536000"


@pytest.mark.asyncio
async def test_upload_failure_is_passed_through(
    s3_storage: StorageContext, fake_s3_session: FakeS3Session
) -> None:
    fake_s3_session.s3.unreachable = True
    assert await upload_file(s3_storage, "bundle.js", b"bundle") is None
