# tests/conftest.py
"""Shared fixtures for the snackager test-suite.

Storage fixtures run the real snackager clients against the in-memory provider
fakes in ``tests.helpers.fakes``; no test touches the network.
"""

from __future__ import annotations

import signal
from types import FrameType
from typing import AsyncGenerator, Generator

import pytest

from snackager.config import StorageConfig
from snackager.storage import StorageContext, create_storage_context
from tests.helpers import FakeGCSClient, FakeS3Session

DEFAULT_TEST_TIMEOUT_SECONDS = 10.0

ARTIFACTS_BUCKET = "snack-artifacts"
IMPORTS_BUCKET = "snack-imports"


@pytest.fixture(autouse=True)
def per_test_timeout(request: pytest.FixtureRequest) -> Generator[None, None, None]:
    """
    Fail a test that hangs, e.g. one that accidentally reached a real endpoint.

    ``@pytest.mark.timeout(seconds)`` overrides the default for a single test.
    """
    if not hasattr(signal, "setitimer"):
        yield
        return

    marker = request.node.get_closest_marker("timeout")
    seconds = float(marker.args[0]) if marker and marker.args else DEFAULT_TEST_TIMEOUT_SECONDS

    def _expire(signum: int, frame: FrameType | None) -> None:
        pytest.fail(f"{request.node.name} still running after {seconds:g}s")

    previous = signal.signal(signal.SIGALRM, _expire)
    signal.setitimer(signal.ITIMER_REAL, seconds)
    try:
        yield
    finally:
        signal.setitimer(signal.ITIMER_REAL, 0)
        signal.signal(signal.SIGALRM, previous)


# ---------------------------------------------------------------------------
# Storage
# ---------------------------------------------------------------------------


@pytest.fixture
def s3_config() -> StorageConfig:
    return StorageConfig.model_validate(
        {
            "storage_backend": "s3",
            "aws": {"access_key": "AKIATEST", "secret_key": "secret"},
            "s3": {
                "bucket": ARTIFACTS_BUCKET,
                "imports_bucket": IMPORTS_BUCKET,
                "region": "us-west-1",
            },
        }
    )


@pytest.fixture
def gcs_config() -> StorageConfig:
    return StorageConfig.model_validate(
        {
            "storage_backend": "gcs",
            "gcs": {
                "project_id": "snack-test",
                "bucket": ARTIFACTS_BUCKET,
                "imports_bucket": IMPORTS_BUCKET,
            },
        }
    )


@pytest.fixture
def fake_s3_session() -> FakeS3Session:
    return FakeS3Session()


@pytest.fixture
def fake_gcs_client() -> FakeGCSClient:
    return FakeGCSClient()


@pytest.fixture
async def s3_storage(
    s3_config: StorageConfig, fake_s3_session: FakeS3Session
) -> AsyncGenerator[StorageContext, None]:
    """Opened S3-backed storage context over the fake session."""
    async with create_storage_context(s3_config, s3_session=fake_s3_session) as storage:
        yield storage


@pytest.fixture
async def gcs_storage(
    gcs_config: StorageConfig, fake_gcs_client: FakeGCSClient
) -> AsyncGenerator[StorageContext, None]:
    """Opened GCS-backed storage context over the fake client."""
    async with create_storage_context(gcs_config, gcs_client=fake_gcs_client) as storage:
        yield storage


@pytest.fixture(params=["s3", "gcs"])
async def any_storage(
    request: pytest.FixtureRequest,
    s3_config: StorageConfig,
    gcs_config: StorageConfig,
    fake_s3_session: FakeS3Session,
    fake_gcs_client: FakeGCSClient,
) -> AsyncGenerator[StorageContext, None]:
    """Storage context for each backend in turn."""
    if request.param == "s3":
        context = create_storage_context(s3_config, s3_session=fake_s3_session)
    else:
        context = create_storage_context(gcs_config, gcs_client=fake_gcs_client)
    async with context as storage:
        yield storage
