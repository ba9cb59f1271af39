# tests/helpers/__init__.py
"""Shared test utilities: Result unwrapping and in-memory provider fakes."""

from __future__ import annotations

from tests.helpers.fakes import (
    FakeGCSClient,
    FakeS3Client,
    FakeS3Session,
    client_error,
)
from tests.helpers.result_utils import expect_failure, expect_success

__all__ = [
    # Result unwrapping
    "expect_success",
    "expect_failure",
    # Provider fakes
    "FakeS3Client",
    "FakeS3Session",
    "FakeGCSClient",
    "client_error",
]
