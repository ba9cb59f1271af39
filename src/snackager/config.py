"""
Storage configuration models and the environment loader that produces them.

The loader resolves the backend once via :func:`snackager.backend.select_backend`
and then requires every variable the active backend needs. A missing variable is
a :class:`~snackager.errors.ConfigurationError` at startup, never a deferred
runtime failure.
"""

from __future__ import annotations

import os
from typing import Mapping

from pydantic import BaseModel, ConfigDict, ValidationError, model_validator

from snackager.backend import StorageBackend, select_backend
from snackager.errors import ConfigurationError
from snackager.result import Failure, Result, Success


class AwsCredentials(BaseModel):
    """Static AWS credentials for the S3 backend."""

    access_key: str
    secret_key: str

    model_config = ConfigDict(frozen=True, extra="forbid")


class S3Settings(BaseModel):
    """Buckets and region for the S3 backend."""

    bucket: str
    imports_bucket: str
    region: str
    endpoint_url: str | None = None

    model_config = ConfigDict(frozen=True, extra="forbid")


class GCSSettings(BaseModel):
    """Project and buckets for the GCS backend."""

    project_id: str
    bucket: str
    imports_bucket: str

    model_config = ConfigDict(frozen=True, extra="forbid")


class StorageConfig(BaseModel):
    """Validated storage configuration for exactly one backend."""

    storage_backend: StorageBackend
    aws: AwsCredentials | None = None
    s3: S3Settings | None = None
    gcs: GCSSettings | None = None

    model_config = ConfigDict(frozen=True, extra="forbid")

    @model_validator(mode="after")
    def _validate(self) -> StorageConfig:
        """Ensure the sections required by the active backend are present."""
        if self.storage_backend == "s3" and (self.aws is None or self.s3 is None):
            raise ValueError("`aws` and `s3` sections are required for the s3 backend.")
        if self.storage_backend == "gcs" and self.gcs is None:
            raise ValueError("`gcs` section is required for the gcs backend.")
        return self

    @property
    def artifacts_bucket(self) -> str:
        """Bucket holding bundled build output."""
        if self.storage_backend == "gcs":
            assert self.gcs is not None
            return self.gcs.bucket
        assert self.s3 is not None
        return self.s3.bucket

    @property
    def imports_bucket(self) -> str:
        """Bucket holding cached descriptor objects."""
        if self.storage_backend == "gcs":
            assert self.gcs is not None
            return self.gcs.imports_bucket
        assert self.s3 is not None
        return self.s3.imports_bucket


def validate_storage_config(**data: object) -> Result[StorageConfig, ValidationError]:
    """Construct a StorageConfig and surface validation issues as a Result."""
    try:
        return Success(StorageConfig.model_validate(data))
    except ValidationError as exc:
        return Failure(exc)


def _env(environ: Mapping[str, str], name: str) -> str:
    value = environ.get(name)
    if not value:
        raise ConfigurationError(f"environment variable {name} isn't specified")
    return value


def load_storage_config(environ: Mapping[str, str] | None = None) -> StorageConfig:
    """
    Build the storage configuration from environment variables.

    Args:
        environ: Variable mapping to read (defaults to ``os.environ``)

    Returns:
        Validated StorageConfig for the selected backend

    Raises:
        ConfigurationError: If a variable required by the backend is missing
    """
    env = os.environ if environ is None else environ
    backend = select_backend(env)

    data: dict[str, object] = {"storage_backend": backend}
    if backend == "gcs":
        data["gcs"] = {
            "project_id": _env(env, "GCS_PROJECT_ID"),
            "bucket": _env(env, "GCS_BUCKET"),
            "imports_bucket": _env(env, "GCS_IMPORTS_BUCKET"),
        }
    else:
        data["aws"] = {
            "access_key": _env(env, "AWS_ACCESS_KEY_ID"),
            "secret_key": _env(env, "AWS_SECRET_ACCESS_KEY"),
        }
        data["s3"] = {
            "bucket": _env(env, "S3_BUCKET"),
            "imports_bucket": _env(env, "IMPORTS_S3_BUCKET"),
            "region": _env(env, "S3_REGION"),
            "endpoint_url": env.get("AWS_ENDPOINT_URL") or None,
        }

    match validate_storage_config(**data):
        case Success(config):
            return config
        case Failure(error):
            raise ConfigurationError(f"Invalid storage configuration: {error}") from error


__all__ = [
    "AwsCredentials",
    "S3Settings",
    "GCSSettings",
    "StorageConfig",
    "validate_storage_config",
    "load_storage_config",
]
