# tests/test_config.py
"""Tests for backend selection and storage configuration loading."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from snackager.backend import select_backend
from snackager.config import StorageConfig, load_storage_config, validate_storage_config
from snackager.errors import ConfigurationError
from tests.helpers import expect_failure, expect_success

S3_ENV = {
    "AWS_ACCESS_KEY_ID": "AKIATEST",
    "AWS_SECRET_ACCESS_KEY": "secret",
    "S3_BUCKET": "snack-artifacts",
    "IMPORTS_S3_BUCKET": "snack-imports",
    "S3_REGION": "us-west-1",
}

GCS_ENV = {
    "GCS_PROJECT_ID": "snack-test",
    "GCS_BUCKET": "snack-artifacts-gcs",
    "GCS_IMPORTS_BUCKET": "snack-imports-gcs",
}


def test_select_backend_gcs_project_id() -> None:
    assert select_backend({"GCS_PROJECT_ID": "snack-test"}) == "gcs"


def test_select_backend_use_gcs_flag() -> None:
    assert select_backend({"USE_GCS": "1"}) == "gcs"


def test_select_backend_defaults_to_s3() -> None:
    assert select_backend({}) == "s3"


def test_select_backend_ignores_other_variables() -> None:
    """S3 variables do not matter once a GCS signal is present, and vice versa."""
    assert select_backend({**S3_ENV, "GCS_PROJECT_ID": "p"}) == "gcs"
    assert select_backend({**S3_ENV, "GCS_BUCKET": "b", "GCS_IMPORTS_BUCKET": "i"}) == "s3"


def test_select_backend_empty_signal_is_absent() -> None:
    assert select_backend({"GCS_PROJECT_ID": "", "USE_GCS": ""}) == "s3"


def test_load_s3_config() -> None:
    config = load_storage_config(S3_ENV)

    assert config.storage_backend == "s3"
    assert config.aws is not None and config.aws.access_key == "AKIATEST"
    assert config.s3 is not None and config.s3.region == "us-west-1"
    assert config.s3.endpoint_url is None
    assert config.gcs is None
    assert config.artifacts_bucket == "snack-artifacts"
    assert config.imports_bucket == "snack-imports"


def test_load_s3_config_with_endpoint() -> None:
    config = load_storage_config({**S3_ENV, "AWS_ENDPOINT_URL": "http://minio:9000"})
    assert config.s3 is not None
    assert config.s3.endpoint_url == "http://minio:9000"


def test_load_gcs_config() -> None:
    config = load_storage_config(GCS_ENV)

    assert config.storage_backend == "gcs"
    assert config.gcs is not None and config.gcs.project_id == "snack-test"
    assert config.aws is None and config.s3 is None
    assert config.artifacts_bucket == "snack-artifacts-gcs"
    assert config.imports_bucket == "snack-imports-gcs"


@pytest.mark.parametrize("missing", sorted(S3_ENV))
def test_load_s3_config_missing_variable(missing: str) -> None:
    env = {k: v for k, v in S3_ENV.items() if k != missing}
    with pytest.raises(ConfigurationError, match=missing):
        load_storage_config(env)


def test_load_gcs_config_missing_bucket() -> None:
    env = {k: v for k, v in GCS_ENV.items() if k != "GCS_IMPORTS_BUCKET"}
    with pytest.raises(ConfigurationError, match="GCS_IMPORTS_BUCKET"):
        load_storage_config(env)


def test_use_gcs_flag_requires_project_id() -> None:
    with pytest.raises(ConfigurationError, match="GCS_PROJECT_ID"):
        load_storage_config({"USE_GCS": "true", "GCS_BUCKET": "b", "GCS_IMPORTS_BUCKET": "i"})


def test_load_reads_os_environ(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("GCS_PROJECT_ID", "USE_GCS"):
        monkeypatch.delenv(name, raising=False)
    for name, value in S3_ENV.items():
        monkeypatch.setenv(name, value)

    assert load_storage_config().storage_backend == "s3"


def test_validate_storage_config_requires_backend_section() -> None:
    error = expect_failure(validate_storage_config(storage_backend="gcs"))
    assert isinstance(error, ValidationError)
    assert "gcs" in str(error)


def test_validate_storage_config_success() -> None:
    config = expect_success(
        validate_storage_config(
            storage_backend="gcs",
            gcs={"project_id": "p", "bucket": "a", "imports_bucket": "i"},
        )
    )
    assert isinstance(config, StorageConfig)


def test_storage_config_is_frozen() -> None:
    config = load_storage_config(GCS_ENV)
    with pytest.raises(ValidationError):
        config.storage_backend = "s3"  # type: ignore[misc]
