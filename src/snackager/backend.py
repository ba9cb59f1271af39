"""Storage backend selection from environment signals."""

from __future__ import annotations

from typing import Literal, Mapping, TypeAlias

StorageBackend: TypeAlias = Literal["s3", "gcs"]

# Either variable being non-empty switches the process to GCS.
GCS_SIGNALS: tuple[str, ...] = ("GCS_PROJECT_ID", "USE_GCS")


def select_backend(environ: Mapping[str, str]) -> StorageBackend:
    """Return ``"gcs"`` when a GCS signal is present, otherwise ``"s3"``."""
    if any(environ.get(name) for name in GCS_SIGNALS):
        return "gcs"
    return "s3"


__all__ = ["StorageBackend", "GCS_SIGNALS", "select_backend"]
