"""snackager: object storage and descriptor cache for Snack package bundles."""

from __future__ import annotations

from .cache import GitSnackObj, cache_obj, get_cached_obj, remove_from_cache
from .config import StorageConfig, load_storage_config
from .errors import CacheWriteError, ConfigurationError, SnackagerError, StorageError
from .redirect import add_s3_redirect
from .storage import StorageContext, create_storage_context
from .upload import upload_file

__all__ = [
    "StorageConfig",
    "load_storage_config",
    "StorageContext",
    "create_storage_context",
    "upload_file",
    "add_s3_redirect",
    "GitSnackObj",
    "get_cached_obj",
    "cache_obj",
    "remove_from_cache",
    "SnackagerError",
    "ConfigurationError",
    "StorageError",
    "CacheWriteError",
]
