"""
Durable cache of Snack descriptor objects in the imports bucket.

Entries are JSON5 text keyed by filename. Reads are forgiving: a missing entry,
a failed read and an entry that no longer parses all come back as ``None`` so
the caller recomputes and overwrites it. Writes are strict: a caller that asked
for something to be cached gets a :class:`~snackager.errors.CacheWriteError`
when it was not.
"""

from __future__ import annotations

import logging
from typing import TypeAlias

import json5

from .errors import CacheWriteError
from .storage.client import ONE_YEAR_CACHE_CONTROL, PUBLIC_READ, UploadOptions
from .storage.context import StorageContext


logger = logging.getLogger(__name__)

JsonValue: TypeAlias = str | int | float | bool | None | dict[str, "JsonValue"] | list["JsonValue"]
GitSnackObj: TypeAlias = dict[str, JsonValue]

CACHE_UPLOAD_OPTIONS = UploadOptions(acl=PUBLIC_READ, cache_control=ONE_YEAR_CACHE_CONTROL)


def serialize_snack_obj(snack_obj: GitSnackObj) -> bytes:
    """Encode a descriptor as UTF-8 JSON5 text."""
    try:
        return json5.dumps(snack_obj).encode("utf-8")
    except RecursionError as e:
        raise ValueError("descriptor is nested too deeply to encode") from e


def deserialize_snack_obj(data: bytes) -> GitSnackObj:
    """
    Decode a descriptor written by :func:`serialize_snack_obj`.

    Raises:
        ValueError: If the bytes are not UTF-8 JSON5 describing an object, or
            nest deeper than the parser can follow
    """
    try:
        parsed = json5.loads(data.decode("utf-8"))
    except RecursionError as e:
        raise ValueError("entry is nested too deeply to decode") from e
    if not isinstance(parsed, dict):
        raise ValueError(f"Expected a JSON5 object, got {type(parsed).__name__}")
    return parsed


async def get_cached_obj(storage: StorageContext, filename: str) -> GitSnackObj | None:
    """Return the cached descriptor, or ``None`` if it is missing or unreadable."""
    data = await storage.client.get_file(storage.imports_bucket, filename)
    if data is None:
        return None
    try:
        return deserialize_snack_obj(data)
    except ValueError as e:
        logger.debug(f"discarding unreadable cache entry {filename}: {e}")
        return None


async def cache_obj(storage: StorageContext, snack_obj: GitSnackObj, filename: str) -> None:
    """
    Write a descriptor to the imports bucket.

    Raises:
        CacheWriteError: If the descriptor could not be serialized, would not
            decode again, or could not be uploaded;
            the underlying error is chained as ``__cause__``
    """
    try:
        body = serialize_snack_obj(snack_obj)
        # never write an entry get_cached_obj could not read back
        deserialize_snack_obj(body)
        result = await storage.client.upload_file(
            storage.imports_bucket, filename, body, CACHE_UPLOAD_OPTIONS
        )
        if result is None:
            raise RuntimeError("Failed to upload file")
    except (TypeError, ValueError, RuntimeError) as e:
        logger.error(
            f"unable to upload file to storage: bucket={storage.imports_bucket} "
            f"filename={filename} error={e}"
        )
        raise CacheWriteError(filename, str(e)) from e


async def remove_from_cache(storage: StorageContext, filename: str) -> None:
    """Evict a descriptor. Advisory: failures are ignored."""
    await storage.client.delete_file(storage.imports_bucket, filename)


__all__ = [
    "GitSnackObj",
    "JsonValue",
    "serialize_snack_obj",
    "deserialize_snack_obj",
    "get_cached_obj",
    "cache_obj",
    "remove_from_cache",
]
