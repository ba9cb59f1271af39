# src/snackager/storage/__main__.py
"""CLI tool for inspecting snackager storage.

The backend and buckets come from the same environment variables the service
uses (see ``snackager.config.load_storage_config``).

Usage:
    python -m snackager.storage backend
    python -m snackager.storage get <artifacts|imports> <key>
    python -m snackager.storage exists <artifacts|imports> <key>
    python -m snackager.storage url <artifacts|imports> <key>
    python -m snackager.storage delete <artifacts|imports> <key>
    python -m snackager.storage cache-get <filename>
    python -m snackager.storage cache-evict <filename>
    python -m snackager.storage redirect <key> <destination>

Examples:
    # Which backend would the service pick with the current environment?
    python -m snackager.storage backend

    # Dump a cached descriptor
    python -m snackager.storage cache-get lodash@4.17.21.json

    # Point a key at a bundle (S3 only)
    python -m snackager.storage redirect lodash/latest lodash@4.17.21/bundle.js

Exit codes:
    0: Success
    1: Object absent, probe false, or operation failed
    2: Configuration error
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import Literal, NoReturn

from ..cache import get_cached_obj, remove_from_cache
from ..config import load_storage_config
from ..errors import ConfigurationError
from ..logging_config import configure_logging
from ..redirect import add_s3_redirect
from .context import StorageContext, create_storage_context

BucketKind = Literal["artifacts", "imports"]


def resolve_bucket(storage: StorageContext, kind: BucketKind) -> str:
    """Map a logical bucket name onto the active backend's bucket."""
    return storage.artifacts_bucket if kind == "artifacts" else storage.imports_bucket


async def cmd_backend(storage: StorageContext) -> int:
    """Print the active backend and its bucket pair as JSON."""
    print(
        json.dumps(
            {
                "backend": storage.backend,
                "artifacts_bucket": storage.artifacts_bucket,
                "imports_bucket": storage.imports_bucket,
            },
            indent=2,
        )
    )
    return 0


async def cmd_get(storage: StorageContext, kind: BucketKind, key: str) -> int:
    """Write the object's bytes to stdout."""
    data = await storage.client.get_file(resolve_bucket(storage, kind), key)
    if data is None:
        print(f"✗ Not found: {key}", file=sys.stderr)
        return 1
    sys.stdout.buffer.write(data)
    sys.stdout.flush()
    return 0


async def cmd_exists(storage: StorageContext, kind: BucketKind, key: str) -> int:
    bucket = resolve_bucket(storage, kind)
    if await storage.client.file_exists(bucket, key):
        print(f"✓ {bucket}/{key} exists")
        return 0
    print(f"✗ {bucket}/{key} does not exist")
    return 1


async def cmd_url(storage: StorageContext, kind: BucketKind, key: str) -> int:
    print(storage.client.get_public_url(resolve_bucket(storage, kind), key))
    return 0


async def cmd_delete(storage: StorageContext, kind: BucketKind, key: str) -> int:
    bucket = resolve_bucket(storage, kind)
    await storage.client.delete_file(bucket, key)
    print(f"✓ Delete requested for {bucket}/{key}")
    return 0


async def cmd_cache_get(storage: StorageContext, filename: str) -> int:
    """Print a cached descriptor as JSON, or report a cache miss."""
    snack_obj = await get_cached_obj(storage, filename)
    if snack_obj is None:
        print(f"✗ Cache miss: {filename}", file=sys.stderr)
        return 1
    print(json.dumps(snack_obj, indent=2))
    return 0


async def cmd_cache_evict(storage: StorageContext, filename: str) -> int:
    await remove_from_cache(storage, filename)
    print(f"✓ Evicted {filename}")
    return 0


async def cmd_redirect(storage: StorageContext, key: str, destination: str) -> int:
    """Create an S3 website redirect from ``key`` to ``/destination``."""
    response = await add_s3_redirect(storage, key, destination)
    if response is None:
        print(f"✗ Unable to add redirect {key} -> /{destination}", file=sys.stderr)
        return 1
    print(f"✓ Redirect {key} -> /{destination}")
    return 0


async def run_command(storage: StorageContext, args: argparse.Namespace) -> int:
    """Open the storage client and dispatch one parsed command."""
    async with storage:
        match args.command:
            case "backend":
                return await cmd_backend(storage)
            case "get":
                return await cmd_get(storage, args.bucket_kind, args.key)
            case "exists":
                return await cmd_exists(storage, args.bucket_kind, args.key)
            case "url":
                return await cmd_url(storage, args.bucket_kind, args.key)
            case "delete":
                return await cmd_delete(storage, args.bucket_kind, args.key)
            case "cache-get":
                return await cmd_cache_get(storage, args.filename)
            case "cache-evict":
                return await cmd_cache_evict(storage, args.filename)
            case "redirect":
                return await cmd_redirect(storage, args.key, args.destination)
            case _:
                raise AssertionError(f"Unhandled command: {args.command!r}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="snackager storage CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("backend", help="Show the selected backend and buckets")

    for name, help_text in (
        ("get", "Write an object's content to stdout"),
        ("exists", "Check whether an object exists"),
        ("url", "Print an object's public URL"),
        ("delete", "Delete an object (best effort)"),
    ):
        object_parser = subparsers.add_parser(name, help=help_text)
        object_parser.add_argument(
            "bucket_kind", choices=["artifacts", "imports"], help="Logical bucket"
        )
        object_parser.add_argument("key", help="Object key")

    cache_get_parser = subparsers.add_parser("cache-get", help="Print a cached descriptor")
    cache_get_parser.add_argument("filename", help="Cache entry filename")

    cache_evict_parser = subparsers.add_parser("cache-evict", help="Evict a cached descriptor")
    cache_evict_parser.add_argument("filename", help="Cache entry filename")

    redirect_parser = subparsers.add_parser(
        "redirect", help="Add an S3 website redirect in the artifacts bucket"
    )
    redirect_parser.add_argument("key", help="Key that will redirect")
    redirect_parser.add_argument("destination", help="Target path (without leading /)")

    return parser


def main(argv: list[str] | None = None) -> NoReturn:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)
    configure_logging("DEBUG" if args.verbose else "WARNING")

    try:
        storage = create_storage_context(load_storage_config())
    except ConfigurationError as e:
        print(f"✗ Configuration error: {e}", file=sys.stderr)
        sys.exit(2)

    sys.exit(asyncio.run(run_command(storage, args)))


if __name__ == "__main__":
    main()
