#!/usr/bin/env python3
"""
Demo script showing a versioned store migrating old values.

This script demonstrates:
1. Seeding a file backend with values written by versions 0 and 1
2. Opening the same value as version 2 with migrations registered
3. The old keys being drained into the current key

Settings come from SYNCSTORE_* environment variables or a .env file.

Run with: uv run python scripts/demo_migration.py --reset
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from syncstore.core.config import StoreSettings
from syncstore.storage.file import FileStorage
from syncstore.versioning.versioned_store import VersionedSyncStore


def add_scale(old: dict) -> dict:
    """Version 0 values predate the scale field."""
    return {**old, "scale": 1, "unit": "px"}


def add_unit(old: dict) -> dict:
    """Version 1 values predate the unit field."""
    return {**old, "unit": "px"}


async def run_demo(settings: StoreSettings, reset: bool) -> None:
    backend = FileStorage(settings.storage_path)
    if reset:
        backend.clear()

    sep = settings.separator
    await backend.set(f"settings{sep}0", {"size": 10})
    await backend.set(f"settings{sep}1", {"size": 12, "scale": 2})
    print(f"Seeded keys: {backend.list_keys('settings')}")

    store = VersionedSyncStore(
        "settings",
        {"size": 10, "scale": 1, "unit": "px"},
        backend,
        version=2,
        settings=settings,
        migrations={0: add_scale, 1: add_unit},
    )
    await store.ready()

    print(f"Keys after migration: {backend.list_keys('settings')}")
    print(f"Current value ({store.key}): {store.get()}")

    await store.update(lambda v: {**v, "size": v["size"] + 1})
    print(f"After update: {await backend.get(store.key)}")


def main():
    parser = argparse.ArgumentParser(
        description="Migrate a value from old versions with a file backend"
    )
    parser.add_argument(
        "--storage-path",
        type=str,
        default=None,
        help="Directory for the file backend (overrides SYNCSTORE_STORAGE_PATH)",
    )
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Clear the storage directory before seeding",
    )
    args = parser.parse_args()

    settings = StoreSettings.from_env()
    if args.storage_path:
        settings.storage_path = args.storage_path

    logging.basicConfig(
        level=settings.log_level,
        format="%(levelname)s | %(name)s | %(message)s",
    )

    asyncio.run(run_demo(settings, args.reset))


if __name__ == "__main__":
    main()
