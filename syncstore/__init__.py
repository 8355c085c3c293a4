"""Cached key/value stores with schema versioning and forward migration."""

from .core import (
    MigrationError,
    MigrationFailedError,
    ReadyState,
    StorageBackend,
    StorageBackendError,
    StorageChange,
    StoreSettings,
    SyncStoreError,
)
from .storage import FileStorage, InMemoryStorage
from .sync_store import SyncStore
from .versioning import VersionedSyncStore, version_key

__all__ = [
    "SyncStore",
    "VersionedSyncStore",
    "version_key",
    "StorageBackend",
    "StorageChange",
    "InMemoryStorage",
    "FileStorage",
    "ReadyState",
    "StoreSettings",
    "SyncStoreError",
    "StorageBackendError",
    "MigrationError",
    "MigrationFailedError",
]
