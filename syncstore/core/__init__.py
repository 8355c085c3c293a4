"""Core types, protocols and errors."""

from .types import (
    Migration,
    MigrationStrategy,
    ReadyState,
    StorageChange,
)
from .protocols import (
    ChangeListener,
    StorageBackend,
    Unsubscribe,
)
from .errors import (
    SyncStoreError,
    StorageBackendError,
    MigrationError,
    MigrationFailedError,
)
from .config import StoreSettings

__all__ = [
    "Migration",
    "MigrationStrategy",
    "ReadyState",
    "StorageChange",
    "ChangeListener",
    "StorageBackend",
    "Unsubscribe",
    "SyncStoreError",
    "StorageBackendError",
    "MigrationError",
    "MigrationFailedError",
    "StoreSettings",
]
