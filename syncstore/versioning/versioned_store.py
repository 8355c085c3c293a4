"""Versioned store: a SyncStore that migrates values written by older versions."""

import inspect
import logging
from types import MappingProxyType
from typing import Any, Callable, Generic, Mapping, TypeVar

from ..core.config import StoreSettings
from ..core.errors import MigrationFailedError
from ..core.protocols import StorageBackend, Unsubscribe
from ..core.types import Migration, MigrationStrategy, ReadyState
from ..sync_store import SyncStore, ValueListener
from .keys import version_key

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _check_version(version: Any, what: str) -> int:
    if isinstance(version, bool) or not isinstance(version, int):
        raise TypeError(f"{what} must be an int, got {type(version).__name__}")
    if version < 0:
        raise ValueError(f"{what} must be non-negative, got {version}")
    return version


class VersionedSyncStore(Generic[T]):
    """
    SyncStore that also migrates storage values from older versions.

    The value lives under base_key + separator + version. Each entry in
    migrations maps an older version number to a function that converts
    the value stored under that version's key into the current shape.
    ready() drains every old key it finds before loading the value:

        1. read base_key + separator + old_version
        2. skip it if nothing is stored
        3. convert it with the migration function
        4. write the result under the current key
        5. remove the old key

    The write happens before the removal, so an interruption can leave a
    value duplicated but never lost. Old versions are processed in the
    mapping's insertion order and each one writes the current key, so when
    several old keys exist the last one processed wins.

    Migrations are applied per old version, not as one transaction: if a
    migration fails, the versions already drained stay drained and the
    rest are left for the next ready() call.

    Usage:
        store = VersionedSyncStore(
            "settings",
            {"size": 10, "scale": 1, "unit": "px"},
            backend,
            version=2,
            separator=":",
            migrations={
                0: lambda v: {**v, "scale": 1, "unit": "px"},
                1: lambda v: {**v, "unit": "px"},
            },
        )
        await store.ready()
    """

    def __init__(
        self,
        base_key: str,
        default_value: T,
        backend: StorageBackend,
        sync_from_external: bool | None = None,
        version: int = 0,
        separator: str | None = None,
        migrations: MigrationStrategy[T] | None = None,
        settings: StoreSettings | None = None,
    ) -> None:
        """
        Initialize the store. No backend IO happens here.

        Args:
            base_key: Version-independent item key
            default_value: Value used while nothing is stored
            backend: Storage backend, usually shared with other stores
            sync_from_external: Whether the cache follows external writes
                (defaults to settings.sync_from_external)
            version: Current version number
            separator: Separator between key and version
                (defaults to settings.separator)
            migrations: Old version number -> migration function
            settings: Defaults for omitted options

        Raises:
            TypeError: If a version is not an int
            ValueError: If base_key or separator is empty, a version is
                negative, or a migration is registered for the current version
        """
        settings = settings or StoreSettings()
        if not isinstance(base_key, str) or not base_key:
            raise ValueError("base_key must be a non-empty string")
        if separator is None:
            separator = settings.separator
        if not separator:
            raise ValueError("separator must be a non-empty string")
        if sync_from_external is None:
            sync_from_external = settings.sync_from_external

        self._base_key = base_key
        self._version = _check_version(version, "version")
        self._separator = separator

        checked: dict[int, Migration[T]] = {}
        for old_version, migrate in (migrations or {}).items():
            _check_version(old_version, "migration version")
            if old_version == version:
                # Would read, rewrite and then delete the live key
                raise ValueError(
                    f"migration registered for current version {version}"
                )
            if not callable(migrate):
                raise TypeError(f"migration for version {old_version} is not callable")
            checked[old_version] = migrate
        self._migrations: Mapping[int, Migration[T]] = MappingProxyType(checked)

        self._store: SyncStore[T] = SyncStore(
            version_key(base_key, separator, version),
            default_value,
            backend,
            sync_from_external,
        )

    @property
    def base_key(self) -> str:
        return self._base_key

    @property
    def key(self) -> str:
        """The version-qualified key the value is stored under."""
        return self._store.key

    @property
    def version(self) -> int:
        return self._version

    @property
    def separator(self) -> str:
        return self._separator

    @property
    def migrations(self) -> Mapping[int, Migration[T]]:
        """Read-only view of the registered migrations."""
        return self._migrations

    @property
    def backend(self) -> StorageBackend:
        return self._store.backend

    @property
    def state(self) -> ReadyState:
        return self._store.state

    @property
    def is_ready(self) -> bool:
        return self._store.is_ready

    @property
    def value(self) -> T:
        return self._store.value

    def get(self) -> T:
        """Get the cached value."""
        return self._store.get()

    async def set(self, value: T) -> None:
        """Write the value under the current key and update the cache."""
        await self._store.set(value)

    async def update(self, updater: Callable[[T], T]) -> None:
        """Set the value to updater(current value)."""
        await self._store.update(updater)

    def subscribe(self, listener: ValueListener[T]) -> Unsubscribe:
        """Register a listener called with the new value on every change."""
        return self._store.subscribe(listener)

    def close(self) -> None:
        """Stop following external backend writes."""
        self._store.close()

    def old_key(self, old_version: int) -> str:
        """Get the backend key used by an older version."""
        return version_key(self._base_key, self._separator, old_version)

    async def ready(self) -> None:
        """
        Migrate old versions, then load the current value.

        Runs once: later calls return immediately, and concurrent calls wait
        for the same run. If migration or loading fails the store stays
        unready, the error propagates, and the next call retries.

        Raises:
            MigrationFailedError: If a migration function fails
            StorageBackendError: If a backend call fails
        """
        await self._store.ready(before_load=self.migrate_backend)

    async def migrate_backend(self) -> list[int]:
        """
        Move values stored under old version keys to the current key.

        Returns:
            The old versions that were found and migrated, in order

        Raises:
            MigrationFailedError: If a migration function fails; later
                versions are left untouched
        """
        migrated: list[int] = []
        for old_version, migrate in self._migrations.items():
            old_key = self.old_key(old_version)
            old_value = await self.backend.get(old_key)
            if old_value is None:
                logger.debug("Nothing stored under %s, skipping", old_key)
                continue

            try:
                new_value = migrate(old_value)
                if inspect.isawaitable(new_value):
                    new_value = await new_value
            except Exception as e:
                raise MigrationFailedError(
                    self._base_key, old_version, self._version, str(e)
                ) from e

            await self._store.set(new_value)
            await self.backend.remove(old_key)
            migrated.append(old_version)
            logger.info("Migrated %s to %s", old_key, self.key)
        return migrated
