"""Exception hierarchy for stores and backends."""


class SyncStoreError(Exception):
    """Base exception for syncstore errors."""

    pass


class StorageBackendError(SyncStoreError):
    """Raised when a backend fails to read, write or remove a key."""

    def __init__(self, key: str, operation: str, message: str) -> None:
        self.key = key
        self.operation = operation
        super().__init__(f"Backend {operation} failed for key {key!r}: {message}")


class MigrationError(SyncStoreError):
    """Base exception for migration-related errors."""

    pass


class MigrationFailedError(MigrationError):
    """Raised when a migration function fails on a stored value."""

    def __init__(
        self,
        base_key: str,
        from_version: int,
        to_version: int,
        message: str,
    ) -> None:
        self.base_key = base_key
        self.from_version = from_version
        self.to_version = to_version
        super().__init__(
            f"Migration of {base_key!r} from version {from_version} "
            f"to version {to_version} failed: {message}"
        )
