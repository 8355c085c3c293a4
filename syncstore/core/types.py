"""Core types shared by stores and backends."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Mapping, TypeVar, Union

T = TypeVar("T")

# A migration takes the unvalidated value stored under an old version and
# returns the value in the current shape, directly or as an awaitable.
Migration = Callable[[Any], Union[T, Awaitable[T]]]
MigrationStrategy = Mapping[int, Migration[T]]


class ReadyState(Enum):
    """Lifecycle of a store."""

    UNINITIALIZED = "uninitialized"
    MIGRATING = "migrating"
    LOADING = "loading"
    READY = "ready"


@dataclass(frozen=True)
class StorageChange:
    """A write or removal observed on a backend."""

    key: str
    value: Any | None  # None when the key was removed
    source: object | None = None  # writer that caused the change

    @property
    def removed(self) -> bool:
        """Check if this change removed the key."""
        return self.value is None
