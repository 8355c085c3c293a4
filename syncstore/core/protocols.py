"""Protocol definitions for pluggable components."""

from typing import Any, Callable, Protocol

from .types import StorageChange

ChangeListener = Callable[[StorageChange], None]
Unsubscribe = Callable[[], None]


class StorageBackend(Protocol):
    """Protocol for persistence - swappable implementations.

    A backend is shared by many stores, each of which only touches keys
    derived from its own base key.
    """

    async def get(self, key: str) -> Any | None:
        """Load data by key. Returns None if not found."""
        ...

    async def set(self, key: str, value: Any, source: object | None = None) -> None:
        """Save data under a key."""
        ...

    async def remove(self, key: str, source: object | None = None) -> None:
        """Delete a key. Removing a missing key is not an error."""
        ...

    def subscribe(self, listener: ChangeListener) -> Unsubscribe:
        """Register a listener for changes. Returns a callable that detaches it."""
        ...
