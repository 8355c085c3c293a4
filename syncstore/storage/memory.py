"""In-memory storage backend for testing and ephemeral use."""

import copy
from typing import Any

from .base import ChangeNotifier


class InMemoryStorage(ChangeNotifier):
    """In-memory storage backend.

    Values are deep-copied on the way in and out, so callers never share
    mutable state with the backend.
    """

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        super().__init__()
        self._data: dict[str, Any] = copy.deepcopy(initial) if initial else {}

    async def get(self, key: str) -> Any | None:
        """Load data by key. Returns None if not found."""
        return copy.deepcopy(self._data.get(key))

    async def set(self, key: str, value: Any, source: object | None = None) -> None:
        """Save data under a key."""
        self._data[key] = copy.deepcopy(value)
        self._notify(key, copy.deepcopy(value), source)

    async def remove(self, key: str, source: object | None = None) -> None:
        """Delete a key. Removing a missing key is a no-op."""
        if key in self._data:
            del self._data[key]
            self._notify(key, None, source)

    def list_keys(self, prefix: str = "") -> list[str]:
        """List all keys, optionally filtered by prefix."""
        if not prefix:
            return list(self._data.keys())
        return [k for k in self._data.keys() if k.startswith(prefix)]

    def clear(self) -> None:
        """Clear all data (useful for testing)."""
        self._data.clear()
