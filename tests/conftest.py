"""Shared test fixtures."""

import pytest
from pathlib import Path
from typing import Any

from syncstore.storage.memory import InMemoryStorage
from syncstore.storage.file import FileStorage


class RecordingStorage(InMemoryStorage):
    """In-memory backend that records every call as (operation, key)."""

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        super().__init__(initial)
        self.calls: list[tuple[str, str]] = []

    async def get(self, key: str) -> Any | None:
        self.calls.append(("get", key))
        return await super().get(key)

    async def set(self, key: str, value: Any, source: object | None = None) -> None:
        self.calls.append(("set", key))
        await super().set(key, value, source)

    async def remove(self, key: str, source: object | None = None) -> None:
        self.calls.append(("remove", key))
        await super().remove(key, source)

    def writes(self) -> list[tuple[str, str]]:
        """Calls that changed backend state."""
        return [call for call in self.calls if call[0] in ("set", "remove")]


@pytest.fixture
def memory_storage() -> InMemoryStorage:
    """In-memory storage for testing."""
    return InMemoryStorage()


@pytest.fixture
def file_storage(tmp_path: Path) -> FileStorage:
    """File-based storage for testing."""
    return FileStorage(tmp_path / "storage")


@pytest.fixture
def recording_storage() -> RecordingStorage:
    """Empty in-memory storage that records calls."""
    return RecordingStorage()


@pytest.fixture
def settings_storage() -> RecordingStorage:
    """Storage holding a 'settings' value written by versions 0 and 1."""
    return RecordingStorage(
        {
            "settings:0": {"size": 10},
            "settings:1": {"size": 10, "scale": 1},
        }
    )


@pytest.fixture
def settings_migrations() -> dict:
    """Migrations bringing 'settings' values from versions 0 and 1 to 2."""
    return {
        0: lambda v: {**v, "scale": 1},
        1: lambda v: {**v, "unit": "px"},
    }


@pytest.fixture
def make_recording_storage():
    """Factory for recording storage pre-populated with the given data."""

    def factory(initial: dict[str, Any] | None = None) -> RecordingStorage:
        return RecordingStorage(initial)

    return factory
