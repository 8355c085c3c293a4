"""File-based JSON storage backend."""

import asyncio
import json
import logging
import tempfile
from pathlib import Path
from typing import Any
from urllib.parse import quote, unquote

from ..core.errors import StorageBackendError
from .base import ChangeNotifier

logger = logging.getLogger(__name__)


class FileStorage(ChangeNotifier):
    """File-based JSON storage for persistence.

    One file per key. Keys are percent-encoded into file names, so every
    key maps to its own file and list_keys() returns the original keys.
    Writes go to a uniquely named temporary file that is then renamed over
    the target, so concurrent writes to one key never share a temp file.
    Blocking file IO runs in a worker thread so the event loop is never
    blocked.
    """

    def __init__(self, base_path: Path | str) -> None:
        super().__init__()
        self._base_path = Path(base_path)
        self._base_path.mkdir(parents=True, exist_ok=True)

    @property
    def base_path(self) -> Path:
        return self._base_path

    def _key_to_path(self, key: str) -> Path:
        """Convert a key to a file path."""
        return self._base_path / f"{quote(key, safe='')}.json"

    def _read(self, key: str) -> Any | None:
        path = self._key_to_path(key)
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except FileNotFoundError:
            return None
        except (json.JSONDecodeError, OSError) as e:
            raise StorageBackendError(key, "get", str(e)) from e

    def _write(self, key: str, value: Any) -> None:
        path = self._key_to_path(key)
        try:
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self._base_path,
                prefix=f"{path.name}.",
                suffix=".tmp",
                delete=False,
            ) as f:
                tmp_path = Path(f.name)
                try:
                    json.dump(value, f, indent=2)
                except (TypeError, ValueError):
                    f.close()
                    tmp_path.unlink(missing_ok=True)
                    raise
            tmp_path.replace(path)
        except (TypeError, ValueError, OSError) as e:
            raise StorageBackendError(key, "set", str(e)) from e

    def _unlink(self, key: str) -> bool:
        path = self._key_to_path(key)
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            raise StorageBackendError(key, "remove", str(e)) from e
        return True

    async def get(self, key: str) -> Any | None:
        """Load data by key. Returns None if not found."""
        return await asyncio.to_thread(self._read, key)

    async def set(self, key: str, value: Any, source: object | None = None) -> None:
        """Save data under a key."""
        await asyncio.to_thread(self._write, key, value)
        logger.debug("Wrote %s to %s", key, self._base_path)
        self._notify(key, value, source)

    async def remove(self, key: str, source: object | None = None) -> None:
        """Delete a key. Removing a missing key is a no-op."""
        if await asyncio.to_thread(self._unlink, key):
            self._notify(key, None, source)

    def list_keys(self, prefix: str = "") -> list[str]:
        """List all keys, optionally filtered by prefix."""
        keys = []
        for path in self._base_path.glob("*.json"):
            # Convert path back to key
            key = unquote(path.stem)
            if not prefix or key.startswith(prefix):
                keys.append(key)
        return sorted(keys)

    def clear(self) -> None:
        """Clear all data (useful for testing)."""
        for path in self._base_path.glob("*.json"):
            path.unlink()
