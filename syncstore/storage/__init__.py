"""Storage backend implementations."""

from .memory import InMemoryStorage
from .file import FileStorage

__all__ = ["InMemoryStorage", "FileStorage"]
