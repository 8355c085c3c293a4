"""Versioned stores with forward migration."""

from .keys import version_key
from .versioned_store import VersionedSyncStore

__all__ = ["VersionedSyncStore", "version_key"]
