"""Store settings loaded from the environment."""

import os
from dataclasses import dataclass
from typing import Any

from dotenv import load_dotenv

ENV_PREFIX = "SYNCSTORE_"

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass
class StoreSettings:
    """
    Defaults applied when a store is built without explicit options.

    Can be populated from environment variables (and a .env file) with
    from_env().
    """

    separator: str = ":"
    sync_from_external: bool = False
    storage_path: str = ".syncstore"  # FileStorage base directory
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if not self.separator:
            raise ValueError("separator must be a non-empty string")

    @classmethod
    def from_env(cls, dotenv_path: str | None = None) -> "StoreSettings":
        """Create settings from SYNCSTORE_* environment variables."""
        load_dotenv(dotenv_path)
        defaults = cls()

        sync_raw = os.environ.get(f"{ENV_PREFIX}SYNC_FROM_EXTERNAL")
        sync_from_external = (
            sync_raw.strip().lower() in _TRUE_VALUES
            if sync_raw is not None
            else defaults.sync_from_external
        )

        return cls(
            separator=os.environ.get(f"{ENV_PREFIX}SEPARATOR", defaults.separator),
            sync_from_external=sync_from_external,
            storage_path=os.environ.get(
                f"{ENV_PREFIX}STORAGE_PATH", defaults.storage_path
            ),
            log_level=os.environ.get(f"{ENV_PREFIX}LOG_LEVEL", defaults.log_level),
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "StoreSettings":
        """Create StoreSettings from dictionary."""
        return cls(**data)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "separator": self.separator,
            "sync_from_external": self.sync_from_external,
            "storage_path": self.storage_path,
            "log_level": self.log_level,
        }
