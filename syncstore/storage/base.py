"""Change notification shared by the storage backends."""

import logging
from typing import Any

from ..core.protocols import ChangeListener, Unsubscribe
from ..core.types import StorageChange

logger = logging.getLogger(__name__)


class ChangeNotifier:
    """Keeps backend change listeners and fans out StorageChange events.

    Listeners belong to whichever stores share the backend, so a failing
    listener is logged and skipped; it never fails the write that
    triggered it.
    """

    def __init__(self) -> None:
        self._listeners: list[ChangeListener] = []

    def subscribe(self, listener: ChangeListener) -> Unsubscribe:
        """Register a listener for changes. Returns a callable that detaches it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, key: str, value: Any | None, source: object | None) -> None:
        change = StorageChange(key=key, value=value, source=source)
        # Copy so a listener may unsubscribe while being notified
        for listener in list(self._listeners):
            try:
                listener(change)
            except Exception:
                logger.exception("Change listener failed for key %s", key)
