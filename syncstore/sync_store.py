"""Plain (versionless) store: one named value cached over a storage backend."""

import asyncio
import copy
import logging
from typing import Any, Awaitable, Callable, Generic, TypeVar

from .core.protocols import StorageBackend, Unsubscribe
from .core.types import ReadyState, StorageChange

logger = logging.getLogger(__name__)

T = TypeVar("T")

ValueListener = Callable[[T], None]


def _retrieve_exception(task: "asyncio.Future[None]") -> None:
    # Every waiter may have been cancelled; mark the outcome as seen so a
    # failure is not reported as never retrieved
    if not task.cancelled():
        task.exception()


class SyncStore(Generic[T]):
    """
    A single value persisted under one backend key, with an in-memory cache.

    The store starts out holding its default value. ready() loads the
    stored value (if any) into the cache; set() writes through to the
    backend and then updates the cache. With sync_from_external=True the
    cache also follows writes made to the same key by anyone else sharing
    the backend.

    Usage:
        store = SyncStore("theme", "light", backend)
        await store.ready()
        await store.set("dark")
    """

    def __init__(
        self,
        key: str,
        default_value: T,
        backend: StorageBackend,
        sync_from_external: bool = False,
    ) -> None:
        """
        Initialize the store. No backend IO happens here.

        Args:
            key: Backend key holding the value
            default_value: Value used while nothing is stored under key
            backend: Storage backend, usually shared with other stores
            sync_from_external: Whether the cache follows external writes
        """
        self._key = key
        self._default_value = default_value
        self._value: T = copy.deepcopy(default_value)
        self._backend = backend
        self._sync_from_external = sync_from_external
        self._state = ReadyState.UNINITIALIZED
        self._ready_task: asyncio.Future[None] | None = None
        self._listeners: list[ValueListener[T]] = []
        self._backend_unsubscribe: Unsubscribe | None = None

        if sync_from_external:
            self._backend_unsubscribe = backend.subscribe(self._on_backend_change)

    @property
    def key(self) -> str:
        return self._key

    @property
    def backend(self) -> StorageBackend:
        return self._backend

    @property
    def sync_from_external(self) -> bool:
        return self._sync_from_external

    @property
    def default_value(self) -> T:
        return self._default_value

    @property
    def state(self) -> ReadyState:
        return self._state

    @property
    def is_ready(self) -> bool:
        return self._state is ReadyState.READY

    @property
    def value(self) -> T:
        """The cached value. Only reflects stored state once ready() resolved."""
        return self._value

    def get(self) -> T:
        """Get the cached value."""
        return self._value

    async def set(self, value: T) -> None:
        """Write the value through to the backend, then update the cache."""
        await self._backend.set(self._key, value, source=self)
        self._set_cached(value)

    async def update(self, updater: Callable[[T], T]) -> None:
        """Set the value to updater(current value)."""
        await self.set(updater(self._value))

    def subscribe(self, listener: ValueListener[T]) -> Unsubscribe:
        """
        Register a listener called with the new value on every cache change.

        Returns:
            A callable that detaches the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def close(self) -> None:
        """Stop following external backend writes."""
        if self._backend_unsubscribe is not None:
            self._backend_unsubscribe()
            self._backend_unsubscribe = None

    async def ready(
        self, before_load: Callable[[], Awaitable[Any]] | None = None
    ) -> None:
        """
        Load the stored value into the cache. Safe to call repeatedly.

        Runs once: concurrent callers share one in-flight task, and later
        calls return immediately. A failure resets the store to
        UNINITIALIZED so the next call retries from scratch.

        Args:
            before_load: Optional step run in the MIGRATING state before the
                value is loaded, e.g. moving data from older keys
        """
        if self._state is ReadyState.READY:
            return
        if self._ready_task is None:
            task = asyncio.ensure_future(self._run_ready(before_load))
            task.add_done_callback(_retrieve_exception)
            self._ready_task = task
        # Shielded so a cancelled caller does not cancel the shared task
        await asyncio.shield(self._ready_task)

    async def _run_ready(
        self, before_load: Callable[[], Awaitable[Any]] | None
    ) -> None:
        try:
            if before_load is not None:
                self._state = ReadyState.MIGRATING
                await before_load()
            self._state = ReadyState.LOADING
            await self._update_from_backend()
        except BaseException:
            self._state = ReadyState.UNINITIALIZED
            raise
        else:
            self._state = ReadyState.READY
            logger.debug("Store %s is ready", self._key)
        finally:
            self._ready_task = None

    async def _update_from_backend(self) -> None:
        """Load the stored value into the cache. Absent keys keep the default."""
        stored = await self._backend.get(self._key)
        if stored is None:
            logger.debug("No stored value for %s, using default", self._key)
            return
        self._set_cached(stored)

    def _set_cached(self, value: T) -> None:
        self._value = value
        for listener in list(self._listeners):
            listener(value)

    def _on_backend_change(self, change: StorageChange) -> None:
        if change.key != self._key or change.source is self:
            return
        if change.removed:
            self._set_cached(copy.deepcopy(self._default_value))
        else:
            self._set_cached(change.value)
