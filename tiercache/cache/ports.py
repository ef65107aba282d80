"""
Store capabilities consumed by :class:`~tiercache.cache.tiered.TieredCache`.

Two narrow Protocols, both parameterized by the stored value type:

* :class:`LocalStore` -- fast, synchronous lookup plus insert-or-overwrite.
* :class:`RemoteStore` -- slower, awaitable lookup that either returns a
  value or raises.

Remote sources written in completion-callback style can be plugged in
through :class:`CallbackRemoteAdapter`.
"""

import asyncio
import logging
from typing import Callable, Generic, Optional, Protocol, TypeVar, runtime_checkable

from tiercache.cache.result import FetchResult
from tiercache.exceptions import CompletionError

logger = logging.getLogger(__name__)

V = TypeVar("V")


@runtime_checkable
class LocalStore(Protocol[V]):
    """Synchronous local key-value store."""

    def fetch(self, identifier: str) -> Optional[V]:
        """Return the stored value, or ``None`` if absent."""
        ...

    def persist(self, identifier: str, value: V) -> None:
        """Store *value* under *identifier*, overwriting any previous value."""
        ...


@runtime_checkable
class RemoteStore(Protocol[V]):
    """Asynchronous, externally owned source of truth."""

    async def fetch(self, identifier: str) -> V:
        """Resolve *identifier*.

        Raises:
            Exception: Any failure reported by the remote source.
        """
        ...


class CallbackRemoteStore(Protocol[V]):
    """Remote source that reports completion through a callback."""

    def fetch(
        self,
        identifier: str,
        on_complete: Callable[[FetchResult[V]], None],
    ) -> None:
        ...


class CallbackRemoteAdapter(Generic[V]):
    """Expose a :class:`CallbackRemoteStore` as an awaitable :class:`RemoteStore`.

    The wrapped store's callback resolves an ``asyncio.Future``.  Only the
    first completion counts; later ones are dropped with a warning.  The
    callback may be fired from another thread.

    Args:
        store: The callback-style remote store to wrap.
    """

    def __init__(self, store: CallbackRemoteStore[V]) -> None:
        self._store = store

    async def fetch(self, identifier: str) -> V:
        loop = asyncio.get_running_loop()
        future: asyncio.Future = loop.create_future()
        completed = False

        def _resolve(result: FetchResult[V]) -> None:
            if future.done():
                return
            if result.ok:
                future.set_result(result.value)
            elif result.error is not None:
                future.set_exception(result.error)
            else:
                future.set_exception(
                    CompletionError(f"Remote completed '{identifier}' without value or error")
                )

        def on_complete(result: FetchResult[V]) -> None:
            nonlocal completed
            if completed:
                logger.warning(
                    "Remote completion called more than once; ignoring",
                    extra={"identifier": identifier},
                )
                return
            completed = True
            try:
                running = asyncio.get_running_loop()
            except RuntimeError:
                running = None
            if running is loop:
                _resolve(result)
            else:
                loop.call_soon_threadsafe(_resolve, result)

        self._store.fetch(identifier, on_complete)
        return await future
