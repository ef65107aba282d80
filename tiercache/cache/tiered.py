"""
Two-tier lookup cache for tiercache.

Resolves an identifier from a fast local store and falls back to a
slower remote store on a miss.  A successful remote resolution is
written into the local store before it is returned
(write-through-on-miss).  Remote failures are forwarded unchanged and
leave the local store untouched.

There is no retry, timeout, eviction or in-flight de-duplication:
concurrent misses for the same identifier each reach the remote store
and each overwrite the local entry.  A caller that is cancelled or
times out while waiting does not stop the remote call or its local
write.
"""

import asyncio
import logging
from typing import Any, Callable, Coroutine, Generic, Optional, Set, TypeVar

from pydantic import BaseModel

from tiercache.cache.ports import LocalStore, RemoteStore
from tiercache.cache.result import FetchResult
from tiercache.config import get_settings

logger = logging.getLogger(__name__)

V = TypeVar("V")


class CacheStats(BaseModel):
    """Aggregate lookup statistics.

    Attributes:
        local_hits: Lookups answered by the local store.
        remote_hits: Misses resolved by the remote store.
        remote_failures: Misses where the remote store raised.
        hit_rate: Local hits over total lookups (0.0 if no lookups).
    """

    local_hits: int = 0
    remote_hits: int = 0
    remote_failures: int = 0
    hit_rate: float = 0.0


class TieredCache(Generic[V]):
    """Local-first cache with remote fallback.

    Args:
        local_store: Synchronous store owned by this cache.
        remote_store: Awaitable source of truth, owned by the caller.
    """

    def __init__(self, local_store: LocalStore[V], remote_store: RemoteStore[V]) -> None:
        self._local = local_store
        self._remote = remote_store
        self._log_hits = get_settings().cache.log_hits
        self._pending: Set[asyncio.Task] = set()
        self._local_hits = 0
        self._remote_hits = 0
        self._remote_failures = 0

    @property
    def local_store(self) -> LocalStore[V]:
        return self._local

    @property
    def remote_store(self) -> RemoteStore[V]:
        return self._remote

    @staticmethod
    def _check_identifier(identifier: str) -> None:
        if not identifier or not identifier.strip():
            raise ValueError("Identifier must not be empty")

    def _lookup_local(self, identifier: str) -> Optional[V]:
        value = self._local.fetch(identifier)
        if value is not None:
            self._local_hits += 1
            if self._log_hits:
                logger.debug("Local hit", extra={"identifier": identifier})
        return value

    async def _resolve_remote(self, identifier: str) -> V:
        logger.debug("Local miss; querying remote", extra={"identifier": identifier})
        try:
            value = await self._remote.fetch(identifier)
        except Exception as exc:
            self._remote_failures += 1
            logger.info(
                "Remote fetch failed",
                extra={"identifier": identifier, "error": repr(exc)},
            )
            raise
        self._local.persist(identifier, value)
        self._remote_hits += 1
        logger.debug("Remote hit persisted locally", extra={"identifier": identifier})
        return value

    def _spawn(self, coro: Coroutine[Any, Any, Any]) -> asyncio.Task:
        """Run *coro* as a cache-owned task that outlives its caller."""
        task = asyncio.get_running_loop().create_task(coro)
        self._pending.add(task)
        task.add_done_callback(self._reap)
        return task

    def _reap(self, task: asyncio.Task) -> None:
        self._pending.discard(task)
        if not task.cancelled():
            # Marks the error as retrieved; remote failures are logged
            # in _resolve_remote and re-raised to any caller still waiting.
            task.exception()

    @staticmethod
    def _report_callback_error(task: asyncio.Task) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.exception("Completion callback raised", exc_info=exc)

    @staticmethod
    def _consume(future: asyncio.Future) -> None:
        if not future.cancelled():
            future.exception()

    async def _await_remote(self, identifier: str) -> V:
        # Cancelling the caller leaves the shielded remote fetch and its
        # local write running to completion.
        return await asyncio.shield(self._spawn(self._resolve_remote(identifier)))

    async def fetch(self, identifier: str) -> V:
        """Resolve *identifier*, local store first.

        If the caller is cancelled or times out while the remote is
        being queried, the remote call still completes and its value is
        still persisted locally.

        Args:
            identifier: Non-empty identifier to look up.

        Returns:
            The stored or freshly fetched value.

        Raises:
            ValueError: If *identifier* is empty.
            Exception: Whatever the remote store raised, unchanged.
        """
        self._check_identifier(identifier)
        value = self._lookup_local(identifier)
        if value is not None:
            return value
        return await self._await_remote(identifier)

    async def fetch_result(self, identifier: str) -> FetchResult[V]:
        """Like :meth:`fetch`, but report the outcome as a :class:`FetchResult`.

        Remote errors are captured in the result instead of raised.

        Raises:
            ValueError: If *identifier* is empty.
        """
        self._check_identifier(identifier)
        value = self._lookup_local(identifier)
        if value is not None:
            return FetchResult.success(value, source="local")
        try:
            value = await self._await_remote(identifier)
        except Exception as exc:
            return FetchResult.failure(exc)
        return FetchResult.success(value, source="remote")

    def fetch_with_callback(
        self,
        identifier: str,
        on_complete: Callable[[FetchResult[V]], None],
    ) -> Optional[asyncio.Future]:
        """Completion-callback flavour of :meth:`fetch`.

        A local hit invokes *on_complete* before this method returns.  A
        miss schedules the remote lookup on the running event loop; the
        callback fires exactly once when it finishes.  The returned handle
        is shielded: cancelling it does not stop the remote call, its
        local write, or the callback.  An exception raised by
        *on_complete* is logged.

        Args:
            identifier: Non-empty identifier to look up.
            on_complete: Receives the single outcome.

        Returns:
            An awaitable handle on a miss, ``None`` on a local hit.

        Raises:
            ValueError: If *identifier* is empty.
            RuntimeError: On a miss with no running event loop.
        """
        self._check_identifier(identifier)
        value = self._lookup_local(identifier)
        if value is not None:
            on_complete(FetchResult.success(value, source="local"))
            return None

        # Fail before the coroutine below is created when no loop is running.
        asyncio.get_running_loop()

        async def _run() -> None:
            try:
                resolved = await self._resolve_remote(identifier)
            except Exception as exc:
                on_complete(FetchResult.failure(exc))
            else:
                on_complete(FetchResult.success(resolved, source="remote"))

        task = self._spawn(_run())
        task.add_done_callback(self._report_callback_error)
        handle = asyncio.shield(task)
        handle.add_done_callback(self._consume)
        return handle

    def stats(self) -> CacheStats:
        """Return aggregate lookup statistics."""
        total = self._local_hits + self._remote_hits + self._remote_failures
        return CacheStats(
            local_hits=self._local_hits,
            remote_hits=self._remote_hits,
            remote_failures=self._remote_failures,
            hit_rate=self._local_hits / total if total > 0 else 0.0,
        )

    def reset_stats(self) -> None:
        self._local_hits = 0
        self._remote_hits = 0
        self._remote_failures = 0
