"""
Reference remote stores.

:class:`MappingRemoteStore` answers from a fixed directory, standing in
for an external service during development and testing.
:class:`FunctionRemoteStore` wraps an arbitrary coroutine function.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Dict, Generic, List, Mapping, Optional, TypeVar

from tiercache.config import get_settings
from tiercache.exceptions import NotFoundError

logger = logging.getLogger(__name__)

V = TypeVar("V")


class MappingRemoteStore(Generic[V]):
    """Async remote store backed by a mapping.

    Every call is recorded in :attr:`calls` so tests can assert how
    often the remote tier was reached.

    Args:
        directory: Identifier -> value mapping served by this store.
        delay_seconds: Simulated latency per call.  Defaults to
            ``remote.simulated_delay_seconds`` from settings.
    """

    def __init__(
        self,
        directory: Optional[Mapping[str, V]] = None,
        delay_seconds: Optional[float] = None,
    ) -> None:
        self._directory: Dict[str, V] = dict(directory or {})
        self._delay = (
            delay_seconds
            if delay_seconds is not None
            else get_settings().remote.simulated_delay_seconds
        )
        self.calls: List[str] = []

    async def fetch(self, identifier: str) -> V:
        """Resolve *identifier* from the directory.

        Raises:
            NotFoundError: If the directory has no entry for *identifier*.
        """
        self.calls.append(identifier)
        if self._delay > 0:
            await asyncio.sleep(self._delay)
        try:
            return self._directory[identifier]
        except KeyError:
            logger.debug("Remote miss", extra={"identifier": identifier})
            raise NotFoundError(identifier) from None

    @property
    def call_count(self) -> int:
        return len(self.calls)


class FunctionRemoteStore(Generic[V]):
    """Adapt ``async def loader(identifier) -> V`` to the remote store protocol."""

    def __init__(self, loader: Callable[[str], Awaitable[V]]) -> None:
        self._loader = loader

    async def fetch(self, identifier: str) -> V:
        return await self._loader(identifier)
