"""Two-tier lookup caching (local store, remote fallback)."""

from tiercache.cache.memory import InMemoryLocalStore
from tiercache.cache.ports import (
    CallbackRemoteAdapter,
    CallbackRemoteStore,
    LocalStore,
    RemoteStore,
)
from tiercache.cache.remote import FunctionRemoteStore, MappingRemoteStore
from tiercache.cache.result import FetchResult
from tiercache.cache.tiered import CacheStats, TieredCache

__all__ = [
    "CacheStats",
    "CallbackRemoteAdapter",
    "CallbackRemoteStore",
    "FetchResult",
    "FunctionRemoteStore",
    "InMemoryLocalStore",
    "LocalStore",
    "MappingRemoteStore",
    "RemoteStore",
    "TieredCache",
]
