"""tiercache: local-first lookups with remote fallback."""

from tiercache.cache import (
    CacheStats,
    FetchResult,
    InMemoryLocalStore,
    LocalStore,
    MappingRemoteStore,
    RemoteStore,
    TieredCache,
)
from tiercache.exceptions import NotFoundError, RemoteFetchError, TierCacheException

__all__ = [
    "CacheStats",
    "FetchResult",
    "InMemoryLocalStore",
    "LocalStore",
    "MappingRemoteStore",
    "NotFoundError",
    "RemoteFetchError",
    "RemoteStore",
    "TierCacheException",
    "TieredCache",
]

__version__ = "0.1.0"
