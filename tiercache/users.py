"""
User lookup wiring: the stock example of a tiered cache.

``UserDataStore`` is the local tier, ``UserAPI`` the remote directory.
"""

from typing import Mapping, Optional

from pydantic import BaseModel

from tiercache.cache.memory import InMemoryLocalStore
from tiercache.cache.remote import MappingRemoteStore
from tiercache.cache.tiered import TieredCache


class User(BaseModel):
    """A user record.

    Attributes:
        name: Display name.
    """

    name: str

    model_config = {"frozen": True}


class UserDataStore(InMemoryLocalStore[User]):
    """Local user store."""


class UserAPI(MappingRemoteStore[User]):
    """Remote user directory."""


def build_user_cache(
    directory: Optional[Mapping[str, User]] = None,
    seed: Optional[Mapping[str, User]] = None,
    delay_seconds: Optional[float] = None,
) -> TieredCache[User]:
    """Wire a :class:`TieredCache` over a user store and user directory.

    Args:
        directory: Users known to the remote directory.
        seed: Users already present in the local store.
        delay_seconds: Simulated remote latency.

    Returns:
        A ready-to-use ``TieredCache[User]``.
    """
    return TieredCache(
        local_store=UserDataStore(seed),
        remote_store=UserAPI(directory, delay_seconds=delay_seconds),
    )
