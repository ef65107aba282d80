"""
tiercache exception hierarchy.

All custom exceptions inherit from TierCacheException so callers can
catch a single base type when they want a broad safety net.  The cache
itself never wraps remote errors: whatever a remote store raises is
what the caller sees.
"""


class TierCacheException(Exception):
    """Base exception for all tiercache errors."""


class ConfigurationError(TierCacheException, ValueError):
    """Raised when configuration is invalid or cannot be loaded."""


class RemoteFetchError(TierCacheException):
    """Raised by the bundled remote stores when a lookup fails."""


class NotFoundError(RemoteFetchError, KeyError):
    """Raised when a remote store has no value for an identifier.

    Args:
        identifier: The identifier that could not be resolved.
    """

    def __init__(self, identifier: str) -> None:
        super().__init__(identifier)
        self.identifier = identifier

    def __str__(self) -> str:
        return f"No remote value for identifier '{self.identifier}'"


class CompletionError(TierCacheException):
    """Raised when a callback-style remote completes with neither value nor error."""
