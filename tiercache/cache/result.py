"""
Outcome type for tiered lookups.

:class:`FetchResult` carries either a resolved value (and the tier that
supplied it) or the error reported by the remote store.
"""

from typing import Generic, Literal, Optional, TypeVar

from pydantic import BaseModel

from tiercache.exceptions import CompletionError

V = TypeVar("V")

Source = Literal["local", "remote"]


class FetchResult(BaseModel, Generic[V]):
    """Success-or-failure outcome of a single fetch.

    Attributes:
        ok: ``True`` when a value was resolved.
        value: The resolved value (success only).
        error: The remote error, forwarded as-is (failure only).
        source: Which tier resolved the value, ``None`` on failure.
    """

    ok: bool
    value: Optional[V] = None
    error: Optional[BaseException] = None
    source: Optional[Source] = None

    model_config = {"arbitrary_types_allowed": True}

    @classmethod
    def success(cls, value: V, source: Source = "local") -> "FetchResult[V]":
        return cls(ok=True, value=value, source=source)

    @classmethod
    def failure(cls, error: BaseException) -> "FetchResult[V]":
        return cls(ok=False, error=error)

    def unwrap(self) -> V:
        """Return the value, or re-raise the stored error unchanged."""
        if not self.ok:
            if self.error is None:
                raise CompletionError("Failed result carries no error")
            raise self.error
        return self.value  # type: ignore[return-value]
