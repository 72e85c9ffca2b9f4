"""A module that contains the expiring cache implementation."""
from __future__ import annotations

import time
import typing

import attr

__all__: typing.Final[typing.List[str]] = ["ExpiringCache", "DEFAULT_TTL"]
T = typing.TypeVar("T")
DEFAULT_TTL: typing.Final[float] = 300.0


@attr.define(slots=True)
class CacheEntry(typing.Generic[T]):
    value: T = attr.field()
    created_at: float = attr.field()


class ExpiringCache:
    """
    A key-value store with a single global time-to-live.

    Expired entries are only dropped when they're read,
    there's no background task sweeping them.
    """

    __slots__ = ("ttl", "_clock", "_entries")

    def __init__(
        self,
        ttl: float = DEFAULT_TTL,
        *,
        clock: typing.Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl = ttl
        self._clock = clock
        self._entries: typing.Dict[str, CacheEntry[typing.Any]] = {}

    def set(self, key: str, value: T) -> T:
        """Stores the value and returns it, overwriting the previous entry."""
        self._entries[key] = CacheEntry(value, self._clock())
        return value

    def get(self, key: str, default: typing.Any = None) -> typing.Any:
        """Returns the value if it's still fresh, otherwise the default."""
        if (entry := self._entries.get(key)) is None:
            return default

        if self._clock() - entry.created_at >= self.ttl:
            del self._entries[key]
            return default

        return entry.value

    def clear(self, key: str) -> None:
        self._entries.pop(key, None)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.get(key, _MISSING) is not _MISSING

    def __len__(self) -> int:
        return len(self._entries)


_MISSING: typing.Final[object] = object()
