"""
Expiring cache for StaticWeaver.

Generic key/value store where every entry carries an expiration instant,
with an optional ceiling on the number of stored entries. Expiry is lazy:
reads filter out dead entries but never delete them, so ``len()`` reports
raw storage until ``remove_expired()`` runs.
"""

import logging
import time
from datetime import timedelta
from typing import (
    Callable,
    Dict,
    Generic,
    Hashable,
    Iterable,
    Iterator,
    Optional,
    Tuple,
    TypeVar,
    Union,
)

from ..config.constants import DEFAULT_CACHE_TTL

logger = logging.getLogger(__name__)

K = TypeVar('K', bound=Hashable)
V = TypeVar('V')


def _to_seconds(ttl: Union[timedelta, float, int]) -> float:
    if isinstance(ttl, timedelta):
        return ttl.total_seconds()
    return float(ttl)


class CacheEntry(Generic[V]):
    """Cache entry with expiration support."""

    __slots__ = ("value", "expires_at")

    def __init__(self, value: V, expires_at: float):
        self.value = value
        self.expires_at = expires_at

    def is_live(self, now: float) -> bool:
        """Check if entry is still live at ``now``."""
        return now < self.expires_at


class ExpiringCache(Generic[K, V]):
    """
    Mapping from keys to values that expire after a fixed TTL.

    Supports:
    - TTL-based expiration, checked at read time
    - Optional capacity ceiling on stored entries
    - Refresh/update of existing entries without re-inserting

    Example:
        cache = ExpiringCache(timedelta(seconds=60), capacity=100)
        cache.insert("index:42", "<html>...</html>")
        cache.get("index:42")
    """

    def __init__(
        self,
        ttl: Union[timedelta, float, int] = DEFAULT_CACHE_TTL,
        capacity: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize cache.

        Args:
            ttl: Time to live for every entry, as timedelta or seconds
            capacity: Maximum number of stored entries (None for unbounded)
            clock: Monotonic time source in seconds

        Raises:
            ValueError: If ttl is not positive
        """
        seconds = _to_seconds(ttl)
        if not seconds > 0:
            raise ValueError(f"Cache ttl must be positive, got {ttl!r}")

        self._ttl = seconds
        self._clock = clock
        self.capacity = capacity
        self._items: Dict[K, CacheEntry[V]] = {}

    @classmethod
    def from_pairs(
        cls,
        pairs: Iterable[Tuple[K, V]],
        ttl: Union[timedelta, float, int] = DEFAULT_CACHE_TTL,
    ) -> "ExpiringCache[K, V]":
        """Build a cache by inserting every pair."""
        cache: "ExpiringCache[K, V]" = cls(ttl)
        for key, value in pairs:
            cache.insert(key, value)
        return cache

    @property
    def ttl(self) -> timedelta:
        """Configured time to live for new and refreshed entries."""
        return timedelta(seconds=self._ttl)

    def _live_entry(self, key: K) -> Optional[CacheEntry[V]]:
        entry = self._items.get(key)
        if entry is None or not entry.is_live(self._clock()):
            return None
        return entry

    def insert(self, key: K, value: V) -> Optional[V]:
        """
        Insert a value.

        A new key is silently refused when the cache already stores
        ``capacity`` entries (expired ones included). Existing keys are
        always overwritten.

        Args:
            key: Cache key
            value: Value to cache

        Returns:
            Previously stored value for key, or None
        """
        if (
            self.capacity is not None
            and len(self._items) >= self.capacity
            and key not in self._items
        ):
            logger.debug(f"Cache at capacity ({self.capacity}), not inserting {key!r}")
            return None

        previous = self._items.get(key)
        self._items[key] = CacheEntry(value, self._clock() + self._ttl)
        return previous.value if previous is not None else None

    def get(self, key: K) -> Optional[V]:
        """
        Get a live value.

        Returns:
            Cached value, or None if absent or expired
        """
        entry = self._live_entry(key)
        return entry.value if entry is not None else None

    def contains_key(self, key: K) -> bool:
        """Check whether key holds a live entry."""
        return self._live_entry(key) is not None

    def ttl_of(self, key: K) -> Optional[timedelta]:
        """
        Remaining lifetime of a live entry.

        Returns:
            Time until expiry, or None if absent or expired
        """
        entry = self._items.get(key)
        if entry is None:
            return None
        now = self._clock()
        if not entry.is_live(now):
            return None
        return timedelta(seconds=entry.expires_at - now)

    def refresh(self, key: K) -> bool:
        """
        Restart the TTL window of a stored entry, even an expired one.

        Returns:
            True if key was stored, False otherwise
        """
        entry = self._items.get(key)
        if entry is None:
            return False
        entry.expires_at = self._clock() + self._ttl
        return True

    def update(self, key: K, value: V) -> bool:
        """
        Replace the value of a stored entry and restart its TTL window.

        Does not insert missing keys.

        Returns:
            True if key was stored, False otherwise
        """
        entry = self._items.get(key)
        if entry is None:
            return False
        entry.value = value
        entry.expires_at = self._clock() + self._ttl
        return True

    def remove(self, key: K) -> Optional[V]:
        """Remove key whether live or not, returning its value."""
        entry = self._items.pop(key, None)
        return entry.value if entry is not None else None

    def remove_expired(self) -> int:
        """Remove all expired entries. Returns count of removed entries."""
        now = self._clock()
        expired_keys = [
            key for key, entry in self._items.items()
            if not entry.is_live(now)
        ]

        for key in expired_keys:
            del self._items[key]

        if expired_keys:
            logger.debug(f"Removed {len(expired_keys)} expired cache entries")

        return len(expired_keys)

    def set_capacity(self, capacity: int) -> None:
        """Set a new ceiling. Entries already stored are kept."""
        self.capacity = capacity

    def clear(self) -> None:
        self._items.clear()

    def iter(self) -> Iterator[Tuple[K, V]]:
        """Lazily yield live (key, value) pairs."""
        # Snapshot so callers may mutate the cache while iterating
        for key, entry in list(self._items.items()):
            if entry.is_live(self._clock()):
                yield key, entry.value

    def is_empty(self) -> bool:
        """True when nothing is stored, live or expired."""
        return not self._items

    def __iter__(self) -> Iterator[Tuple[K, V]]:
        return self.iter()

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, key: object) -> bool:
        return self.contains_key(key)

    def __repr__(self) -> str:
        return (
            f"ExpiringCache(ttl={self.ttl}, capacity={self.capacity}, "
            f"stored={len(self._items)})"
        )
