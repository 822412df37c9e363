"""A fixed-capacity cache that evicts the least recently used entry."""

from __future__ import annotations

from collections import OrderedDict


class LRUCache:
    """Map of string keys to string values with least-recently-used eviction.

    An entry is evicted only when the cache already holds exactly
    ``capacity`` entries and a new key arrives.
    """

    def __init__(self, capacity: int) -> None:
        self.capacity = capacity
        # Least recently used first, most recently used last.
        self._entries: OrderedDict[str, str] = OrderedDict()

    def get(self, key: str) -> str | None:
        """Return the value for ``key`` and mark it as most recently used."""
        if key not in self._entries:
            return None
        self._entries.move_to_end(key)
        return self._entries[key]

    def put(self, key: str, value: str) -> None:
        """Insert or update ``key``, evicting the oldest entry when full."""
        if key in self._entries:
            self._entries[key] = value
            self._entries.move_to_end(key)
            return
        if len(self._entries) == self.capacity and self._entries:
            self._entries.popitem(last=False)
        self._entries[key] = value

    def exists(self, key: str) -> bool:
        """Tell whether ``key`` is cached, without changing its recency."""
        return key in self._entries

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def keys(self) -> list[str]:
        """Cached keys, most recently used first."""
        return list(reversed(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        items = ", ".join(f"{k}={self._entries[k]}" for k in self.keys())
        return f"LRUCache(capacity={self.capacity}, [{items}])"