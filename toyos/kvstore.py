"""In-memory key-value store backed by a write-ahead log and an LRU cache."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Sequence

from .lru_cache import LRUCache
from .wal import WAL, WALAction

log = logging.getLogger(__name__)


@dataclass
class ServerConfig:
    cache_capacity: int = 1000
    port: str = "50051"
    log_file: str = "wal.log"


def extract_flag_value(arg: str, prefix: str) -> str:
    """Return what follows ``prefix`` in ``arg``, or "" if it does not start with it."""
    if arg.startswith(prefix):
        return arg[len(prefix):]
    return ""


def parse_flags(argv: Sequence[str]) -> ServerConfig:
    """Build a configuration from ``--name=value`` arguments; others are ignored.

    Raises ValueError when ``--cache_capacity`` is not an integer.
    """
    config = ServerConfig()
    for arg in argv:
        if value := extract_flag_value(arg, "--cache_capacity="):
            config.cache_capacity = int(value)
        elif value := extract_flag_value(arg, "--port="):
            config.port = value
        elif value := extract_flag_value(arg, "--log_file="):
            config.log_file = value
    return config


class KVStoreService:
    """The store's operations: every change is logged before it is applied."""

    def __init__(self, log_file: str, cache_capacity: int) -> None:
        self._store: dict[str, str] = {}
        self._lock = threading.Lock()
        self._wal = WAL(log_file)
        self._cache = LRUCache(cache_capacity)
        self.recover_from_log()

    def recover_from_log(self) -> int:
        """Replay the log into the store and return the number of entries."""
        entries = self._wal.recover()
        for entry in entries:
            if entry.action is WALAction.PUT:
                self._store[entry.key] = entry.value
                self._cache.put(entry.key, entry.value)
            else:
                self._store.pop(entry.key, None)
        log.info("recovery complete: %d entries replayed", len(entries))
        return len(entries)

    def put(self, key: str, value: str) -> bool:
        with self._lock:
            self._wal.append_put(key, value)
            self._store[key] = value
            self._cache.put(key, value)
            log.info("put %s => %s", key, value)
            return True

    def get(self, key: str) -> str | None:
        """Return the value for ``key``, or None if it is not stored."""
        with self._lock:
            hit = self._cache.get(key)
            if hit is not None:
                log.info("cache hit %s", key)
                return hit
            value = self._store.get(key)
            if value is None:
                log.info("miss %s", key)
                return None
            self._cache.put(key, value)
            log.info("store hit %s => %s", key, value)
            return value

    def delete(self, key: str) -> bool:
        """Remove ``key`` from the store; tell whether it was there."""
        with self._lock:
            self._wal.append_delete(key)
            erased = self._store.pop(key, None) is not None
            log.info("delete %s %s", key, "deleted" if erased else "not found")
            return erased