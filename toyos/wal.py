"""Append-only write-ahead log of PUT and DELETE operations."""

from __future__ import annotations

import enum
import logging
import threading
from dataclasses import dataclass
from pathlib import Path

log = logging.getLogger(__name__)


class WALAction(enum.Enum):
    PUT = "PUT"
    DELETE = "DELETE"


@dataclass(frozen=True)
class WALEntry:
    """One logged operation; ``value`` is empty for deletions."""

    action: WALAction
    key: str
    value: str = ""

    def serialize(self) -> str:
        if self.action is WALAction.PUT:
            return f"PUT {self.key} {self.value}"
        return f"DELETE {self.key}"

    @classmethod
    def deserialize(cls, line: str) -> WALEntry:
        """Parse a log line; any type other than PUT is read as a deletion."""
        tokens = line.split()
        kind = tokens[0] if tokens else ""
        key = tokens[1] if len(tokens) > 1 else ""
        if kind == "PUT":
            value = tokens[2] if len(tokens) > 2 else ""
            return cls(WALAction.PUT, key, value)
        return cls(WALAction.DELETE, key, "")


class WAL:
    """A log file opened for appending; every record is flushed at once."""

    def __init__(self, filename: str | Path) -> None:
        self.filename = Path(filename)
        self._lock = threading.Lock()
        self._file = open(self.filename, "a", encoding="utf-8")

    def _append(self, entry: WALEntry) -> None:
        with self._lock:
            self._file.write(entry.serialize() + "\n")
            self._file.flush()

    def append_put(self, key: str, value: str) -> None:
        self._append(WALEntry(WALAction.PUT, key, value))

    def append_delete(self, key: str) -> None:
        self._append(WALEntry(WALAction.DELETE, key))

    def recover(self) -> list[WALEntry]:
        """Read back every non-empty record in the log, oldest first."""
        try:
            with open(self.filename, encoding="utf-8") as infile:
                return [
                    WALEntry.deserialize(line)
                    for line in infile.read().splitlines()
                    if line
                ]
        except OSError:
            log.error("failed to open %s for recovery", self.filename)
            return []

    def close(self) -> None:
        if not self._file.closed:
            self._file.close()

    def __enter__(self) -> WAL:
        return self

    def __exit__(self, *args) -> None:
        self.close()