"""Directories stored as fixed-size name entries in an inode's data blocks."""

from __future__ import annotations

import errno
import struct
from typing import Iterator

from .block_manager import BlockManager
from .disk import BLOCK_SIZE, NINDIRECT, Disk, DiskError
from .inode import Inode, InodeTable

_ENTRY = struct.Struct("<i252s")
ENTRY_SIZE = _ENTRY.size
ENTRIES_PER_BLOCK = BLOCK_SIZE // ENTRY_SIZE
NAME_MAX = 251
_TABLE = struct.Struct(f"<{NINDIRECT}I")


def _entries(data: bytes) -> Iterator[tuple[int, int, bytes]]:
    """Yield (byte offset, inode number, raw name) for each entry of a block."""
    for index, (inum, raw) in enumerate(_ENTRY.iter_unpack(data)):
        yield index * ENTRY_SIZE, inum, raw.split(b"\0", 1)[0]


def _place(data: bytearray, entry: bytes) -> bool:
    """Put ``entry`` in the first free slot of a block; tell whether it fit."""
    for offset, inum, _ in _entries(data):
        if inum == 0:
            data[offset:offset + ENTRY_SIZE] = entry
            return True
    return False


class Directory:
    """Name lookup, insertion, listing and removal within directory inodes."""

    def __init__(self, disk: Disk, inodes: InodeTable, blocks: BlockManager) -> None:
        self._disk = disk
        self._inodes = inodes
        self._blocks = blocks

    def _read_table(self, block_num: int) -> list[int]:
        return list(_TABLE.unpack(self._disk.read(block_num)))

    def _write_table(self, block_num: int, table: list[int]) -> None:
        self._disk.write(block_num, _TABLE.pack(*table))

    def _data_blocks(self, inode: Inode) -> Iterator[int]:
        yield from (block for block in inode.direct if block)
        if inode.indirect:
            yield from (block for block in self._read_table(inode.indirect) if block)

    def lookup(self, dir_inum: int, name: str) -> int | None:
        """Return the inode number stored under ``name``, or None."""
        target = name.encode("utf-8")
        for block_num in self._data_blocks(self._inodes.read(dir_inum)):
            for _, inum, raw in _entries(self._disk.read(block_num)):
                if inum != 0 and raw == target:
                    return inum
        return None

    def add(self, dir_inum: int, name: str, inum: int) -> None:
        """Record ``name`` -> ``inum``, growing the directory when needed.

        Names are truncated to ``NAME_MAX`` bytes.
        """
        inode = self._inodes.read(dir_inum)
        entry = _ENTRY.pack(inum, name.encode("utf-8")[:NAME_MAX])

        for slot, block_num in enumerate(inode.direct):
            if block_num == 0:
                block_num = self._blocks.alloc()
                inode.direct[slot] = block_num
                self._inodes.write(dir_inum, inode)
                data = bytearray(BLOCK_SIZE)
            else:
                data = bytearray(self._disk.read(block_num))
            if _place(data, entry):
                self._disk.write(block_num, bytes(data))
                return

        if inode.indirect == 0:
            inode.indirect = self._blocks.alloc()
            self._inodes.write(dir_inum, inode)
            self._disk.write(inode.indirect, bytes(BLOCK_SIZE))

        table = self._read_table(inode.indirect)
        for slot, block_num in enumerate(table):
            if block_num == 0:
                block_num = self._blocks.alloc()
                table[slot] = block_num
                self._disk.write(block_num, bytes(BLOCK_SIZE))
                self._write_table(inode.indirect, table)
            data = bytearray(self._disk.read(block_num))
            if _place(data, entry):
                self._disk.write(block_num, bytes(data))
                return

        raise DiskError(errno.ENOSPC, "directory is full")

    def list(self, dir_inum: int) -> list[str]:
        """Names in the directory, in on-disk order."""
        return [
            raw.decode("utf-8", errors="replace")
            for block_num in self._data_blocks(self._inodes.read(dir_inum))
            for _, inum, raw in _entries(self._disk.read(block_num))
            if inum != 0
        ]

    def remove(self, dir_inum: int, name: str) -> bool:
        """Clear the entry for ``name``; tell whether one was found."""
        target = name.encode("utf-8")
        for block_num in self._data_blocks(self._inodes.read(dir_inum)):
            data = bytearray(self._disk.read(block_num))
            for offset, inum, raw in _entries(data):
                if inum != 0 and raw == target:
                    data[offset:offset + ENTRY_SIZE] = bytes(ENTRY_SIZE)
                    self._disk.write(block_num, bytes(data))
                    return True
        return False