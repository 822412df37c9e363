"""On-disk inodes and the table that stores them."""

from __future__ import annotations

import errno
import struct
from dataclasses import dataclass, field

from .disk import BLOCK_SIZE, NDIRECT, NUM_INODES, Disk, DiskError

DIR_MODE = 0o40755
FILE_MODE = 0o100644
ROOT_INUM = 1
ROOT_DATA_BLOCK = 2

_INODE = struct.Struct(f"<II{NDIRECT}II")
INODE_SIZE = _INODE.size
INODES_PER_BLOCK = BLOCK_SIZE // INODE_SIZE


@dataclass
class Inode:
    """File type and permissions, size in bytes and block pointers."""

    mode: int = 0
    size: int = 0
    direct: list[int] = field(default_factory=lambda: [0] * NDIRECT)
    indirect: int = 0

    def to_bytes(self) -> bytes:
        if len(self.direct) != NDIRECT:
            raise ValueError(f"an inode has exactly {NDIRECT} direct pointers")
        return _INODE.pack(self.mode, self.size, *self.direct, self.indirect)

    @classmethod
    def from_bytes(cls, data: bytes) -> Inode:
        mode, size, *rest = _INODE.unpack_from(data)
        return cls(mode, size, list(rest[:NDIRECT]), rest[NDIRECT])


class InodeTable:
    """Inodes packed into the blocks after the superblock.

    On a fresh image the root directory inode is created.
    """

    def __init__(self, disk: Disk) -> None:
        self._disk = disk
        self._used = [False] * NUM_INODES
        self._used[0] = True
        root = self.read(ROOT_INUM)
        if root.mode == 0:
            root = Inode(mode=DIR_MODE, size=0, indirect=0)
            root.direct[0] = ROOT_DATA_BLOCK
            self.write(ROOT_INUM, root)
        self._used[ROOT_INUM] = True

    @staticmethod
    def _locate(inum: int) -> tuple[int, int]:
        if not 0 < inum < NUM_INODES:
            raise ValueError(f"inode number {inum} out of range")
        block = 1 + inum // INODES_PER_BLOCK
        offset = (inum % INODES_PER_BLOCK) * INODE_SIZE
        return block, offset

    def read(self, inum: int) -> Inode:
        block, offset = self._locate(inum)
        data = self._disk.read(block)
        return Inode.from_bytes(data[offset:offset + INODE_SIZE])

    def write(self, inum: int, inode: Inode) -> None:
        block, offset = self._locate(inum)
        data = bytearray(self._disk.read(block))
        data[offset:offset + INODE_SIZE] = inode.to_bytes()
        self._disk.write(block, bytes(data))

    def alloc(self) -> int:
        """Mark the lowest free inode number as used and return it."""
        inum = next((n for n in range(1, NUM_INODES) if not self._used[n]), None)
        if inum is None:
            raise DiskError(errno.ENOSPC, "no free inodes")
        self._used[inum] = True
        return inum