"""Block device emulated by a fixed-size image file."""

from __future__ import annotations

import errno
from pathlib import Path

BLOCK_SIZE = 4096
NDIRECT = 12
NINDIRECT = BLOCK_SIZE // 4
NUM_INODES = 128
NUM_BLOCKS = 1024
RESERVED_BLOCKS = 1 + 16  # superblock plus inode blocks
MAX_FILE_BLOCKS = NDIRECT + NINDIRECT
MAX_FILE_SIZE = MAX_FILE_BLOCKS * BLOCK_SIZE

DISK_IMAGE = "disk.img"


class DiskError(OSError):
    """A block could not be read or written."""


class Disk:
    """Whole-block access to an image file of ``NUM_BLOCKS`` blocks.

    A missing image is created and filled with zeros.
    """

    def __init__(self, path: str | Path = DISK_IMAGE) -> None:
        self.path = Path(path)
        try:
            self._file = open(self.path, "r+b")
        except FileNotFoundError:
            with open(self.path, "wb") as create:
                create.write(bytes(BLOCK_SIZE * NUM_BLOCKS))
            self._file = open(self.path, "r+b")

    @staticmethod
    def _check(block_num: int) -> None:
        if not 0 <= block_num < NUM_BLOCKS:
            raise DiskError(errno.EINVAL, f"block {block_num} out of range")

    def read(self, block_num: int) -> bytes:
        """Return the ``BLOCK_SIZE`` bytes of a block."""
        self._check(block_num)
        self._file.seek(block_num * BLOCK_SIZE)
        data = self._file.read(BLOCK_SIZE)
        if len(data) != BLOCK_SIZE:
            raise DiskError(errno.EIO, f"short read of block {block_num}")
        return data

    def write(self, block_num: int, data: bytes) -> None:
        """Overwrite a block with exactly ``BLOCK_SIZE`` bytes."""
        self._check(block_num)
        if len(data) != BLOCK_SIZE:
            raise DiskError(
                errno.EINVAL, f"block data must be {BLOCK_SIZE} bytes, got {len(data)}"
            )
        self._file.seek(block_num * BLOCK_SIZE)
        self._file.write(bytes(data))
        self._file.flush()

    def close(self) -> None:
        if not self._file.closed:
            self._file.close()

    def __enter__(self) -> Disk:
        return self

    def __exit__(self, *args) -> None:
        self.close()