"""A small Unix-like file system: paths, descriptors and file data on a block image."""

from __future__ import annotations

import errno
import itertools
import struct
from dataclasses import dataclass
from pathlib import Path

from .block_manager import BlockManager
from .directory import Directory
from .disk import (
    BLOCK_SIZE,
    DISK_IMAGE,
    MAX_FILE_BLOCKS,
    MAX_FILE_SIZE,
    NDIRECT,
    NINDIRECT,
    Disk,
)
from .inode import DIR_MODE, FILE_MODE, ROOT_INUM, Inode, InodeTable

SEEK_SET = 0
SEEK_CUR = 1
SEEK_END = 2
FIRST_FD = 3

_TYPE_MASK = 0o170000
_DIR_TYPE = DIR_MODE & _TYPE_MASK
_TABLE = struct.Struct(f"<{NINDIRECT}I")


class FileSystemError(OSError):
    """A file system operation could not be carried out."""


@dataclass
class _OpenFile:
    inum: int
    offset: int = 0


def _split(path: str) -> tuple[str, str]:
    """Split a path into its parent directory and final name."""
    head, sep, name = path.rpartition("/")
    return (head if sep else "/"), name


class SimpleFileSystem:
    """Files and directories stored in an image of fixed-size blocks.

    Descriptors returned by :meth:`open` start at ``FIRST_FD`` and are
    never reused.
    """

    def __init__(self, image_path: str | Path = DISK_IMAGE) -> None:
        self._disk = Disk(image_path)
        self._inodes = InodeTable(self._disk)
        self._blocks = BlockManager()
        self._dirs = Directory(self._disk, self._inodes, self._blocks)
        self._open_files: dict[int, _OpenFile] = {}
        self._fds = itertools.count(FIRST_FD)

    def _lookup_path(self, path: str) -> int | None:
        current = ROOT_INUM
        for component in path.split("/"):
            if not component:
                continue
            found = self._dirs.lookup(current, component)
            if found is None:
                return None
            current = found
        return current

    def _fresh_block(self) -> int:
        block = self._blocks.alloc()
        self._disk.write(block, bytes(BLOCK_SIZE))
        return block

    def _new_inode(self, path: str, mode: int) -> int:
        parent_path, name = _split(path)
        if not name:
            raise FileSystemError(errno.EINVAL, "empty file name", path)
        parent = self._lookup_path(parent_path)
        if parent is None:
            raise FileSystemError(errno.ENOENT, "no such directory", parent_path)
        inum = self._inodes.alloc()
        inode = Inode(mode=mode, size=0)
        inode.direct[0] = self._fresh_block()
        self._inodes.write(inum, inode)
        self._dirs.add(parent, name, inum)
        return inum

    def _file(self, fd: int) -> _OpenFile:
        try:
            return self._open_files[fd]
        except KeyError:
            raise FileSystemError(errno.EBADF, f"bad file descriptor {fd}") from None

    def _block_for(self, inode: Inode, index: int, allocate: bool) -> int:
        """Disk block holding the file's ``index``-th block, 0 when absent."""
        if not 0 <= index < MAX_FILE_BLOCKS:
            raise FileSystemError(errno.EFBIG, "file too large")
        if index < NDIRECT:
            if allocate and inode.direct[index] == 0:
                inode.direct[index] = self._fresh_block()
            return inode.direct[index]
        if inode.indirect == 0:
            if not allocate:
                return 0
            inode.indirect = self._fresh_block()
        table = list(_TABLE.unpack(self._disk.read(inode.indirect)))
        slot = index - NDIRECT
        if allocate and table[slot] == 0:
            table[slot] = self._fresh_block()
            self._disk.write(inode.indirect, _TABLE.pack(*table))
        return table[slot]

    def create(self, path: str) -> int:
        """Create an empty regular file and return its inode number."""
        return self._new_inode(path, FILE_MODE)

    def mkdir(self, path: str) -> int:
        """Create an empty directory and return its inode number."""
        return self._new_inode(path, DIR_MODE)

    def open(self, path: str) -> int:
        """Open ``path``, creating it if missing, and return a descriptor."""
        inum = self._lookup_path(path)
        if inum is None:
            inum = self.create(path)
        fd = next(self._fds)
        self._open_files[fd] = _OpenFile(inum)
        return fd

    def read(self, fd: int, size: int) -> bytes:
        """Read up to ``size`` bytes from the descriptor's current offset."""
        open_file = self._file(fd)
        inode = self._inodes.read(open_file.inum)
        chunks: list[bytes] = []
        total = 0
        while total < size and open_file.offset < inode.size:
            index, inner = divmod(open_file.offset, BLOCK_SIZE)
            block = self._block_for(inode, index, allocate=False)
            if block == 0:
                break
            chunk = min(size - total, BLOCK_SIZE - inner, inode.size - open_file.offset)
            chunks.append(self._disk.read(block)[inner:inner + chunk])
            open_file.offset += chunk
            total += chunk
        return b"".join(chunks)

    def write(self, fd: int, data: bytes) -> int:
        """Write ``data`` at the descriptor's offset and return the byte count."""
        open_file = self._file(fd)
        inode = self._inodes.read(open_file.inum)
        view = memoryview(bytes(data))
        total = 0
        while total < len(view):
            index, inner = divmod(open_file.offset, BLOCK_SIZE)
            block = self._block_for(inode, index, allocate=True)
            buffer = bytearray(self._disk.read(block))
            chunk = min(len(view) - total, BLOCK_SIZE - inner)
            buffer[inner:inner + chunk] = view[total:total + chunk]
            self._disk.write(block, bytes(buffer))
            open_file.offset += chunk
            total += chunk
        inode.size = max(open_file.offset, inode.size)
        self._inodes.write(open_file.inum, inode)
        return total

    def seek(self, fd: int, offset: int, whence: int) -> int:
        """Move the descriptor's offset and return the new position."""
        open_file = self._file(fd)
        if whence == SEEK_SET:
            position = offset
        elif whence == SEEK_CUR:
            position = open_file.offset + offset
        elif whence == SEEK_END:
            position = self._inodes.read(open_file.inum).size + offset
        else:
            raise FileSystemError(errno.EINVAL, f"invalid whence {whence}")
        if not 0 <= position < MAX_FILE_SIZE:
            raise FileSystemError(errno.EINVAL, f"offset {position} out of range")
        open_file.offset = position
        return position

    def listdir(self, path: str) -> list[str]:
        """Names held in the directory at ``path``."""
        inum = self._lookup_path(path)
        if inum is None:
            raise FileSystemError(errno.ENOENT, "no such directory", path)
        if self._inodes.read(inum).mode & _TYPE_MASK != _DIR_TYPE:
            raise FileSystemError(errno.ENOTDIR, "not a directory", path)
        return self._dirs.list(inum)

    def remove(self, path: str) -> None:
        """Unlink ``path`` and release its data blocks."""
        parent_path, name = _split(path)
        parent = self._lookup_path(parent_path)
        if parent is None:
            raise FileSystemError(errno.ENOENT, "no such directory", parent_path)
        inum = self._dirs.lookup(parent, name)
        if inum is None:
            raise FileSystemError(errno.ENOENT, "no such file", path)
        inode = self._inodes.read(inum)
        for block in inode.direct:
            if block:
                self._blocks.free(block)
        if inode.indirect:
            for block in _TABLE.unpack(self._disk.read(inode.indirect)):
                if block:
                    self._blocks.free(block)
            self._blocks.free(inode.indirect)
        if not self._dirs.remove(parent, name):
            raise FileSystemError(errno.ENOENT, "no such file", path)
        self._inodes.write(inum, Inode())

    def close(self) -> None:
        self._disk.close()

    def __enter__(self) -> SimpleFileSystem:
        return self

    def __exit__(self, *args) -> None:
        self.close()