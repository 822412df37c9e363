"""Request handlers for the file system, answering with reply records."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from .disk import DISK_IMAGE
from .sfs import SimpleFileSystem

log = logging.getLogger(__name__)

_FAILURES = (OSError, ValueError)


@dataclass(frozen=True)
class Reply:
    """Outcome of one request; ``error`` is set when it failed."""

    success: bool = True
    error: str = ""
    inum: int = 0
    fd: int = 0
    data: bytes = b""
    entries: tuple[str, ...] = ()


def _failure(message: str) -> Reply:
    return Reply(success=False, error=message)


class FileSystemService:
    """Serves file system requests against one disk image."""

    def __init__(self, image_path: str | Path = DISK_IMAGE) -> None:
        self.filesystem = SimpleFileSystem(image_path)
        log.info("file system initialized from %s", image_path)

    def create(self, path: str) -> Reply:
        try:
            return Reply(inum=self.filesystem.create(path))
        except _FAILURES:
            return _failure("Create failed")

    def mkdir(self, path: str) -> Reply:
        try:
            return Reply(inum=self.filesystem.mkdir(path))
        except _FAILURES:
            return _failure("Mkdir failed")

    def open(self, filename: str) -> Reply:
        try:
            return Reply(fd=self.filesystem.open(filename))
        except _FAILURES:
            return _failure("Open failed")

    def write(self, fd: int, data: bytes | str) -> Reply:
        if isinstance(data, str):
            data = data.encode("utf-8")
        try:
            self.filesystem.write(fd, data)
        except _FAILURES:
            return _failure("Write failed")
        return Reply()

    def read(self, fd: int, num_bytes: int) -> Reply:
        try:
            return Reply(data=self.filesystem.read(fd, num_bytes))
        except _FAILURES:
            return _failure("Read failed")

    def seek(self, fd: int, offset: int, whence: int) -> Reply:
        try:
            self.filesystem.seek(fd, offset, whence)
        except _FAILURES:
            return _failure("Seek failed")
        return Reply()

    def listdir(self, path: str) -> Reply:
        try:
            names = self.filesystem.listdir(path)
        except _FAILURES:
            names = []
        if not names:
            return _failure("Directory not found or not a directory")
        return Reply(entries=tuple(names))

    def remove(self, path: str) -> Reply:
        try:
            self.filesystem.remove(path)
        except _FAILURES:
            return _failure("Remove failed")
        return Reply()