# toyos

A small collection of operating-system style services, written as plain
Python classes:

- **A simple block file system** (`toyos.sfs`) stored in a single disk image
  file: 4096-byte blocks, a block bitmap, inodes with twelve direct pointers
  and one single-indirect block, and directories made of fixed-width entries.
- **A key-value store** (`toyos.kvstore`) that records every change in a
  write-ahead log (`toyos.wal`) before applying it, keeps recently used
  entries in an LRU cache (`toyos.lru_cache`), and replays the log when it is
  created.
- **A syscall dispatcher** (`toyos.syscalls`) that routes a syscall name and
  its string arguments to a handler and reports the outcome.

The package has no runtime dependencies beyond the standard library.

## The file system

`SimpleFileSystem` opens a disk image, creating a zero-filled one of 1024
blocks if the file does not exist, and offers path-based operations:

- `create(path)` and `mkdir(path)` return the new inode number.
- `open(path)` returns a descriptor (starting at 3, never reused); a missing
  file is created first.
- `write(fd, data)` writes bytes at the descriptor's offset and returns the
  count; `read(fd, size)` returns up to `size` bytes.
- `seek(fd, offset, whence)` moves the offset (`whence` 0 from the start,
  1 from the current position, 2 from the end) and returns the new position.
- `listdir(path)` returns the names in a directory; `remove(path)` unlinks
  an entry and frees its data blocks.

Failures raise `FileSystemError`, a subclass of `OSError` carrying an `errno`.
The object works as a context manager and `close()` closes the image.

```python
from toyos.sfs import SimpleFileSystem

with SimpleFileSystem("disk.img") as fs:
    fs.mkdir("/testdir")
    fs.create("/testdir/hello.txt")

    fd = fs.open("/testdir/hello.txt")
    fs.write(fd, b"Hello, SFS!")
    fs.seek(fd, 0, 0)
    print(fs.read(fd, 5))            # b'Hello'

    print(fs.listdir("/testdir"))    # ['hello.txt']
    fs.remove("/testdir/hello.txt")
```

The lower layers are usable on their own: `toyos.disk.Disk` reads and writes
whole blocks (raising `DiskError`), `toyos.block_manager.BlockManager` hands
out free data blocks, `toyos.inode.InodeTable` stores `Inode` records, and
`toyos.directory.Directory` maps names to inode numbers.

`toyos.fs_service.FileSystemService` wraps the file system in
request/response form: each method returns a `Reply` carrying the result
(`inum`, `fd`, `data` or `entries`) or, on failure, `success=False` and an
error message, instead of raising. `listdir` reports an error for an empty
directory as well as for a missing one.

## The key-value store

```python
from toyos.kvstore import KVStoreService

store = KVStoreService("wal.log", cache_capacity=1000)
store.put("k1", "v1")      # True
store.get("k1")            # 'v1'
store.delete("k1")         # True
store.get("k1")            # None
```

Every `put` and `delete` is appended to the log first, so a new
`KVStoreService` on the same log file comes back with the same contents.
Log records are space-separated, so keys and values should not contain
whitespace; a value is read back only up to its first space.

`parse_flags(argv)` reads `--cache_capacity=`, `--port=` and `--log_file=`
arguments into a `ServerConfig`, ignoring anything else.

The building blocks can be used directly:

```python
from toyos.lru_cache import LRUCache
from toyos.wal import WAL

cache = LRUCache(3)
cache.put("k1", "v1")
cache.get("k1")            # 'v1'
cache.keys()               # most recently used first

with WAL("test_wal.log") as wal:
    wal.append_put("foo", "123")
    wal.append_delete("foo")
    entries = wal.recover()  # list of WALEntry
```

## Syscalls

```python
from toyos.syscalls import dispatch_syscall, handle_syscall

dispatch_syscall("open", ["myfile.txt"])   # 'Opened file: myfile.txt'
dispatch_syscall("mmap", [])               # 'Unknown syscall'
response = handle_syscall("write", ["3", "hello"])
```

`handle_syscall` returns a `SyscallResponse` with status 0 and the result on
success, or status 1 and an error message when the handler fails (for
example, when too few arguments are given). The handlers only describe the
call; they do not touch any real files.

## What this package does not do

- It runs no network server and installs no command. The services are plain
  Python objects to call from your own code; `ServerConfig.port` is only
  recorded, nothing listens on it.
- The file system keeps its block and inode allocation maps in memory only.
  Reopening an existing image keeps its data and directory entries, but the
  allocation maps start fresh, so new files may reuse blocks or inode numbers
  that are already taken.

## Running the tests

Install the `test` extra and run `pytest` from the project directory.