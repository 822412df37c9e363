import pytest

from toyos.block_manager import BlockManager
from toyos.directory import ENTRIES_PER_BLOCK, NAME_MAX, Directory
from toyos.disk import NDIRECT, NUM_INODES, Disk, DiskError
from toyos.inode import DIR_MODE, ROOT_INUM, Inode, InodeTable


@pytest.fixture
def fs(tmp_path):
    with Disk(tmp_path / "disk.img") as disk:
        inodes = InodeTable(disk)
        blocks = BlockManager()
        yield inodes, blocks, Directory(disk, inodes, blocks)


def test_add_then_lookup(fs):
    _, _, directory = fs
    directory.add(ROOT_INUM, "hello.txt", 5)
    assert directory.lookup(ROOT_INUM, "hello.txt") == 5


def test_lookup_missing_is_none(fs):
    _, _, directory = fs
    directory.add(ROOT_INUM, "a", 3)
    assert directory.lookup(ROOT_INUM, "b") is None


def test_list_in_insertion_order(fs):
    _, _, directory = fs
    for inum, name in enumerate(["x", "y", "z"], start=2):
        directory.add(ROOT_INUM, name, inum)
    assert directory.list(ROOT_INUM) == ["x", "y", "z"]


def test_empty_directory_lists_nothing(fs):
    _, _, directory = fs
    assert directory.list(ROOT_INUM) == []


def test_remove(fs):
    _, _, directory = fs
    directory.add(ROOT_INUM, "gone", 4)
    assert directory.remove(ROOT_INUM, "gone") is True
    assert directory.lookup(ROOT_INUM, "gone") is None
    assert directory.remove(ROOT_INUM, "gone") is False


def test_removed_slot_is_reused(fs):
    _, _, directory = fs
    directory.add(ROOT_INUM, "a", 2)
    directory.add(ROOT_INUM, "b", 3)
    directory.remove(ROOT_INUM, "a")
    directory.add(ROOT_INUM, "c", 4)
    assert directory.list(ROOT_INUM) == ["c", "b"]


def test_entries_spill_into_indirect_blocks(fs):
    inodes, blocks, directory = fs
    names = [f"f{i}" for i in range(ENTRIES_PER_BLOCK * NDIRECT + 5)]
    for i, name in enumerate(names):
        directory.add(ROOT_INUM, name, (i % (NUM_INODES - 2)) + 2)
    assert directory.list(ROOT_INUM) == names
    assert directory.lookup(ROOT_INUM, names[-1]) == ((len(names) - 1) % (NUM_INODES - 2)) + 2
    root = inodes.read(ROOT_INUM)
    assert all(root.direct)
    assert blocks.is_used(root.indirect)


def test_remove_from_indirect_block(fs):
    _, _, directory = fs
    names = [f"n{i}" for i in range(ENTRIES_PER_BLOCK * NDIRECT + 2)]
    for name in names:
        directory.add(ROOT_INUM, name, 9)
    assert directory.remove(ROOT_INUM, names[-1]) is True
    assert directory.list(ROOT_INUM) == names[:-1]


def test_long_name_is_truncated(fs):
    _, _, directory = fs
    long_name = "n" * 300
    directory.add(ROOT_INUM, long_name, 6)
    assert directory.lookup(ROOT_INUM, long_name[:NAME_MAX]) == 6
    assert directory.lookup(ROOT_INUM, long_name) is None
    assert directory.list(ROOT_INUM) == [long_name[:NAME_MAX]]


def test_new_directory_allocates_its_first_block(fs):
    inodes, blocks, directory = fs
    inum = inodes.alloc()
    inodes.write(inum, Inode(mode=DIR_MODE))
    directory.add(inum, "child", 7)
    assert directory.list(inum) == ["child"]
    assert blocks.is_used(inodes.read(inum).direct[0])


def test_add_without_free_blocks_raises(fs):
    inodes, blocks, directory = fs
    inum = inodes.alloc()
    inodes.write(inum, Inode(mode=DIR_MODE))
    with pytest.raises(DiskError):
        while True:
            blocks.alloc()
    with pytest.raises(DiskError):
        directory.add(inum, "child", 7)


def test_invalid_directory_inode_raises(fs):
    _, _, directory = fs
    with pytest.raises(ValueError):
        directory.lookup(0, "a")