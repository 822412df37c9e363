"""In-memory bitmap of data blocks in use."""

from __future__ import annotations

import errno

from .disk import NUM_BLOCKS, RESERVED_BLOCKS, DiskError


class BlockManager:
    """Hands out data blocks; the reserved leading blocks are never given out."""

    def __init__(self) -> None:
        self._used = [index < RESERVED_BLOCKS for index in range(NUM_BLOCKS)]

    def alloc(self) -> int:
        """Mark the lowest free block as used and return its number."""
        block = next(
            (n for n in range(RESERVED_BLOCKS, NUM_BLOCKS) if not self._used[n]), None
        )
        if block is None:
            raise DiskError(errno.ENOSPC, "no free data blocks")
        self._used[block] = True
        return block

    def free(self, block_num: int) -> None:
        """Release a block; reserved or out-of-range numbers are ignored."""
        if RESERVED_BLOCKS <= block_num < NUM_BLOCKS:
            self._used[block_num] = False

    def is_used(self, block_num: int) -> bool:
        if not 0 <= block_num < NUM_BLOCKS:
            raise ValueError(f"block {block_num} out of range")
        return self._used[block_num]