"""A pooled allocator that hands out aligned cells from fixed-size blocks.

Requests are rounded up to one of a fixed set of size levels. Each level
owns a chain of blocks, and every block is split into equally sized cells.
Addresses are plain integers in a private address space; the bytes behind
an allocation are reached through :meth:`TinyMemory.view`.
"""

from __future__ import annotations

from dataclasses import dataclass, field

BYTES_LEVELS: tuple[int, ...] = (
    2, 4, 8, 16, 32, 64, 128, 256, 512, 1024,
    2048, 4096, 9216, 18432, 36864, 73728, 147456, 294912, 589824, 1179648,
    2359296, 4718592, 9437184, 18874368, 37748736,
)
"""Cell size in bytes of each level."""

ENABLED_CELLS_PER_BLOCK: tuple[int, ...] = (
    100, 100, 100, 100, 100, 100, 100, 100, 100, 100,
    100, 100, 50, 50, 30, 15, 10, 5, 2, 1,
    1, 1, 1, 1, 1,
)
"""Number of usable cells in one block of each level."""

LEGAL_ALIGNMENTS: tuple[int, ...] = (2, 4, 8, 16, 32, 64)
"""Address alignments the allocator accepts."""

NUM_CELLS_PER_BLOCK = 100
"""Upper bound on the cells of any block."""

NUM_LEVELS = len(BYTES_LEVELS)
MAX_ALLOCATION = BYTES_LEVELS[-1]

_ADDRESS_BASE = 0x10000
_BLOCK_GAP = 64


class MemoryError_(MemoryError):
    """Raised for invalid allocations and frees."""


@dataclass
class _Block:
    level: int
    base: int
    cell_stride: int
    free_list: list[int]
    in_use: list[bool]
    cells: dict[int, bytearray] = field(default_factory=dict)

    @property
    def num_cells(self) -> int:
        return len(self.in_use)

    @property
    def tail(self) -> int:
        return self.base + self.cell_stride * self.num_cells

    @property
    def num_free(self) -> int:
        return len(self.free_list)

    def is_unused(self) -> bool:
        return self.num_free == self.num_cells


class TinyMemory:
    """Pool allocator with per-size-level block chains."""

    def __init__(self, alignment: int = 4, reserved_blocks: int = 0) -> None:
        if alignment not in LEGAL_ALIGNMENTS:
            raise ValueError(
                f"illegal alignment {alignment}; expected one of {LEGAL_ALIGNMENTS}"
            )
        if reserved_blocks < 0:
            raise ValueError("reserved_blocks must not be negative")
        self._alignment = alignment
        self._levels: list[list[_Block]] = [[] for _ in range(NUM_LEVELS)]
        self._next_base = _ADDRESS_BASE
        for level in range(NUM_LEVELS):
            for _ in range(reserved_blocks):
                self._new_block(level)

    @property
    def alignment(self) -> int:
        """Alignment of every address handed out."""
        return self._alignment

    # -- public interface -------------------------------------------------

    def level_for(self, num_bytes: int) -> int:
        """Index of the smallest size level that holds num_bytes."""
        if num_bytes < 0:
            raise ValueError("num_bytes must not be negative")
        if num_bytes > MAX_ALLOCATION:
            raise MemoryError_(
                f"cannot allocate {num_bytes} bytes; the limit is {MAX_ALLOCATION}"
            )
        return next(i for i, size in enumerate(BYTES_LEVELS) if num_bytes <= size)

    def allocate(self, num_bytes: int) -> int:
        """Reserve a cell of at least num_bytes and return its aligned address."""
        level = self.level_for(num_bytes)
        block = self._block_with_free_cell(level)
        index = block.free_list.pop()
        if block.in_use[index]:
            raise MemoryError_("free list refers to a cell in use")
        block.in_use[index] = True
        block.cells.setdefault(index, bytearray(block.cell_stride))
        raw = block.base + block.cell_stride * index
        return raw + self._offset(raw)

    def allocate_zero(self, num_bytes: int) -> int:
        """Like allocate, but with every byte of the cell set to zero."""
        address = self.allocate(num_bytes)
        block, index = self._locate(address)
        cell = block.cells[index]
        cell[:] = bytes(len(cell))
        return address

    def free(self, address: int | None) -> None:
        """Return the cell at address to its block; None is ignored."""
        if address is None:
            return
        block, index = self._locate(address)
        if not block.in_use[index]:
            raise MemoryError_("Free the same pointer more than once.")
        block.free_list.append(index)
        block.in_use[index] = False

    def view(self, address: int, size: int | None = None) -> memoryview:
        """Writable view of the bytes of an allocated address."""
        block, index = self._locate(address)
        if not block.in_use[index]:
            raise MemoryError_(f"address {address:#x} is not allocated")
        capacity = BYTES_LEVELS[block.level]
        if size is None:
            size = capacity
        if size < 0 or size > capacity:
            raise MemoryError_(
                f"view of {size} bytes exceeds the cell capacity of {capacity}"
            )
        raw = block.base + block.cell_stride * index
        start = address - raw
        return memoryview(block.cells[index])[start:start + size]

    def cleanup(self) -> None:
        """Destroy every block that has no cell in use."""
        for level, blocks in enumerate(self._levels):
            self._levels[level] = [b for b in blocks if not b.is_unused()]

    def debug_dump(self) -> str:
        """Text describing every level's block chain and free lists."""
        lines = [f"TinyMemory:({NUM_CELLS_PER_BLOCK})"]
        for level, blocks in enumerate(self._levels):
            header = f"Block {BYTES_LEVELS[level]} {ENABLED_CELLS_PER_BLOCK[level]}:"
            if not blocks:
                lines.append("    " + header + "Not initialized")
                continue
            for depth, block in enumerate(blocks, start=1):
                free = "".join(f"{i}," for i in block.free_list)
                lines.append("    " * depth + header + "FreeList:" + free)
        return "\n".join(lines) + "\n\n"

    def has_unreleased_memory(self) -> bool:
        """Whether any cell is still allocated."""
        return any(
            not block.is_unused() for blocks in self._levels for block in blocks
        )

    def bytes_used(self) -> int:
        """Bytes, counted by cell size, currently handed out."""
        return sum(
            (block.num_cells - block.num_free) * BYTES_LEVELS[block.level]
            for blocks in self._levels
            for block in blocks
        )

    def bytes_reserved_unused(self) -> int:
        """Bytes, counted by cell size, held in free cells."""
        return sum(
            block.num_free * BYTES_LEVELS[block.level]
            for blocks in self._levels
            for block in blocks
        )

    # -- internals --------------------------------------------------------

    def _offset(self, raw: int) -> int:
        return self._alignment - (raw & (self._alignment - 1))

    def _new_block(self, level: int) -> _Block:
        cells = ENABLED_CELLS_PER_BLOCK[level]
        stride = BYTES_LEVELS[level] + self._alignment
        block = _Block(
            level=level,
            base=self._next_base,
            cell_stride=stride,
            free_list=list(range(cells)),
            in_use=[False] * cells,
        )
        end = block.tail + _BLOCK_GAP
        self._next_base = -(-end // _BLOCK_GAP) * _BLOCK_GAP
        self._levels[level].append(block)
        return block

    def _block_with_free_cell(self, level: int) -> _Block:
        for block in self._levels[level]:
            if block.free_list:
                return block
        return self._new_block(level)

    def _locate(self, address: int) -> tuple[_Block, int]:
        for blocks in self._levels:
            for block in blocks:
                rel = address - 1 - block.base
                if 0 <= rel < block.tail - block.base:
                    index = rel // block.cell_stride
                    raw = block.base + block.cell_stride * index
                    if raw + self._offset(raw) != address:
                        raise MemoryError_(
                            f"Free a undefined pointer {address:#x}. "
                            "Maybe the pointer address has an offset."
                        )
                    return block, index
        raise MemoryError_(
            f"Free a undefined pointer {address:#x}. "
            "Maybe the pointer is not allocated from the TinyMemory."
        )