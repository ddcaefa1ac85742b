"""A heap over TinyMemory that can log allocation sites and byte counts."""

from __future__ import annotations

import sys
from typing import TextIO

from meshcore.memory_log import MemoryLog
from meshcore.tiny_memory import TinyMemory


class TinyHeap:
    """Allocator front end with optional site logging and usage printing.

    Passing ``file`` (and ``line``) to allocate or free records the site
    in the heap's memory log.
    """

    def __init__(
        self, realtime_bytes_info: bool = True, stream: TextIO | None = None
    ) -> None:
        self._memory = TinyMemory(4)
        self._log = MemoryLog()
        self.realtime_bytes_info = realtime_bytes_info
        self._stream = stream

    @property
    def log(self) -> MemoryLog:
        """The log of allocation and release sites."""
        return self._log

    def _print_bytes_info(self) -> None:
        if self.realtime_bytes_info:
            stream = self._stream if self._stream is not None else sys.stdout
            stream.write(
                f"Heap Bytes Used:{self._memory.bytes_used()}, "
                f"ReservedUnuned:{self._memory.bytes_reserved_unused()}\n"
            )

    def allocate(self, num_bytes: int, file: str | None = None, line: int = 0) -> int:
        """Allocate num_bytes and return the address."""
        if file is not None:
            self._log.log_allocation(file, line)
        address = self._memory.allocate(num_bytes)
        self._print_bytes_info()
        return address

    def allocate_zero(
        self, num_bytes: int, file: str | None = None, line: int = 0
    ) -> int:
        """Allocate num_bytes of zeroed memory and return the address."""
        if file is not None:
            self._log.log_allocation(file, line)
        address = self._memory.allocate_zero(num_bytes)
        self._print_bytes_info()
        return address

    def free(self, address: int | None, file: str | None = None, line: int = 0) -> None:
        """Release the memory at address; None is ignored."""
        self._memory.free(address)
        if address is not None:
            if file is not None:
                self._log.log_release(file, line)
            self._print_bytes_info()

    def view(self, address: int, size: int | None = None) -> memoryview:
        """Writable view of the bytes of an allocated address."""
        return self._memory.view(address, size)

    def gc(self) -> None:
        """Give back the reserved blocks that hold no live allocation."""
        self._memory.cleanup()

    def has_unreleased_memory(self) -> bool:
        """Whether any allocation is still outstanding."""
        return self._memory.has_unreleased_memory()

    def format_log(
        self, list_detail_lines: bool = True, ignore_unimportant_info: bool = False
    ) -> str:
        """Text report of the logged allocation and release sites."""
        return self._log.format_report(list_detail_lines, ignore_unimportant_info)

    def bytes_used(self) -> int:
        """Bytes currently handed out."""
        return self._memory.bytes_used()

    def bytes_reserved_unused(self) -> int:
        """Bytes reserved but free."""
        return self._memory.bytes_reserved_unused()