"""The process-wide heap and a leak detector built on it."""

from __future__ import annotations

import sys
from types import TracebackType
from typing import TextIO

from meshcore.tiny_heap import TinyHeap

_heap: TinyHeap | None = None


def default_heap() -> TinyHeap:
    """The shared heap, created on first use."""
    global _heap
    if _heap is None:
        _heap = TinyHeap()
    return _heap


class MemoryLeakDetector:
    """Context manager that reports unreleased memory on exit."""

    def __init__(
        self,
        list_detail_lines: bool = True,
        ignore_unimportant_info: bool = False,
        realtime_bytes_info: bool = True,
        heap: TinyHeap | None = None,
        stream: TextIO | None = None,
    ) -> None:
        self.list_detail_lines = list_detail_lines
        self.ignore_unimportant_info = ignore_unimportant_info
        self.heap = heap if heap is not None else default_heap()
        self.heap.realtime_bytes_info = realtime_bytes_info
        self._stream = stream

    def __enter__(self) -> MemoryLeakDetector:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        stream = self._stream if self._stream is not None else sys.stdout
        stream.write(self.report())

    def report(self) -> str:
        """Leak status, byte counts and the heap's site log."""
        leak = "true" if self.heap.has_unreleased_memory() else "false"
        return (
            f"Memory leak: {leak}\n"
            f"Bytes Used:{self.heap.bytes_used()}, "
            f"ReservedUnuned:{self.heap.bytes_reserved_unused()}\n"
            + self.heap.format_log(self.list_detail_lines, self.ignore_unimportant_info)
        )