import io

import pytest

from meshcore.memory import MemoryLeakDetector, default_heap
from meshcore.tiny_heap import TinyHeap


def test_default_heap_is_shared():
    heap = default_heap()
    heap.realtime_bytes_info = False
    before = default_heap().bytes_used()
    address = heap.allocate(4)
    assert default_heap().bytes_used() == before + 4
    heap.free(address)
    assert default_heap().bytes_used() == before


def test_report_of_fresh_heap():
    detector = MemoryLeakDetector(
        heap=TinyHeap(realtime_bytes_info=False), realtime_bytes_info=False
    )
    assert detector.report() == (
        "Memory leak: false\n"
        "Bytes Used:0, ReservedUnuned:0\n"
        "Memory log is empty, nothing print.\n"
    )


def test_detector_sets_realtime_flag():
    heap = TinyHeap(realtime_bytes_info=True)
    MemoryLeakDetector(realtime_bytes_info=False, heap=heap)
    assert heap.realtime_bytes_info is False


def test_leak_reported_on_exit():
    stream = io.StringIO()
    heap = TinyHeap(realtime_bytes_info=False)
    with MemoryLeakDetector(False, False, False, heap=heap, stream=stream):
        heap.allocate(100, "leak.cpp", 7)
        heap.free(heap.allocate(4, "leak.cpp", 8), "leak.cpp", 9)
    output = stream.getvalue()
    assert output.startswith("Memory leak: true\n")
    assert "*File:leak.cpp. Allocations:2. Releases:1." in output


def test_no_leak_reported_on_exit():
    stream = io.StringIO()
    heap = TinyHeap(realtime_bytes_info=False)
    with MemoryLeakDetector(True, True, False, heap=heap, stream=stream):
        heap.free(heap.allocate(4, "ok.cpp", 1), "ok.cpp", 2)
    assert stream.getvalue() == (
        "Memory leak: false\n"
        f"Bytes Used:0, ReservedUnuned:{heap.bytes_reserved_unused()}\n"
        "Memory log:\n"
        "    Nothing to print.\n"
    )


def test_report_written_even_when_exception_raised():
    stream = io.StringIO()
    heap = TinyHeap(realtime_bytes_info=False)
    with pytest.raises(RuntimeError):
        with MemoryLeakDetector(heap=heap, stream=stream, realtime_bytes_info=False):
            raise RuntimeError("boom")
    assert stream.getvalue().startswith("Memory leak: false\n")