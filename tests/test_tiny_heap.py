import io

import pytest

from meshcore.tiny_heap import TinyHeap
from meshcore.tiny_memory import BYTES_LEVELS, MemoryError_


def test_allocate_and_free_tracks_usage():
    heap = TinyHeap(realtime_bytes_info=False)
    address = heap.allocate(3)
    assert heap.has_unreleased_memory()
    assert heap.bytes_used() == BYTES_LEVELS[1]
    heap.free(address)
    assert not heap.has_unreleased_memory()
    assert heap.bytes_used() == 0


def test_realtime_info_printed_on_allocate_and_free():
    stream = io.StringIO()
    heap = TinyHeap(realtime_bytes_info=True, stream=stream)
    address = heap.allocate(10)
    heap.free(address)
    lines = stream.getvalue().splitlines()
    assert len(lines) == 2
    assert all(line.startswith("Heap Bytes Used:") for line in lines)
    assert lines[-1] == (
        f"Heap Bytes Used:0, ReservedUnuned:{heap.bytes_reserved_unused()}"
    )


def test_free_none_prints_nothing():
    stream = io.StringIO()
    heap = TinyHeap(realtime_bytes_info=True, stream=stream)
    heap.free(None)
    assert stream.getvalue() == ""


def test_realtime_info_can_be_switched_off():
    stream = io.StringIO()
    heap = TinyHeap(realtime_bytes_info=False, stream=stream)
    heap.free(heap.allocate(8))
    assert stream.getvalue() == ""


def test_sites_are_logged():
    heap = TinyHeap(realtime_bytes_info=False)
    address = heap.allocate(16, "x.cpp", 5)
    heap.free(address, "x.cpp", 9)
    report = heap.format_log(True, False)
    assert "Allocation:x.cpp(5)" in report
    assert "Release:x.cpp(9)" in report
    assert heap.log.statistics()[0].balanced


def test_double_free_raises():
    heap = TinyHeap(realtime_bytes_info=False)
    address = heap.allocate(4)
    heap.free(address)
    with pytest.raises(MemoryError_):
        heap.free(address)


def test_allocate_zero_gives_zero_bytes():
    heap = TinyHeap(realtime_bytes_info=False)
    first = heap.allocate(32)
    heap.view(first, 32)[:] = b"\xff" * 32
    heap.free(first)
    second = heap.allocate_zero(32)
    assert bytes(heap.view(second, 32)) == bytes(32)