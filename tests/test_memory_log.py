import pytest

from meshcore.memory_log import LogEntry, MemoryLog


def test_empty_log_report():
    assert MemoryLog().format_report(True, False) == (
        "Memory log is empty, nothing print.\n"
    )


def test_allocations_without_releases_report_empty():
    log = MemoryLog()
    log.log_allocation("a.cpp", 1)
    assert log.format_report(True, False) == "Memory log is empty, nothing print.\n"


def test_empty_file_name_rejected():
    log = MemoryLog()
    with pytest.raises(ValueError):
        log.log_allocation("", 3)
    with pytest.raises(ValueError):
        log.log_release("", 3)


def test_balanced_report_with_details():
    log = MemoryLog()
    log.log_allocation("a.cpp", 10)
    log.log_release("a.cpp", 20)
    assert log.format_report(True, False) == (
        "Memory log:\n"
        "    File:a.cpp. Allocations:1. Releases:1.\n"
        "        Allocation:a.cpp(10)\n"
        "        Release:a.cpp(20)\n"
    )


def test_balanced_report_ignored():
    log = MemoryLog()
    log.log_allocation("a.cpp", 10)
    log.log_release("a.cpp", 20)
    assert log.format_report(False, True) == "Memory log:\n    Nothing to print.\n"


def test_unbalanced_file_is_marked():
    log = MemoryLog()
    log.log_allocation("a.cpp", 1)
    log.log_allocation("a.cpp", 2)
    log.log_release("a.cpp", 3)
    report = log.format_report(False, True)
    assert "   *File:a.cpp. Allocations:2. Releases:1.\n" in report


def test_statistics_grouping_and_order():
    log = MemoryLog()
    log.log_allocation("a.cpp", 1)
    log.log_allocation("b.cpp", 2)
    log.log_allocation("a.cpp", 3)
    log.log_allocation("c.cpp", 4)
    log.log_release("b.cpp", 5)
    stats = log.statistics()
    assert [s.file for s in stats] == ["a.cpp", "b.cpp", "c.cpp"]
    assert stats[0].allocations == [LogEntry("a.cpp", 1), LogEntry("a.cpp", 3)]
    assert stats[1].releases == [LogEntry("b.cpp", 5)]
    assert stats[1].balanced
    assert not stats[0].balanced
    assert stats[2].num_releases == 0