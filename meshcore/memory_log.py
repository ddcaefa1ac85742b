"""Bookkeeping of where allocations and releases happened."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class LogEntry:
    """One allocation or release site."""

    file: str
    line: int


@dataclass
class FileStatistics:
    """Allocation and release sites recorded for one source file."""

    file: str
    allocations: list[LogEntry] = field(default_factory=list)
    releases: list[LogEntry] = field(default_factory=list)

    @property
    def num_allocations(self) -> int:
        return len(self.allocations)

    @property
    def num_releases(self) -> int:
        return len(self.releases)

    @property
    def balanced(self) -> bool:
        """Whether every allocation from this file has a release."""
        return self.num_allocations == self.num_releases


def _group_by_file(entries: list[LogEntry]) -> list[list[LogEntry]]:
    """Group entries by file; later groups and later entries go second."""
    groups: list[list[LogEntry]] = []
    for entry in entries:
        if not groups:
            groups.append([entry])
            continue
        match = next((g for g in groups if g[0].file == entry.file), None)
        if match is not None:
            match.insert(1, entry)
        else:
            groups.insert(1, [entry])
    return groups


class MemoryLog:
    """Records allocation and release sites and reports imbalances."""

    def __init__(self) -> None:
        self._allocations: list[LogEntry] = []
        self._releases: list[LogEntry] = []

    @staticmethod
    def _add(entries: list[LogEntry], file: str, line: int) -> None:
        if not file:
            raise ValueError("a log entry needs a non-empty file name")
        entry = LogEntry(file, line)
        if entries:
            entries.insert(1, entry)
        else:
            entries.append(entry)

    def log_allocation(self, file: str, line: int) -> None:
        """Record an allocation made at file:line."""
        self._add(self._allocations, file, line)

    def log_release(self, file: str, line: int) -> None:
        """Record a release made at file:line."""
        self._add(self._releases, file, line)

    def statistics(self) -> list[FileStatistics]:
        """Per-file statistics for every file that allocated memory."""
        release_groups = {g[0].file: g for g in _group_by_file(self._releases)}
        return [
            FileStatistics(
                file=group[0].file,
                allocations=list(group),
                releases=list(release_groups.get(group[0].file, [])),
            )
            for group in _group_by_file(self._allocations)
        ]

    def format_report(
        self, list_detail_lines: bool = True, ignore_unimportant_info: bool = False
    ) -> str:
        """Text report of allocations and releases per file."""
        if not self._allocations or not self._releases:
            return "Memory log is empty, nothing print.\n"
        lines = ["Memory log:"]
        printed = False
        for stats in self.statistics():
            if stats.balanced and ignore_unimportant_info:
                continue
            printed = True
            marker = " " if stats.balanced else "*"
            lines.append(
                f"   {marker}File:{stats.file}. Allocations:{stats.num_allocations}."
                f" Releases:{stats.num_releases}."
            )
            if list_detail_lines:
                lines.extend(
                    f"        Allocation:{e.file}({e.line})" for e in stats.allocations
                )
                lines.extend(
                    f"        Release:{e.file}({e.line})" for e in stats.releases
                )
        if not printed:
            lines.append("    Nothing to print.")
        return "\n".join(lines) + "\n"