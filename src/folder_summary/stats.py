"""Running statistics over the files included in a summary."""

from __future__ import annotations

import posixpath
from dataclasses import dataclass, field

NO_EXTENSION = "no_extension"

KB = 1024
MB = 1024 * 1024
GB = 1024 * 1024 * 1024


@dataclass(frozen=True)
class FileRecord:
    relative_path: str
    size: int


@dataclass
class SummaryStats:
    extension_counts: dict[str, int] = field(default_factory=dict)
    total_size: int = 0
    largest_file: tuple[str, int] | None = None
    processed_count: int = 0

    def sorted_extensions(self) -> list[tuple[str, int]]:
        return sorted(self.extension_counts.items())

    def percentage(self, count: int) -> float:
        if self.processed_count == 0:
            return 0.0
        return count / self.processed_count * 100


def extension_key(relative_path: str) -> str:
    """
    `.py` for `src/app.py`, `.bashrc` for `.bashrc`, `no_extension` for
    `Makefile`. Case is preserved.
    """
    basename = posixpath.basename(relative_path)
    if "." not in basename:
        return NO_EXTENSION
    return "." + basename.rsplit(".", 1)[1]


def format_size(size: int) -> str:
    if size < KB:
        return f"{size} bytes"
    if size < MB:
        return f"{size / KB:.2f} KB"
    if size < GB:
        return f"{size / MB:.2f} MB"
    return f"{size / GB:.2f} GB"


def format_mb(size: int) -> str:
    return f"{size / MB:.2f} MB"


class Aggregator:
    """
    Accumulates per-file statistics during the walk. Call `record()` once
    per included file and `finalize()` once at the end.
    """

    def __init__(self) -> None:
        self._stats: SummaryStats = SummaryStats()

    def record(self, record: FileRecord) -> None:
        stats = self._stats
        key = extension_key(record.relative_path)
        stats.extension_counts[key] = stats.extension_counts.get(key, 0) + 1
        stats.total_size += record.size
        stats.processed_count += 1
        # Strictly larger: the first of equally large files wins, empty files never do.
        largest_size = stats.largest_file[1] if stats.largest_file else 0
        if record.size > largest_size:
            stats.largest_file = (record.relative_path, record.size)

    def finalize(self) -> SummaryStats:
        return self._stats
