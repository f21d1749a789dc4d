"""
Formatting of the summary output: one `# <path>` section per file, then an
optional statistics block.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import TextIO

from folder_summary.file_selector import PatternSet, SelectionPolicy
from folder_summary.stats import FileRecord, SummaryStats, format_mb, format_size

READ_ERROR_PLACEHOLDER = "[Error reading file content]"

SEPARATOR = "=" * 80


@dataclass(frozen=True)
class ReportContext:
    """Run details echoed in the statistics block."""

    found_count: int
    policy: SelectionPolicy
    source_dir: Path
    generated_at: datetime
    output_path: Path | None = None


class Reporter:
    """
    Writes report text to `out` (stdout or the summary file) and informational
    messages to `info_stream` (stderr by default).
    """

    def __init__(self, out: TextIO, info_stream: TextIO | None = None) -> None:
        self.out: TextIO = out
        self.info_stream: TextIO = info_stream if info_stream is not None else sys.stderr

    def _line(self, text: str = "") -> None:
        self.out.write(text + "\n")

    def info(self, message: str) -> None:
        print(message, file=self.info_stream)

    def emit(self, record: FileRecord, content: str | None) -> None:
        """Write one file section. `content=None` means the file could not be read."""
        self._line(f"# {record.relative_path}")
        self._line(READ_ERROR_PLACEHOLDER if content is None else content.rstrip("\n"))
        self._line()
        self._line()

    def emit_summary(self, stats: SummaryStats, context: ReportContext) -> None:
        self._line()
        self._line(SEPARATOR)
        self._line("# SUMMARY STATISTICS")
        self._line(SEPARATOR)
        self._line()

        self._line("## Files Processed")
        self._line(f"- Total files analyzed: {stats.processed_count}")
        self._line(f"- Total files found: {context.found_count}")
        if context.found_count > stats.processed_count:
            self._line(f"- Files filtered out: {context.found_count - stats.processed_count}")
        self._line()

        self._line("## Size Information")
        self._line(f"- Total size: {format_size(stats.total_size)}")
        if stats.largest_file is not None:
            path, size = stats.largest_file
            self._line(f"- Largest file: {path} ({format_mb(size)})")
        self._line()

        if stats.extension_counts:
            self._line("## File Types Breakdown")
            for ext, count in stats.sorted_extensions():
                self._line(f"- {ext}: {count} files ({stats.percentage(count):.1f}%)")
            self._line()

        self._emit_filters(context.policy)

        self._line("## Generation Info")
        self._line(f"- Generated on: {context.generated_at:%Y-%m-%d %H:%M:%S}")
        self._line(f"- Source directory: {context.source_dir}")
        if context.output_path is not None:
            self._line(f"- Output file: {context.output_path}")
        self._line()
        self._line(SEPARATOR)

    def _emit_filters(self, policy: SelectionPolicy) -> None:
        self._line("## Applied Filters")
        if policy.include is not None:
            self._line(f"- Include patterns: {_display(policy.include)}")
        if policy.exclude is not None:
            self._line(f"- Exclude patterns: {_display(policy.exclude)}")
        if policy.exclude_hidden:
            self._line("- Hidden files: excluded (default)")
        else:
            self._line("- Hidden files: included")
        self._line()


def _display(patterns: PatternSet) -> str:
    return patterns.display() or "(none)"
