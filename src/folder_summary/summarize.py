"""
Main entry point for producing a folder summary: validate the inputs, open the
destination, walk the folder once and emit each selected file followed by the
optional statistics block.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import TextIO

from folder_summary.file_selector import SUMMARY_FILENAME, FolderWalker, SelectionConfig
from folder_summary.report import ReportContext, Reporter
from folder_summary.stats import MB, Aggregator, FileRecord, SummaryStats

OUTPUT_MODES = ("cli", "file")

LARGE_FILE_THRESHOLD = 10 * MB


class ConfigurationError(ValueError):
    """Invalid input detected before any walking begins."""


class WriteFailure(OSError):
    """The summary file cannot be written."""


@dataclass(frozen=True)
class SummaryResult:
    processed_count: int
    found_count: int
    stats: SummaryStats
    output_path: Path | None = None


def validate_folder(folder: str | Path) -> Path:
    """Check that `folder` is an existing, readable directory and return its absolute path."""
    if not str(folder):
        raise ConfigurationError("Folder path is required")
    path = Path(folder)
    if not path.is_dir():
        raise ConfigurationError(f"'{folder}' is not a valid directory")
    if not os.access(path, os.R_OK | os.X_OK):
        raise ConfigurationError(f"Cannot read directory '{folder}' (permission denied)")
    return path.resolve()


def _open_output(output_path: Path) -> TextIO:
    try:
        return open(output_path, "w", encoding="utf-8", newline="")
    except OSError as e:
        raise WriteFailure(f"Cannot write to output file: {output_path} ({e.strerror})") from e


def _file_size(path: Path) -> int:
    try:
        return path.stat().st_size
    except OSError:
        return 0


def _read_content(path: Path) -> str | None:
    # newline="" keeps carriage returns exactly as stored.
    try:
        with open(path, encoding="utf-8", errors="replace", newline="") as f:
            return f.read()
    except OSError:
        return None


def summarize_folder(
    folder: str | Path,
    *,
    include: list[str] | None = None,
    exclude: list[str] | None = None,
    include_hidden: bool = False,
    output: str = "cli",
    include_summary: bool = False,
    respect_gitignore: bool = False,
    stdout: TextIO | None = None,
    info_stream: TextIO | None = None,
    now: datetime | None = None,
) -> SummaryResult:
    """
    Summarize `folder` to stdout (`output="cli"`) or to `folder_summary.txt`
    inside it (`output="file"`, truncating any previous report).

    Raises `ConfigurationError` or `WriteFailure` before the walk starts.
    Problems with individual files never abort the run.
    """
    if output not in OUTPUT_MODES:
        raise ConfigurationError(f"'--output' value must be 'cli' or 'file' (got {output!r})")
    root = validate_folder(folder)

    walker = FolderWalker(
        SelectionConfig(
            include=include,
            exclude=exclude,
            include_hidden=include_hidden,
            respect_gitignore=respect_gitignore,
        )
    )

    output_path: Path | None = None
    if output == "file":
        output_path = root / SUMMARY_FILENAME
        out = _open_output(output_path)
    else:
        out = stdout if stdout is not None else sys.stdout

    reporter = Reporter(out, info_stream)
    if output_path is not None:
        reporter.info(f"Output file: {output_path}")

    aggregator = Aggregator()
    try:
        for entry in walker.walk(root):
            if not os.access(entry.path, os.R_OK):
                reporter.info(f"Skipping unreadable file: {entry.relative_path}")
                continue

            size = _file_size(entry.path)
            if size > LARGE_FILE_THRESHOLD:
                reporter.info(f"Warning: Large file ({size // MB}MB): {entry.relative_path}")

            record = FileRecord(relative_path=entry.relative_path, size=size)
            reporter.emit(record, _read_content(entry.path))
            aggregator.record(record)

            if output_path is not None:
                reporter.info(f"Added: {entry.relative_path}")

        stats = aggregator.finalize()
        if include_summary and stats.processed_count > 0:
            reporter.emit_summary(
                stats,
                ReportContext(
                    found_count=walker.found_count,
                    policy=walker.policy,
                    source_dir=root,
                    generated_at=now or datetime.now(),
                    output_path=output_path,
                ),
            )
    finally:
        if output_path is not None:
            out.close()
        else:
            out.flush()

    if output_path is not None:
        reporter.info(
            f"Summary complete: {stats.processed_count}/{walker.found_count} files processed"
        )
        reporter.info(f"Output saved to: {output_path}")
    elif not include_summary:
        reporter.info(f"Processed {stats.processed_count}/{walker.found_count} files")

    return SummaryResult(
        processed_count=stats.processed_count,
        found_count=walker.found_count,
        stats=stats,
        output_path=output_path,
    )
