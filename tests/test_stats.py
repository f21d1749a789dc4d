"""Tests for summary statistics."""

from __future__ import annotations

from folder_summary.stats import (
    NO_EXTENSION,
    Aggregator,
    FileRecord,
    extension_key,
    format_mb,
    format_size,
)


def test_extension_key():
    assert extension_key("src/app.py") == ".py"
    assert extension_key("archive.tar.gz") == ".gz"
    assert extension_key("README.MD") == ".MD"
    assert extension_key(".bashrc") == ".bashrc"
    assert extension_key("Makefile") == NO_EXTENSION
    assert extension_key("dir.d/Makefile") == NO_EXTENSION


def test_format_size_thresholds():
    assert format_size(0) == "0 bytes"
    assert format_size(1023) == "1023 bytes"
    assert format_size(1024) == "1.00 KB"
    assert format_size(2148) == "2.10 KB"
    assert format_size(1_048_576) == "1.00 MB"
    assert format_size(1_073_741_824) == "1.00 GB"


def test_format_mb_always_megabytes():
    assert format_mb(2048) == "0.00 MB"
    assert format_mb(5 * 1_048_576) == "5.00 MB"


def test_aggregator_totals():
    agg = Aggregator()
    agg.record(FileRecord("a.txt", 100))
    agg.record(FileRecord("b.txt", 2048))
    agg.record(FileRecord("run.sh", 10))
    stats = agg.finalize()
    assert stats.processed_count == 3
    assert stats.total_size == 2158
    assert stats.largest_file == ("b.txt", 2048)
    assert stats.sorted_extensions() == [(".sh", 1), (".txt", 2)]
    assert round(stats.percentage(2), 1) == 66.7


def test_aggregator_first_largest_wins():
    agg = Aggregator()
    agg.record(FileRecord("first.txt", 50))
    agg.record(FileRecord("second.txt", 50))
    assert agg.finalize().largest_file == ("first.txt", 50)


def test_aggregator_empty_files_never_largest():
    agg = Aggregator()
    agg.record(FileRecord("empty.txt", 0))
    stats = agg.finalize()
    assert stats.largest_file is None
    assert stats.processed_count == 1


def test_percentage_without_files():
    assert Aggregator().finalize().percentage(0) == 0.0
