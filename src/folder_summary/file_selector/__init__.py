"""
Self-contained file selection: glob/regex include and exclude patterns,
hidden-file handling and a deterministic directory walk.

No imports from `folder_summary` outside this package.

Usage::

    from folder_summary.file_selector import FolderWalker, SelectionConfig

    config = SelectionConfig(include=["*.py", "*.sh"], exclude=["test_*"])
    walker = FolderWalker(config)
    for entry in walker.walk("path/to/project"):
        print(entry.relative_path)
"""

from folder_summary.file_selector.patterns import (
    Matcher,
    PatternSet,
    compile_pattern,
    glob_to_regex,
    parse_patterns,
)
from folder_summary.file_selector.selector import Decision, SelectionPolicy, is_hidden, select
from folder_summary.file_selector.types import SUMMARY_FILENAME, SelectionConfig
from folder_summary.file_selector.walker import FolderWalker, WalkEntry

__all__ = [
    "SUMMARY_FILENAME",
    "Decision",
    "FolderWalker",
    "Matcher",
    "PatternSet",
    "SelectionConfig",
    "SelectionPolicy",
    "WalkEntry",
    "compile_pattern",
    "glob_to_regex",
    "is_hidden",
    "parse_patterns",
    "select",
]
