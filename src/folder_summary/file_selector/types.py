"""Configuration types for file selection."""

from __future__ import annotations

from dataclasses import dataclass

from folder_summary.file_selector.patterns import pattern_set_or_none
from folder_summary.file_selector.selector import SelectionPolicy

# The report file written in `file` mode; never part of its own input.
SUMMARY_FILENAME = "folder_summary.txt"


@dataclass
class SelectionConfig:
    """
    User-facing selection settings.

    `include=None` / `exclude=None` mean the filter is not active. An empty
    list is treated the same as an inactive filter.
    """

    include: list[str] | None = None
    exclude: list[str] | None = None
    include_hidden: bool = False
    respect_gitignore: bool = False
    reserved_name: str = SUMMARY_FILENAME

    def to_policy(self) -> SelectionPolicy:
        return SelectionPolicy(
            exclude_hidden=not self.include_hidden,
            include=pattern_set_or_none(self.include),
            exclude=pattern_set_or_none(self.exclude),
        )
