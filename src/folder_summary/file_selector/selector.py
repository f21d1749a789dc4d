"""
The include/exclude decision for a single discovered path.

Hidden files are opt-in: unless hidden files are included wholesale, a hidden
path survives only if an active include filter matches it. Surviving paths then
go through the exclude filter (exclude always wins) and finally the include
filter. This order is what makes `--include-hidden --exclude '.git/*'` work.
"""

from __future__ import annotations

import posixpath
import re
from dataclasses import dataclass
from enum import Enum

from folder_summary.file_selector.patterns import PatternSet

_HIDDEN_SEGMENT = re.compile(r"(?:^|/)\.")


class Decision(Enum):
    ACCEPT = "accept"
    REJECT = "reject"


@dataclass(frozen=True)
class SelectionPolicy:
    """
    Built once from user input before the walk starts.

    `include` / `exclude` are `None` when the corresponding filter is not
    active. An active but empty set is never consulted.
    """

    exclude_hidden: bool = True
    include: PatternSet | None = None
    exclude: PatternSet | None = None

    @property
    def include_active(self) -> bool:
        return self.include is not None and len(self.include) > 0

    @property
    def exclude_active(self) -> bool:
        return self.exclude is not None and len(self.exclude) > 0


def is_hidden(relative_path: str) -> bool:
    """True if any `/`-separated segment of the path starts with `.`."""
    return _HIDDEN_SEGMENT.search(relative_path) is not None


def select(relative_path: str, hidden: bool, policy: SelectionPolicy) -> Decision:
    basename = posixpath.basename(relative_path)

    # None when the include filter is not consulted.
    include_match: bool | None = None
    if policy.include is not None and policy.include_active:
        include_match = policy.include.any_matches(relative_path, basename)

    if policy.exclude_hidden and hidden and not include_match:
        return Decision.REJECT

    if policy.exclude is not None and policy.exclude_active:
        if policy.exclude.any_matches(relative_path, basename):
            return Decision.REJECT

    if include_match is False:
        return Decision.REJECT

    return Decision.ACCEPT
