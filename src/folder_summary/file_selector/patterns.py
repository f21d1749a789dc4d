"""
Pattern compilation for include/exclude filters.

Every user pattern is read two ways at once: as a raw regular expression and
as a shell-style glob (`*` is any sequence, `?` is any single character).
Both forms are tried against the relative path and against the basename, so
`*.py`, `.*\\.py$` and a bare `Makefile` all do what users expect.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

# A run of `.*` (what `**` becomes after translation) is equivalent to a single one.
_STAR_RUN = re.compile(r"(?:\.\*){2,}")


def glob_to_regex(pattern: str) -> str:
    """
    Translate a glob into an anchored regex source string.

    All regex metacharacters are escaped except the glob wildcards. `**` has
    no recursive-only meaning and behaves exactly like `*`.
    """
    regex = re.escape(pattern)
    regex = regex.replace(r"\*", ".*").replace(r"\?", ".")
    regex = _STAR_RUN.sub(".*", regex)
    return f"^{regex}$"


def _compile_raw(pattern: str) -> re.Pattern[str] | None:
    try:
        return re.compile(pattern)
    except re.error:
        # Not a valid regex (e.g. `*.py`); only the glob reading applies.
        return None


@dataclass(frozen=True)
class Matcher:
    """
    A compiled pattern: the raw regex (if the pattern is a valid regex) and
    the glob-derived regex.
    """

    pattern: str
    raw: re.Pattern[str] | None
    glob: re.Pattern[str]

    def matches(self, path: str, basename: str) -> bool:
        """
        True if the raw regex is found in the path or basename, or the glob
        regex matches the whole path or the whole basename.
        """
        if self.raw is not None:
            if self.raw.search(path) or self.raw.search(basename):
                return True
        return bool(self.glob.match(path) or self.glob.match(basename))


def compile_pattern(pattern: str) -> Matcher:
    """Compile a user pattern into a `Matcher`. Empty patterns are rejected."""
    if not pattern:
        raise ValueError("Pattern must not be empty")
    return Matcher(
        pattern=pattern,
        raw=_compile_raw(pattern),
        glob=re.compile(glob_to_regex(pattern)),
    )


def parse_patterns(value: str) -> list[str]:
    """Split a comma-separated pattern list, trimming whitespace and dropping empty items."""
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass(frozen=True)
class PatternSet:
    """
    An ordered collection of compiled patterns with any-match semantics.

    `patterns` keeps the user's strings in insertion order for display.
    """

    patterns: tuple[str, ...] = ()
    matchers: tuple[Matcher, ...] = ()

    @classmethod
    def from_patterns(cls, patterns: Iterable[str]) -> PatternSet:
        items = tuple(patterns)
        return cls(patterns=items, matchers=tuple(compile_pattern(p) for p in items))

    def __len__(self) -> int:
        return len(self.matchers)

    def __bool__(self) -> bool:
        return bool(self.matchers)

    def any_matches(self, path: str, basename: str) -> bool:
        return any(m.matches(path, basename) for m in self.matchers)

    def display(self, sep: str = ", ") -> str:
        return sep.join(self.patterns)


def pattern_set_or_none(patterns: Sequence[str] | None) -> PatternSet | None:
    """Build a `PatternSet`, keeping `None` to mean "filter not active"."""
    if patterns is None:
        return None
    return PatternSet.from_patterns(patterns)
