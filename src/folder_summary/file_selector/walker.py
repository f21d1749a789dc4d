"""
FolderWalker: enumerates the files under a root and yields the selected ones.

The walk is lazy, single pass and yields files in lexicographic order of their
relative paths. Symlinks are not followed. The reserved summary file is never a
candidate.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

import pathspec

from folder_summary.file_selector.gitignore import load_gitignore
from folder_summary.file_selector.selector import Decision, SelectionPolicy, is_hidden, select
from folder_summary.file_selector.types import SelectionConfig


@dataclass(frozen=True)
class WalkEntry:
    path: Path
    relative_path: str


class FolderWalker:
    """
    Walks a directory tree and applies the selection policy to every regular
    file found.

    `found_count` is the number of candidate files enumerated so far, whether
    or not they were selected.
    """

    def __init__(self, config: SelectionConfig) -> None:
        self._config: SelectionConfig = config
        self.policy: SelectionPolicy = config.to_policy()
        self.found_count: int = 0
        # Cache gitignore specs per directory to avoid re-reading from disk.
        self._gitignore_cache: dict[Path, pathspec.PathSpec | None] = {}

    def walk(self, root: str | Path) -> Iterator[WalkEntry]:
        root_path = Path(root)
        for path, relative_path in self._iter_candidates(root_path, root_path):
            self.found_count += 1
            if select(relative_path, is_hidden(relative_path), self.policy) is Decision.ACCEPT:
                yield WalkEntry(path=path, relative_path=relative_path)

    def _iter_candidates(self, current: Path, root: Path) -> Iterator[tuple[Path, str]]:
        try:
            with os.scandir(current) as it:
                entries = list(it)
        except OSError:
            # Unlistable directories are skipped, as `os.walk` does.
            return

        gitignore_chain: list[tuple[Path, pathspec.PathSpec]] = []
        if self._config.respect_gitignore:
            gitignore_chain = self._get_gitignore_chain(current, root)

        # A directory sorts as `name/` so files and subtrees interleave in
        # lexicographic order of their relative paths.
        children: list[tuple[str, os.DirEntry[str], bool]] = []
        for entry in entries:
            is_dir = entry.is_dir(follow_symlinks=False)
            children.append((entry.name + "/" if is_dir else entry.name, entry, is_dir))
        children.sort(key=lambda child: child[0])

        for _, entry, is_dir in children:
            path = current / entry.name
            if is_dir:
                if not self._is_ignored(path, gitignore_chain, True):
                    yield from self._iter_candidates(path, root)
                continue
            if entry.name == self._config.reserved_name:
                continue
            if not entry.is_file(follow_symlinks=False):
                continue
            if self._is_ignored(path, gitignore_chain, False):
                continue
            yield path, path.relative_to(root).as_posix()

    @staticmethod
    def _is_ignored(
        path: Path, chain: list[tuple[Path, pathspec.PathSpec]], is_dir: bool
    ) -> bool:
        for base, spec in chain:
            rel = path.relative_to(base).as_posix()
            if spec.match_file(rel + "/" if is_dir else rel):
                return True
        return False

    def _get_gitignore(self, directory: Path) -> pathspec.PathSpec | None:
        """Load and cache gitignore for a directory."""
        if directory not in self._gitignore_cache:
            self._gitignore_cache[directory] = load_gitignore(directory)
        return self._gitignore_cache[directory]

    def _get_gitignore_chain(
        self, directory: Path, walk_root: Path
    ) -> list[tuple[Path, pathspec.PathSpec]]:
        """Collect gitignore specs from walk_root down to directory (inclusive)."""
        levels = [walk_root]
        for part in directory.relative_to(walk_root).parts:
            levels.append(levels[-1] / part)

        chain: list[tuple[Path, pathspec.PathSpec]] = []
        for level in levels:
            spec = self._get_gitignore(level)
            if spec is not None:
                chain.append((level, spec))
        return chain
