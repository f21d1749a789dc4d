#!/usr/bin/env python3
"""
folder-summary: Concatenate the files of a folder into one readable summary

Common usage:
  folder-summary /path/to/folder
  folder-summary /path/to/folder --include '*.py,*.sh' --output file
  folder-summary /path/to/folder --exclude 'node_modules,*.log'
  folder-summary /path/to/folder --include-hidden --exclude '.git/*'
  folder-summary /path/to/folder --include-summary
  folder-summary /path/to/folder --list-files

Patterns are comma-separated and each one is tried both as a glob (`*.txt`,
`test_*`, `file.??`, `src/*.js`) and as a regular expression (`.*\\.py$`,
`^src/.*`), against the relative path and against the file name.

Hidden files and directories (starting with `.`) are skipped unless
--include-hidden is given or an --include pattern matches them. Exclude
patterns still apply to hidden files. `folder_summary.txt` is never included.
"""

from __future__ import annotations

import argparse
import importlib.metadata
import sys
from dataclasses import dataclass
from pathlib import Path

from folder_summary.config import find_config_file, load_config, merge_cli_with_config
from folder_summary.file_selector import (
    SUMMARY_FILENAME,
    FolderWalker,
    SelectionConfig,
    parse_patterns,
)
from folder_summary.summarize import (
    OUTPUT_MODES,
    ConfigurationError,
    WriteFailure,
    summarize_folder,
    validate_folder,
)


@dataclass
class Options:
    """Command-line options for the folder-summary tool."""

    folder: str
    include: list[str] | None
    exclude: list[str] | None
    include_hidden: bool
    output: str
    include_summary: bool
    respect_gitignore: bool
    list_files: bool
    version: bool


def _pattern_list(value: str) -> list[str]:
    """argparse type for a comma-separated, non-empty pattern list."""
    if not value.strip():
        raise argparse.ArgumentTypeError("requires a comma-separated list of patterns")
    return parse_patterns(value)


def _flatten(groups: list[list[str]] | None) -> list[str] | None:
    if groups is None:
        return None
    return [p for group in groups for p in group]


def _parse_args(args: list[str] | None = None) -> tuple[Options, set[str]]:
    """
    Parse command-line arguments.

    Returns `(options, explicit_flags)` where `explicit_flags` tracks which
    settings the user explicitly passed (for config merge precedence).
    """
    # Use the module's docstring as the description
    module_doc = __doc__ or ""
    doc_parts = module_doc.split("\n\n")
    description = doc_parts[0]
    epilog = "\n\n".join(doc_parts[1:])

    parser = argparse.ArgumentParser(
        prog="folder-summary",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "folder",
        nargs="?",
        type=str,
        default="",
        help="The folder to summarize",
    )
    parser.add_argument(
        "-i",
        "--include",
        "--just-include",
        action="append",
        type=_pattern_list,
        default=None,
        metavar="PATTERNS",
        help="Comma-separated patterns; only matching files are included. Can be repeated "
        "(--just-include is a deprecated alias)",
    )
    parser.add_argument(
        "-e",
        "--exclude",
        action="append",
        type=_pattern_list,
        default=None,
        metavar="PATTERNS",
        help="Comma-separated patterns; matching files are excluded. Can be repeated",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=str,
        choices=list(OUTPUT_MODES),
        default="cli",
        help=f"Output destination: 'cli' prints to stdout, 'file' writes '{SUMMARY_FILENAME}' "
        "in the folder (default: %(default)s)",
    )
    parser.add_argument(
        "-H",
        "--include-hidden",
        action="store_true",
        dest="include_hidden",
        help="Include hidden files and directories (names starting with '.')",
    )
    parser.add_argument(
        "-s",
        "--include-summary",
        action="store_true",
        dest="include_summary",
        help="Append statistics (file counts by extension, sizes, filters) to the output",
    )
    parser.add_argument(
        "--respect-gitignore",
        action="store_true",
        dest="respect_gitignore",
        help="Skip files and directories ignored by .gitignore files",
    )
    parser.add_argument(
        "--list-files",
        action="store_true",
        dest="list_files",
        help="Print the relative paths of the files that would be included, without content",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="store_true",
        help="Show version information and exit",
    )
    opts = parser.parse_args(args)

    # Re-parse with sentinel defaults to detect which flags were actually supplied.
    # append actions use None as sentinel (argparse creates a list when the flag is used).
    _SENTINEL = object()
    sentinel_parser = argparse.ArgumentParser(add_help=False)
    sentinel_parser.add_argument("-i", "--include", "--just-include", action="append", default=None)
    sentinel_parser.add_argument("-e", "--exclude", action="append", default=None)
    sentinel_parser.add_argument("-o", "--output", default=_SENTINEL)
    sentinel_parser.add_argument(
        "-H", "--include-hidden", dest="include_hidden", action="store_true", default=_SENTINEL
    )
    sentinel_parser.add_argument(
        "-s", "--include-summary", dest="include_summary", action="store_true", default=_SENTINEL
    )
    sentinel_parser.add_argument(
        "--respect-gitignore", dest="respect_gitignore", action="store_true", default=_SENTINEL
    )
    # Untracked flags, declared so combined short options like `-Hv` parse the same way.
    sentinel_parser.add_argument("--list-files", action="store_true")
    sentinel_parser.add_argument("-v", "--version", action="store_true")
    sentinel_opts, _ = sentinel_parser.parse_known_args(args if args is not None else sys.argv[1:])

    explicit_flags: set[str] = set()
    for name in ("include", "exclude"):
        if getattr(sentinel_opts, name) is not None:
            explicit_flags.add(name)
    for name in ("output", "include_hidden", "include_summary", "respect_gitignore"):
        if getattr(sentinel_opts, name) is not _SENTINEL:
            explicit_flags.add(name)

    return (
        Options(
            folder=opts.folder,
            include=_flatten(opts.include),
            exclude=_flatten(opts.exclude),
            include_hidden=opts.include_hidden,
            output=opts.output,
            include_summary=opts.include_summary,
            respect_gitignore=opts.respect_gitignore,
            list_files=opts.list_files,
            version=opts.version,
        ),
        explicit_flags,
    )


def _list_files(options: Options) -> None:
    root = validate_folder(options.folder)
    walker = FolderWalker(
        SelectionConfig(
            include=options.include,
            exclude=options.exclude,
            include_hidden=options.include_hidden,
            respect_gitignore=options.respect_gitignore,
        )
    )
    for entry in walker.walk(root):
        print(entry.relative_path)


def main(args: list[str] | None = None) -> int:
    """
    Main entry point for the folder-summary CLI.

    Args:
        args: Command-line arguments (uses sys.argv if None)

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    options, explicit_flags = _parse_args(args)

    if options.version:
        try:
            version = importlib.metadata.version("folder-summary")
            print(f"folder-summary v{version}")
        except importlib.metadata.PackageNotFoundError:
            print("folder-summary unknown (package not installed)")
        return 0

    if not options.folder:
        print(
            "Error: Folder path is required. Use --help for more options.",
            file=sys.stderr,
        )
        return 1

    try:
        # Load and merge config file settings found from the target folder upward
        config_path = find_config_file(Path(options.folder))
        if config_path:
            merge_cli_with_config(options, load_config(config_path), explicit_flags)

        if options.list_files:
            _list_files(options)
            return 0

        summarize_folder(
            options.folder,
            include=options.include,
            exclude=options.exclude,
            include_hidden=options.include_hidden,
            output=options.output,
            include_summary=options.include_summary,
            respect_gitignore=options.respect_gitignore,
        )
    except (ConfigurationError, WriteFailure) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        return 130
    except Exception as e:
        # Catch other potential file or processing errors.
        print(f"Error: {e}", file=sys.stderr)
        return 2

    return 0


if __name__ == "__main__":
    sys.exit(main())
