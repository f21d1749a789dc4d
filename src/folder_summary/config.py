"""
TOML-based config file loading for folder-summary.

Searches for `.folder-summary.toml`, `folder-summary.toml`, or
`pyproject.toml [tool.folder-summary]` walking up from the folder being summarized.
Config values are merged with CLI flags using three-way precedence: explicit
CLI flags > config file > built-in defaults.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, TypeVar, cast

from folder_summary.file_selector import parse_patterns
from folder_summary.summarize import ConfigurationError

if sys.version_info >= (3, 11):
    import tomllib  # pyright: ignore[reportUnreachable]
else:
    import tomli as tomllib  # type: ignore[no-redef]  # pyright: ignore[reportUnreachable]

TOOL_NAME = "folder-summary"


@dataclass
class FolderSummaryConfig:
    """
    Parsed config from a TOML file. Fields are `None` when not set in the config,
    allowing the merge logic to distinguish "not configured" from "explicitly set
    to default value".
    """

    # File selection
    include: list[str] | None = None
    exclude: list[str] | None = None
    include_hidden: bool | None = None
    respect_gitignore: bool | None = None
    # Output
    output: str | None = None
    include_summary: bool | None = None


# Config file search order (first match wins within each directory level)
_CONFIG_FILENAMES = [f".{TOOL_NAME}.toml", f"{TOOL_NAME}.toml", "pyproject.toml"]

_VALID_FIELDS = {f.name for f in fields(FolderSummaryConfig)}

_PATTERN_FIELDS = {"include", "exclude"}
_BOOL_FIELDS = {"include_hidden", "respect_gitignore", "include_summary"}


def find_config_file(start_dir: Path) -> Path | None:
    """
    Walk up from `start_dir` looking for a config file. Returns the first
    found, or `None`. Search order per directory: `.folder-summary.toml` >
    `folder-summary.toml` > `pyproject.toml` (only if it has `[tool.folder-summary]`).
    """
    current = start_dir.resolve()
    while True:
        for filename in _CONFIG_FILENAMES:
            candidate = current / filename
            if candidate.is_file():
                if filename == "pyproject.toml":
                    if _pyproject_has_tool_section(candidate):
                        return candidate
                else:
                    return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


def _pyproject_has_tool_section(path: Path) -> bool:
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
        return TOOL_NAME in data.get("tool", {})
    except (tomllib.TOMLDecodeError, OSError):
        return False


def load_config(config_path: Path) -> FolderSummaryConfig:
    """
    Load a `FolderSummaryConfig` from a TOML file. Supports both standalone
    `folder-summary.toml` / `.folder-summary.toml` and `pyproject.toml`
    (extracts `[tool.folder-summary]`). Kebab-case keys are mapped to snake_case;
    malformed files are ignored with a warning.
    """
    try:
        data = tomllib.loads(config_path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        print(f"Warning: ignoring malformed config file {config_path}: {e}", file=sys.stderr)
        return FolderSummaryConfig()

    if config_path.name == "pyproject.toml":
        data = data.get("tool", {}).get(TOOL_NAME, {})

    return _parse_config_data(data, config_path)


def _parse_config_data(data: dict[str, Any], source: Path | None = None) -> FolderSummaryConfig:
    """Parse a flat or sectioned TOML dict into FolderSummaryConfig."""
    # Flatten sections: [selection] and [output] merge into top level
    flat: dict[str, Any] = {}
    for key, value in data.items():
        if isinstance(value, dict):
            for sub_key, sub_value in cast(dict[str, Any], value).items():
                flat[sub_key] = sub_value
        else:
            flat[key] = value

    mapped: dict[str, Any] = {}
    for key, value in flat.items():
        snake_key = key.replace("-", "_")
        if snake_key not in _VALID_FIELDS:
            print(f"Warning: unrecognized config key '{key}'", file=sys.stderr)
            continue
        mapped[snake_key] = _coerce(snake_key, value, source)

    return FolderSummaryConfig(**mapped)


def _coerce(name: str, value: Any, source: Path | None) -> Any:
    where = f" in {source}" if source else ""
    if name in _PATTERN_FIELDS:
        # Either a TOML array or the same comma-separated form the CLI accepts.
        if isinstance(value, str):
            return parse_patterns(value)
        if isinstance(value, list) and all(isinstance(v, str) for v in cast(list[Any], value)):
            return [p.strip() for p in cast(list[str], value) if p.strip()]
        raise ConfigurationError(f"'{name}' must be a string or a list of strings{where}")
    if name in _BOOL_FIELDS:
        if not isinstance(value, bool):
            raise ConfigurationError(f"'{name}' must be true or false{where}")
        return value
    if name == "output" and value not in ("cli", "file"):
        raise ConfigurationError(f"'output' must be 'cli' or 'file'{where}")
    return value


_T = TypeVar("_T")


def merge_cli_with_config(
    cli_opts: _T,
    config: FolderSummaryConfig | None,
    explicit_flags: set[str],
) -> _T:
    """
    Merge CLI options with config file settings.

    Precedence: explicit CLI flags > config file > built-in defaults.
    """
    if config is None:
        return cli_opts

    for cfg_field in fields(FolderSummaryConfig):
        cfg_value = getattr(config, cfg_field.name)
        if cfg_value is None:
            continue  # Not set in config

        if cfg_field.name in explicit_flags:
            continue

        if hasattr(cli_opts, cfg_field.name):
            setattr(cli_opts, cfg_field.name, cfg_value)

    return cli_opts
