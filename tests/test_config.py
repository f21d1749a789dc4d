"""Tests for config file loading and merging."""

from __future__ import annotations

from pathlib import Path

import pytest

from folder_summary.cli import Options
from folder_summary.config import (
    FolderSummaryConfig,
    find_config_file,
    load_config,
    merge_cli_with_config,
)
from folder_summary.summarize import ConfigurationError


def test_find_config_folder_summary_toml(tmp_path: Path) -> None:
    config_file = tmp_path / "folder-summary.toml"
    config_file.write_text("include-summary = true\n")
    assert find_config_file(tmp_path) == config_file


def test_find_config_dot_file_takes_precedence(tmp_path: Path) -> None:
    (tmp_path / "folder-summary.toml").write_text("include-summary = true\n")
    dot_config = tmp_path / ".folder-summary.toml"
    dot_config.write_text("include-summary = false\n")
    assert find_config_file(tmp_path) == dot_config


def test_find_config_pyproject_toml(tmp_path: Path) -> None:
    config_file = tmp_path / "pyproject.toml"
    config_file.write_text('[tool.folder-summary]\nexclude = ["*.log"]\n')
    assert find_config_file(tmp_path) == config_file


def test_find_config_pyproject_without_section_skipped(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text("[tool.ruff]\nline-length = 100\n")
    assert find_config_file(tmp_path) is None


def test_find_config_walks_up(tmp_path: Path) -> None:
    config_file = tmp_path / "folder-summary.toml"
    config_file.write_text("include-hidden = true\n")
    subdir = tmp_path / "sub" / "deep"
    subdir.mkdir(parents=True)
    assert find_config_file(subdir) == config_file


def test_find_config_none_when_missing(tmp_path: Path) -> None:
    assert find_config_file(tmp_path) is None


def test_load_config_sections_and_kebab_case(tmp_path: Path) -> None:
    config_file = tmp_path / "folder-summary.toml"
    config_file.write_text(
        "[selection]\n"
        'include = ["*.py", "*.sh"]\n'
        'exclude = "node_modules, *.log"\n'
        "include-hidden = true\n"
        "respect-gitignore = true\n"
        "\n"
        "[report]\n"
        'output = "file"\n'
        "include_summary = true\n"
    )
    config = load_config(config_file)
    assert config.include == ["*.py", "*.sh"]
    assert config.exclude == ["node_modules", "*.log"]
    assert config.include_hidden is True
    assert config.respect_gitignore is True
    assert config.output == "file"
    assert config.include_summary is True


def test_load_config_pyproject_toml(tmp_path: Path) -> None:
    config_file = tmp_path / "pyproject.toml"
    config_file.write_text('[tool.folder-summary]\noutput = "file"\n')
    config = load_config(config_file)
    assert config.output == "file"
    assert config.include is None


def test_load_config_partial(tmp_path: Path) -> None:
    config_file = tmp_path / "folder-summary.toml"
    config_file.write_text("include-summary = true\n")
    config = load_config(config_file)
    assert config.include_summary is True
    assert config.include is None
    assert config.output is None


def test_load_config_invalid_output(tmp_path: Path) -> None:
    config_file = tmp_path / "folder-summary.toml"
    config_file.write_text('output = "html"\n')
    with pytest.raises(ConfigurationError):
        load_config(config_file)


def test_load_config_invalid_bool(tmp_path: Path) -> None:
    config_file = tmp_path / "folder-summary.toml"
    config_file.write_text('include-hidden = "yes"\n')
    with pytest.raises(ConfigurationError):
        load_config(config_file)


def test_load_config_malformed_toml(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    config_file = tmp_path / "folder-summary.toml"
    config_file.write_text("this is not valid toml [[[")
    config = load_config(config_file)
    assert config == FolderSummaryConfig()
    assert "malformed config file" in capsys.readouterr().err


def test_load_config_warns_unknown_keys(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    config_file = tmp_path / "folder-summary.toml"
    config_file.write_text("unknown_key = true\ninclude-summary = true\n")
    config = load_config(config_file)
    assert config.include_summary is True
    assert "unrecognized config key" in capsys.readouterr().err


def _make_options(
    folder: str = ".",
    include: list[str] | None = None,
    exclude: list[str] | None = None,
    include_hidden: bool = False,
    output: str = "cli",
    include_summary: bool = False,
    respect_gitignore: bool = False,
) -> Options:
    """Create an Options with defaults for all required fields."""
    return Options(
        folder=folder,
        include=include,
        exclude=exclude,
        include_hidden=include_hidden,
        output=output,
        include_summary=include_summary,
        respect_gitignore=respect_gitignore,
        list_files=False,
        version=False,
    )


def test_merge_no_config() -> None:
    opts = _make_options(output="file")
    result = merge_cli_with_config(opts, config=None, explicit_flags=set())
    assert result.output == "file"


def test_merge_config_overrides_defaults() -> None:
    opts = _make_options()
    config = FolderSummaryConfig(include=["*.py"], include_hidden=True, output="file")
    result = merge_cli_with_config(opts, config=config, explicit_flags=set())
    assert result.include == ["*.py"]
    assert result.include_hidden is True
    assert result.output == "file"


def test_merge_explicit_cli_overrides_config() -> None:
    opts = _make_options(exclude=["*.tmp"], output="cli")
    config = FolderSummaryConfig(exclude=["*.log"], output="file")
    result = merge_cli_with_config(opts, config=config, explicit_flags={"exclude", "output"})
    assert result.exclude == ["*.tmp"]
    assert result.output == "cli"


def test_merge_unset_config_fields_keep_cli_values() -> None:
    opts = _make_options(include_summary=True)
    result = merge_cli_with_config(opts, config=FolderSummaryConfig(), explicit_flags=set())
    assert result.include_summary is True
