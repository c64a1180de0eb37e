"""Tests for ngstandalone.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from ngstandalone.config import ConfigError, FormatConfig, MigrationConfig, load_config


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, MigrationConfig)
    assert config.root == tmp_path.resolve()
    assert config.exclude_paths == []
    assert config.jobs == 1
    assert config.format == FormatConfig()
    assert config.format.indent_unit is None
    assert config.format.quote_char is None


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / ".ngstandalone.yml"
    config_file.write_text(
        """
exclude_paths:
  - "src/legacy/"
  - "*.stories.ts"
jobs: 4
format:
  indent: 2
  quote: single
""",
        encoding="utf-8",
    )

    config = load_config(config_file)

    assert config.root == tmp_path.resolve()
    assert config.exclude_paths == ["src/legacy/", "*.stories.ts"]
    assert config.jobs == 4
    assert config.format.indent_unit == "  "
    assert config.format.quote_char == "'"


def test_load_config_accepts_directory_and_single_exclude(tmp_path: Path) -> None:
    (tmp_path / ".ngstandalone.yml").write_text('exclude_paths: "e2e/"\nformat:\n  quote: double\n', encoding="utf-8")

    config = load_config(tmp_path)

    assert config.exclude_paths == ["e2e/"]
    assert config.format.quote_char == '"'


def test_empty_config_file_yields_defaults(tmp_path: Path) -> None:
    (tmp_path / ".ngstandalone.yml").write_text("\n", encoding="utf-8")

    assert load_config(tmp_path).jobs == 1


@pytest.mark.parametrize(
    ("content", "message"),
    [
        ("- just\n- a list\n", "mapping"),
        ("jobs: 0\n", "jobs"),
        ("format:\n  quote: backtick\n", "format.quote"),
        ("format:\n  indent: -2\n", "format.indent"),
        ("jobs: [1\n", "Failed to parse"),
    ],
)
def test_invalid_config_raises(tmp_path: Path, content: str, message: str) -> None:
    (tmp_path / ".ngstandalone.yml").write_text(content, encoding="utf-8")

    with pytest.raises(ConfigError) as excinfo:
        load_config(tmp_path)

    assert message in str(excinfo.value)
