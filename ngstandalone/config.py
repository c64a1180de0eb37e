"""Configuration loading for ngstandalone (.ngstandalone.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".ngstandalone.yml"

_QUOTES = {"single": "'", "double": '"'}


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class FormatConfig:
    """Formatting overrides for generated code."""

    indent: Optional[int] = None
    quote: Optional[str] = None

    @property
    def indent_unit(self) -> Optional[str]:
        return " " * self.indent if self.indent else None

    @property
    def quote_char(self) -> Optional[str]:
        return _QUOTES.get(self.quote) if self.quote else None


@dataclass
class MigrationConfig:
    """Represents the settings defined in .ngstandalone.yml."""

    root: Path
    exclude_paths: List[str] = field(default_factory=list)
    jobs: int = 1
    format: FormatConfig = field(default_factory=FormatConfig)


def load_config(config_path: Path) -> MigrationConfig:
    """Load configuration from disk; a missing file yields defaults."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return MigrationConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    jobs = _as_int(data.get("jobs"))
    if jobs is not None and jobs < 1:
        raise ConfigError("jobs must be a positive integer")

    format_data = _as_dict(data.get("format"))
    fmt = FormatConfig(
        indent=_as_int(format_data.get("indent")),
        quote=_as_str(format_data.get("quote")),
    )
    if fmt.quote is not None and fmt.quote not in _QUOTES:
        raise ConfigError(f"format.quote must be one of: {', '.join(sorted(_QUOTES))}")
    if fmt.indent is not None and fmt.indent < 1:
        raise ConfigError("format.indent must be a positive integer")

    return MigrationConfig(
        root=root,
        exclude_paths=_as_str_list(data.get("exclude_paths")),
        jobs=jobs or 1,
        format=fmt,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = ["CONFIG_FILENAME", "ConfigError", "FormatConfig", "MigrationConfig", "load_config"]
