"""Project handles over the source files being migrated."""

from __future__ import annotations

import os
import posixpath
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Sequence

from .logging import get_logger

logger = get_logger("project")

_EXCLUDED_DIRS = {
    ".git",
    ".hg",
    ".svn",
    ".angular",
    ".venv",
    "node_modules",
    "dist",
    "www",
    "platforms",
    "plugins",
    "coverage",
}

SOURCE_SUFFIXES = (".ts",)


def normalise_path(path: str | Path) -> str:
    """Return a normalised posix form of ``path`` used as the project key."""
    return posixpath.normpath(Path(path).as_posix())


@dataclass
class SourceFile:
    """In-memory text of one project file."""

    path: str
    text: str
    original_text: str = field(init=False)

    def __post_init__(self) -> None:
        self.original_text = self.text

    @property
    def changed(self) -> bool:
        return self.text != self.original_text

    def replace_text(self, text: str) -> None:
        self.text = text


class Project(ABC):
    """Set of loadable, mutable source files."""

    def __init__(self) -> None:
        self._files: Dict[str, SourceFile] = {}

    def create_source_file(self, path: str | Path, text: str) -> SourceFile:
        key = normalise_path(path)
        source_file = SourceFile(path=key, text=text)
        self._files[key] = source_file
        return source_file

    def get_source_file(self, path: str | Path) -> Optional[SourceFile]:
        return self._files.get(normalise_path(path))

    def source_files(self, suffixes: Sequence[str] = SOURCE_SUFFIXES) -> List[SourceFile]:
        """Return TypeScript sources (declaration files excluded) sorted by path."""
        return [
            self._files[key]
            for key in sorted(self._files)
            if key.endswith(tuple(suffixes)) and not key.endswith(".d.ts")
        ]

    def read_text(self, path: str | Path) -> Optional[str]:
        """Return the text of ``path`` or None when the file does not exist."""
        source_file = self.get_source_file(path)
        return source_file.text if source_file is not None else None

    @abstractmethod
    def save(self, source_file: SourceFile) -> None:
        """Persist ``source_file`` to the underlying storage."""


class InMemoryProject(Project):
    """Project backed by a dictionary; ``save`` updates the persisted snapshot."""

    def __init__(self) -> None:
        super().__init__()
        self._persisted: Dict[str, str] = {}

    def create_source_file(self, path: str | Path, text: str) -> SourceFile:
        source_file = super().create_source_file(path, text)
        self._persisted[source_file.path] = text
        return source_file

    def save(self, source_file: SourceFile) -> None:
        self._persisted[source_file.path] = source_file.text

    def persisted_text(self, path: str | Path) -> Optional[str]:
        return self._persisted.get(normalise_path(path))


@dataclass
class IgnoreRule:
    """An exclusion pattern from .gitignore or .ngstandalone.yml."""

    pattern: str
    directory_only: bool
    anchored: bool
    negate: bool

    @classmethod
    def parse(cls, raw: str, negate: bool = False) -> Optional["IgnoreRule"]:
        pattern = raw.strip()
        if not pattern:
            return None
        directory_only = pattern.endswith("/")
        pattern = pattern.rstrip("/")
        anchored = pattern.startswith("/") or "/" in pattern
        pattern = pattern.lstrip("/")
        if not pattern:
            return None
        return cls(pattern=pattern, directory_only=directory_only, anchored=anchored, negate=negate)

    def matches(self, rel_path: str, is_dir: bool) -> bool:
        if self.directory_only and not is_dir:
            return False
        if self.anchored:
            return fnmatchcase(rel_path, self.pattern)
        return any(fnmatchcase(part, self.pattern) for part in rel_path.split("/"))


def _parse_gitignore(path: Path) -> List[IgnoreRule]:
    if not path.exists():
        return []
    rules: List[IgnoreRule] = []
    for raw_line in path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        negate = line.startswith("!")
        rule = IgnoreRule.parse(line[1:] if negate else line, negate=negate)
        if rule is not None:
            rules.append(rule)
    return rules


def _should_ignore(rel_path: str, is_dir: bool, rules: Sequence[IgnoreRule]) -> bool:
    ignored = False
    for rule in rules:
        if rule.matches(rel_path, is_dir):
            ignored = not rule.negate
    return ignored


def _read_source(path: Path) -> str:
    # newline="" keeps CRLF files byte-for-byte.
    with path.open(encoding="utf-8", newline="") as handle:
        return handle.read()


def _iter_sources(root: Path, rules: Sequence[IgnoreRule], suffixes: Sequence[str]) -> Iterator[Path]:
    for dirpath, dirnames, filenames in os.walk(root):
        current_dir = Path(dirpath)
        rel_dir = current_dir.relative_to(root).as_posix() if current_dir != root else ""

        kept = []
        for name in sorted(dirnames):
            rel_path = f"{rel_dir}/{name}" if rel_dir else name
            if name in _EXCLUDED_DIRS or _should_ignore(rel_path, True, rules):
                continue
            kept.append(name)
        dirnames[:] = kept

        for filename in sorted(filenames):
            if not filename.endswith(tuple(suffixes)) or filename.endswith(".d.ts"):
                continue
            rel_path = f"{rel_dir}/{filename}" if rel_dir else filename
            if _should_ignore(rel_path, False, rules):
                continue
            yield current_dir / filename


class FileSystemProject(Project):
    """Project that loads TypeScript sources from a directory tree."""

    def __init__(self, root: Path) -> None:
        super().__init__()
        self.root = root

    @classmethod
    def load(cls, root: str | Path, exclude_paths: Sequence[str] = ()) -> "FileSystemProject":
        root_path = Path(root).expanduser().resolve()
        if not root_path.exists():
            raise FileNotFoundError(f"Project path not found: {root}")
        if not root_path.is_dir():
            raise NotADirectoryError(f"Project path is not a directory: {root}")

        rules = _parse_gitignore(root_path / ".gitignore")
        for pattern in exclude_paths:
            rule = IgnoreRule.parse(pattern)
            if rule is not None:
                rules.append(rule)

        project = cls(root_path)
        for path in _iter_sources(root_path, rules, SOURCE_SUFFIXES):
            try:
                text = _read_source(path)
            except (OSError, UnicodeDecodeError) as exc:
                logger.warning("Unable to read %s: %s", path, exc)
                continue
            project.create_source_file(path, text)
        logger.debug("Loaded %d source files from %s", len(project._files), root_path)
        return project

    def read_text(self, path: str | Path) -> Optional[str]:
        loaded = super().read_text(path)
        if loaded is not None:
            return loaded
        try:
            return _read_source(Path(normalise_path(path)))
        except (OSError, UnicodeDecodeError):
            return None

    def save(self, source_file: SourceFile) -> None:
        Path(source_file.path).write_text(source_file.text, encoding="utf-8", newline="")

    def relative(self, path: str) -> str:
        try:
            return Path(path).relative_to(self.root).as_posix()
        except ValueError:
            return path


__all__ = [
    "FileSystemProject",
    "IgnoreRule",
    "InMemoryProject",
    "Project",
    "SourceFile",
    "normalise_path",
]
