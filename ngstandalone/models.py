"""Core data models shared across ngstandalone components."""

from __future__ import annotations

import difflib
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class TagEntry:
    """Vocabulary entry mapping a markup tag to its exported symbol."""

    tag_name: str
    exported_symbol: str
    module_path: str


@dataclass(frozen=True)
class IconReference:
    """An icon name used in a template and the constant that exports it."""

    kebab_name: str
    camel_identifier: str


class TemplateKind(str, Enum):
    INLINE = "inline"
    EXTERNAL = "external"


@dataclass
class TemplateSource:
    """Raw template text for one component, wherever it was declared."""

    kind: TemplateKind
    text: str
    origin_path: str


@dataclass(frozen=True)
class TemplateReferences:
    """Ordered, deduplicated tag and icon names found in a template."""

    tag_names: Tuple[str, ...] = ()
    icon_names: Tuple[str, ...] = ()

    def __bool__(self) -> bool:
        return bool(self.tag_names or self.icon_names)


class DependencyKind(str, Enum):
    COMPONENT = "component"
    ICON_REGISTRATION = "icon-registration"
    ICON_CONSTANT = "icon-constant"


@dataclass(frozen=True)
class ResolvedDependency:
    """A symbol the migrated file must import, and where it comes from."""

    symbol: str
    module_path: str
    kind: DependencyKind


class FileStatus(str, Enum):
    MIGRATED = "migrated"
    UNCHANGED = "unchanged"
    SKIPPED = "skipped"


@dataclass
class FileOutcome:
    """Result of processing a single source file."""

    path: str
    status: FileStatus
    original_text: str
    text: str
    reason: Optional[str] = None

    @property
    def changed(self) -> bool:
        return self.status is FileStatus.MIGRATED and self.text != self.original_text

    def diff(self) -> str:
        """Return a unified diff between the original and migrated text."""
        lines = difflib.unified_diff(
            self.original_text.splitlines(keepends=True),
            self.text.splitlines(keepends=True),
            fromfile=f"a/{self.path}",
            tofile=f"b/{self.path}",
        )
        return "".join(lines)


@dataclass
class MigrationReport:
    """Aggregated outcomes of a migration run."""

    dry_run: bool
    outcomes: List[FileOutcome] = field(default_factory=list)

    @property
    def changed(self) -> List[FileOutcome]:
        return [outcome for outcome in self.outcomes if outcome.changed]

    @property
    def skipped(self) -> List[FileOutcome]:
        return [outcome for outcome in self.outcomes if outcome.status is FileStatus.SKIPPED]

    def diff(self) -> str:
        """Concatenate unified diffs for every changed file."""
        return "".join(outcome.diff() for outcome in self.changed)
