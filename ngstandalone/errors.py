"""Exception types raised while migrating a single file."""

from __future__ import annotations


class MigrationError(RuntimeError):
    """Base class for per-file migration failures."""


class MalformedDeclarationError(MigrationError):
    """Raised when a decorator literal cannot be interpreted confidently."""


class EditConflictError(MigrationError):
    """Raised when two planned edits touch overlapping ranges."""
