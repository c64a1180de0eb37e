"""Migrate Ionic Angular templates to explicit standalone imports."""

from .orchestrator import MigrationOptions, migrate_components
from .project import FileSystemProject, InMemoryProject

__all__ = ["FileSystemProject", "InMemoryProject", "MigrationOptions", "migrate_components"]
