"""Run the standalone migration over every file of a project."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Optional

from .errors import MigrationError
from .logging import get_logger
from .migrations.component import plan_components
from .migrations.module import ModuleIndex, plan_modules
from .migrations.plan import FilePlan
from .models import FileOutcome, FileStatus, MigrationReport
from .project import Project, SourceFile

_MARKERS = ("@Component", "@NgModule")


@dataclass
class MigrationOptions:
    """Options recognised by :func:`migrate_components`."""

    dry_run: bool = False
    jobs: int = 1
    indent: Optional[str] = None
    quote: Optional[str] = None


class Migrator:
    """Coordinates the per-file Locate, Scan, Resolve, Rewrite pass."""

    def __init__(self, options: MigrationOptions | None = None) -> None:
        self.options = options or MigrationOptions()
        self.logger = get_logger("orchestrator")

    def run(self, project: Project) -> MigrationReport:
        files = project.source_files()
        self.logger.info("Migrating %d source file(s)%s", len(files), " (dry-run)" if self.options.dry_run else "")
        index = ModuleIndex.build(project, files)
        self.logger.debug("Indexed %d NgModule(s)", len(index.modules))

        if self.options.jobs > 1 and len(files) > 1:
            with ThreadPoolExecutor(max_workers=self.options.jobs) as executor:
                outcomes = list(executor.map(lambda f: self.migrate_file(project, f, index), files))
        else:
            outcomes = [self.migrate_file(project, source_file, index) for source_file in files]

        # Apply only after every file was planned so that planning always sees unmodified text.
        for source_file, outcome in zip(files, outcomes):
            if not outcome.changed:
                continue
            source_file.replace_text(outcome.text)
            if self.options.dry_run:
                self.logger.info("Would migrate %s", source_file.path)
            else:
                project.save(source_file)
                self.logger.info("Migrated %s", source_file.path)

        report = MigrationReport(dry_run=self.options.dry_run, outcomes=outcomes)
        self.logger.info(
            "%d file(s) changed, %d skipped", len(report.changed), len(report.skipped)
        )
        return report

    def migrate_file(self, project: Project, source_file: SourceFile, index: ModuleIndex) -> FileOutcome:
        text = source_file.text
        if not any(marker in text for marker in _MARKERS):
            return FileOutcome(source_file.path, FileStatus.UNCHANGED, text, text)

        try:
            plan = FilePlan.for_text(
                source_file.path, text, indent=self.options.indent, quote=self.options.quote
            )
            touched = plan_components(project, plan, index)
            touched += plan_modules(project, plan)
            if not touched:
                return FileOutcome(source_file.path, FileStatus.UNCHANGED, text, text)
            new_text = plan.render().decode("utf-8")
        except MigrationError as exc:
            self._log_skip(source_file.path, exc)
            return FileOutcome(source_file.path, FileStatus.SKIPPED, text, text, reason=str(exc))

        if new_text == text:
            self.logger.debug("%s already migrated", source_file.path)
            return FileOutcome(source_file.path, FileStatus.UNCHANGED, text, text)
        self.logger.debug("%s: planned %s", source_file.path, ", ".join(plan.notes))
        return FileOutcome(source_file.path, FileStatus.MIGRATED, text, new_text)

    def _log_skip(self, path: str, exc: Exception) -> None:
        if self.logger.isEnabledFor(logging.DEBUG):
            self.logger.warning("Skipping %s: %s", path, exc, exc_info=exc)
        else:
            self.logger.warning("Skipping %s: %s", path, exc)


def migrate_components(project: Project, options: MigrationOptions | None = None) -> MigrationReport:
    """Migrate every component and single-component NgModule in ``project``."""
    return Migrator(options).run(project)


__all__ = ["MigrationOptions", "Migrator", "migrate_components"]
