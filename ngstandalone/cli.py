"""CLI entrypoints for ngstandalone commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError, load_config
from .logging import configure_logging
from .orchestrator import MigrationOptions, migrate_components
from .project import FileSystemProject


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    kwargs["default"] = argparse.SUPPRESS if suppress_default else False
    parser.add_argument("-v", "--verbose", **kwargs)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ngstandalone",
        description="Replace IonicModule with explicit standalone imports in an Angular project.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    migrate_parser = subparsers.add_parser(
        "migrate",
        help="Migrate components and single-component NgModules to standalone imports.",
    )
    _add_verbose_option(migrate_parser, suppress_default=True)
    migrate_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the project root (defaults to current directory).",
    )
    migrate_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the changes as a diff without writing files.",
    )
    migrate_parser.add_argument(
        "--jobs",
        type=int,
        default=None,
        help="Number of files to process in parallel (overrides .ngstandalone.yml).",
    )
    migrate_parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write logs to this file.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for ngstandalone commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=getattr(args, "log_file", None))

    if args.command != "migrate":  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")

    root = Path(args.path)
    try:
        config = load_config(root)
        project = FileSystemProject.load(root, exclude_paths=config.exclude_paths)
    except (ConfigError, FileNotFoundError, NotADirectoryError) as exc:
        parser.exit(1, f"{exc}\n")

    jobs = args.jobs if args.jobs is not None else config.jobs
    if jobs < 1:
        parser.exit(1, "--jobs must be a positive integer\n")
    options = MigrationOptions(
        dry_run=bool(args.dry_run),
        jobs=jobs,
        indent=config.format.indent_unit,
        quote=config.format.quote_char,
    )
    report = migrate_components(project, options)

    if not report.changed:
        print("No files needed migration" + (" (dry-run)" if report.dry_run else ""))
    elif report.dry_run:
        print("Standalone import changes (dry-run):")
        print(report.diff())
    else:
        for outcome in report.changed:
            print(f"Migrated {project.relative(outcome.path)}")
    for outcome in report.skipped:
        print(f"Skipped {project.relative(outcome.path)}: {outcome.reason}", file=sys.stderr)


if __name__ == "__main__":
    main(sys.argv[1:])
