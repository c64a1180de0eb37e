"""CLI behaviour tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from ngstandalone.cli import _build_parser, main

from tests._fixtures.project_builder import ProjectBuilder

COMPONENT = """
import { Component } from "@angular/core";

@Component({
  selector: "app-home",
  template: "<ion-content><ion-button>Go</ion-button></ion-content>",
})
export class HomeComponent {}
"""


def test_cli_accepts_verbose_before_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["--verbose", "migrate"])
    assert args.verbose is True
    assert args.command == "migrate"
    assert args.path == "."


def test_cli_accepts_verbose_after_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["migrate", "--verbose"])
    assert args.verbose is True


def test_cli_accepts_migrate_options() -> None:
    parser = _build_parser()
    args = parser.parse_args(["migrate", "src", "--dry-run", "--jobs", "3", "--log-file", "run.log"])
    assert args.path == "src"
    assert args.dry_run is True
    assert args.jobs == 3
    assert args.log_file == Path("run.log")


def test_dry_run_prints_diff_and_keeps_files(
    project_builder: ProjectBuilder, capsys: pytest.CaptureFixture[str]
) -> None:
    project_builder.write({"src/home.component.ts": COMPONENT})

    main(["migrate", str(project_builder.root), "--dry-run"])

    out = capsys.readouterr().out
    assert "Standalone import changes (dry-run):" in out
    assert '+import { IonContent, IonButton } from "@ionic/angular/standalone";' in out
    assert "IonContent" not in project_builder.read("src/home.component.ts")


def test_migrate_writes_files(project_builder: ProjectBuilder, capsys: pytest.CaptureFixture[str]) -> None:
    project_builder.write({"src/home.component.ts": COMPONENT})

    main(["migrate", str(project_builder.root)])

    assert "Migrated src/home.component.ts" in capsys.readouterr().out
    assert "  imports: [IonContent, IonButton],\n" in project_builder.read("src/home.component.ts")

    main(["migrate", str(project_builder.root)])
    assert "No files needed migration" in capsys.readouterr().out


def test_skipped_files_are_reported_on_stderr(
    project_builder: ProjectBuilder, capsys: pytest.CaptureFixture[str]
) -> None:
    project_builder.write({"src/dynamic.component.ts": "@Component(config)\nexport class Dynamic {}\n"})

    main(["migrate", str(project_builder.root)])

    assert "Skipped src/dynamic.component.ts" in capsys.readouterr().err


def test_exclude_paths_from_config_are_applied(
    project_builder: ProjectBuilder, capsys: pytest.CaptureFixture[str]
) -> None:
    project_builder.write(
        {
            ".ngstandalone.yml": "exclude_paths:\n  - legacy/\n",
            "legacy/home.component.ts": COMPONENT,
        }
    )

    main(["migrate", str(project_builder.root)])

    assert "No files needed migration" in capsys.readouterr().out
    assert "IonContent" not in project_builder.read("legacy/home.component.ts")


def test_missing_project_exits_with_error(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["migrate", str(tmp_path / "missing")])

    assert excinfo.value.code == 1
    assert "Project path not found" in capsys.readouterr().err


def test_invalid_jobs_exits_with_error(project_builder: ProjectBuilder) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["migrate", str(project_builder.root), "--jobs", "0"])

    assert excinfo.value.code == 1


def test_log_file_receives_debug_output(project_builder: ProjectBuilder, tmp_path: Path) -> None:
    project_builder.write({"src/home.component.ts": COMPONENT})
    log_file = tmp_path / "logs" / "migrate.log"

    main(["migrate", str(project_builder.root), "--log-file", str(log_file)])

    logged = log_file.read_text(encoding="utf-8")
    assert "DEBUG ngstandalone.orchestrator" in logged
    assert "Migrated" in logged
