"""Tests for ngstandalone.rewrite.imports."""

from __future__ import annotations

from typing import Sequence

from ngstandalone.models import ResolvedDependency, TemplateReferences
from ngstandalone.resolver import resolve_dependencies
from ngstandalone.rewrite.edits import EditBatch
from ngstandalone.rewrite.imports import (
    ANCHOR_LAST,
    collect_imports,
    plan_imports,
    plan_symbol_removal,
)
from ngstandalone.rewrite.syntax import parse_typescript

from tests._fixtures.project_builder import dedent


def _apply(source: str, dependencies: Sequence[ResolvedDependency], **kwargs: object) -> str:
    data = source.encode("utf-8")
    statements = collect_imports(parse_typescript(data).root_node)
    batch = EditBatch()
    plan_imports(data, statements, dependencies, batch, **kwargs)  # type: ignore[arg-type]
    return batch.apply(data).decode("utf-8")


def _deps(tags: Sequence[str] = (), icons: Sequence[str] = ()) -> list[ResolvedDependency]:
    return resolve_dependencies(TemplateReferences(tag_names=tuple(tags), icon_names=tuple(icons)))


def test_collect_imports_reads_specifiers_and_aliases() -> None:
    source = dedent(
        """
        import { Component, OnInit as Init } from "@angular/core";
        import * as rx from 'rxjs';
        import type { Route } from '@angular/router';
        import 'zone.js';
        """
    ).encode("utf-8")
    statements = collect_imports(parse_typescript(source).root_node)

    assert [s.module_path for s in statements] == ["@angular/core", "rxjs", "@angular/router", "zone.js"]
    core = statements[0]
    assert core.named_symbols == ["Component", "OnInit"]
    assert core.local_names == ["Component", "Init"]
    assert statements[1].has_default_or_namespace
    assert statements[1].local_names == ["rx"]
    assert statements[2].type_only
    assert not statements[2].mergeable
    assert statements[3].named_imports is None


def test_new_statements_follow_framework_import() -> None:
    source = dedent(
        """
        import { Component } from '@angular/core';
        import { Router } from '@angular/router';
        """
    )
    result = _apply(source, _deps(tags=["ion-icon"], icons=["add"]))
    assert result == dedent(
        """
        import { Component } from '@angular/core';
        import { addIcons } from 'ionicons';
        import { add } from 'ionicons/icons';
        import { IonIcon } from '@ionic/angular/standalone';
        import { Router } from '@angular/router';
        """
    )


def test_missing_symbols_merge_into_existing_statement() -> None:
    source = dedent(
        """
        import { Component } from "@angular/core";
        import { IonButton } from "@ionic/angular/standalone";
        """
    )
    result = _apply(source, _deps(tags=["ion-header", "ion-button", "ion-footer"]))
    assert result == dedent(
        """
        import { Component } from "@angular/core";
        import { IonButton, IonHeader, IonFooter } from "@ionic/angular/standalone";
        """
    )


def test_empty_named_import_is_filled() -> None:
    source = 'import {} from "@ionic/angular/standalone";\n'
    assert _apply(source, _deps(tags=["ion-note"])) == 'import { IonNote } from "@ionic/angular/standalone";\n'


def test_already_imported_symbols_produce_no_edits() -> None:
    source = dedent(
        """
        import { Component } from "@angular/core";
        import { IonIcon } from "@ionic/angular/standalone";
        """
    )
    assert _apply(source, _deps(tags=["ion-icon"])) == source


def test_last_anchor_appends_after_final_import() -> None:
    source = dedent(
        """
        import { NgModule } from "@angular/core";
        import { HomeComponent } from "./home.component";
        """
    )
    result = _apply(source, _deps(tags=["ion-app"]), anchor=ANCHOR_LAST)
    assert result.splitlines()[-1] == 'import { IonApp } from "@ionic/angular/standalone";'


def test_file_without_imports_gets_statements_at_top() -> None:
    source = "export const title = 'home';\n"
    result = _apply(source, _deps(tags=["ion-title"]), quote="'")
    assert result == "import { IonTitle } from '@ionic/angular/standalone';\n\nexport const title = 'home';\n"


def _remove(source: str, symbol: str) -> tuple[str, bool]:
    data = source.encode("utf-8")
    statement = collect_imports(parse_typescript(data).root_node)[0]
    batch = EditBatch()
    whole = plan_symbol_removal(data, statement, symbol, batch)
    return batch.apply(data).decode("utf-8"), whole


def test_removing_only_specifier_drops_statement() -> None:
    source = 'import { IonicModule } from "@ionic/angular";\nexport class A {}\n'
    assert _remove(source, "IonicModule") == ("export class A {}\n", True)


def test_removing_one_of_several_specifiers() -> None:
    first = _remove("import { IonicModule, NavController } from '@ionic/angular';\n", "IonicModule")
    assert first == ("import { NavController } from '@ionic/angular';\n", False)
    last = _remove("import { NavController, IonicModule } from '@ionic/angular';\n", "IonicModule")
    assert last == ("import { NavController } from '@ionic/angular';\n", False)


def test_removing_unknown_symbol_is_a_noop() -> None:
    source = "import { NavController } from '@ionic/angular';\n"
    assert _remove(source, "IonicModule") == (source, False)


def test_removing_named_specifier_beside_default_keeps_default() -> None:
    source = "import Ionic, { IonicModule } from '@ionic/angular';\n"
    assert _remove(source, "IonicModule") == ("import Ionic from '@ionic/angular';\n", False)


def test_removing_statement_swallows_crlf() -> None:
    source = "import { IonicModule } from '@ionic/angular';\r\nexport class A {}\r\n"
    assert _remove(source, "IonicModule") == ("export class A {}\r\n", True)
