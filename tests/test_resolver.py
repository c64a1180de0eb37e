"""Tests for ngstandalone.resolver."""

from __future__ import annotations

from ngstandalone.models import DependencyKind, TemplateReferences
from ngstandalone.resolver import component_symbols, icon_identifiers, resolve_dependencies


def test_component_symbols_follow_template_order() -> None:
    references = TemplateReferences(tag_names=("ion-toolbar", "ion-button", "ion-header"))
    resolved = resolve_dependencies(references)
    assert [dep.symbol for dep in resolved] == ["IonToolbar", "IonButton", "IonHeader"]
    assert all(dep.kind is DependencyKind.COMPONENT for dep in resolved)


def test_unknown_tags_are_dropped() -> None:
    references = TemplateReferences(tag_names=("div", "ion-card", "app-profile", "ion-chip"))
    assert component_symbols(resolve_dependencies(references)) == ["IonCard", "IonChip"]


def test_icons_precede_components() -> None:
    references = TemplateReferences(
        tag_names=("ion-button", "ion-icon"),
        icon_names=("logo-ionic", "add", "logo-ionic"),
    )
    resolved = resolve_dependencies(references)
    assert [(dep.symbol, dep.module_path) for dep in resolved] == [
        ("addIcons", "ionicons"),
        ("logoIonic", "ionicons/icons"),
        ("add", "ionicons/icons"),
        ("IonButton", "@ionic/angular/standalone"),
        ("IonIcon", "@ionic/angular/standalone"),
    ]
    assert icon_identifiers(resolved) == ["logoIonic", "add"]
    assert component_symbols(resolved) == ["IonButton", "IonIcon"]


def test_no_icons_means_no_registration() -> None:
    resolved = resolve_dependencies(TemplateReferences(tag_names=("ion-icon",)))
    assert [dep.symbol for dep in resolved] == ["IonIcon"]


def test_empty_references_resolve_to_nothing() -> None:
    assert resolve_dependencies(TemplateReferences()) == []
