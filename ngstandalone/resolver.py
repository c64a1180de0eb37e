"""Turn scanned template references into ordered import dependencies."""

from __future__ import annotations

from typing import List, Sequence

from .models import DependencyKind, ResolvedDependency, TemplateReferences
from .vocabulary.icons import constant_dependency, icon_reference, registration_dependency
from .vocabulary.tags import resolve_tag


def resolve_dependencies(references: TemplateReferences) -> List[ResolvedDependency]:
    """Resolve references to ``addIcons``, icon constants, then component symbols.

    Unknown tags are dropped. Each group keeps the template's first-seen
    order and symbols are never repeated.
    """
    resolved: List[ResolvedDependency] = []
    seen = set()

    def _add(dependency: ResolvedDependency) -> None:
        if dependency.symbol in seen:
            return
        seen.add(dependency.symbol)
        resolved.append(dependency)

    if references.icon_names:
        _add(registration_dependency())
        for icon in references.icon_names:
            _add(constant_dependency(icon_reference(icon)))

    for tag_name in references.tag_names:
        entry = resolve_tag(tag_name)
        if entry is None:
            continue
        _add(
            ResolvedDependency(
                symbol=entry.exported_symbol,
                module_path=entry.module_path,
                kind=DependencyKind.COMPONENT,
            )
        )
    return resolved


def component_symbols(dependencies: Sequence[ResolvedDependency]) -> List[str]:
    return [dep.symbol for dep in dependencies if dep.kind is DependencyKind.COMPONENT]


def icon_identifiers(dependencies: Sequence[ResolvedDependency]) -> List[str]:
    return [dep.symbol for dep in dependencies if dep.kind is DependencyKind.ICON_CONSTANT]


__all__ = ["component_symbols", "icon_identifiers", "resolve_dependencies"]
