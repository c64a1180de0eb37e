"""Standalone component migration."""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

from ..errors import MalformedDeclarationError
from ..logging import get_logger
from ..models import DependencyKind, ResolvedDependency
from ..resolver import component_symbols, icon_identifiers, resolve_dependencies
from ..rewrite.constructor import plan_icon_registration
from ..rewrite.declaration import DeclarationLiteral, merge_entries
from ..rewrite.imports import ANCHOR_FRAMEWORK
from ..rewrite.syntax import DecoratedClass, decorated_classes, node_text
from ..templates.locator import locate_template
from ..templates.scanner import scan_template
from ..vocabulary.tags import BLANKET_MODULE_PATH, BLANKET_MODULE_SYMBOL, is_standalone_symbol
from .plan import FilePlan

if TYPE_CHECKING:  # pragma: no cover - typing only
    from ..project import Project
    from .module import ModuleIndex

logger = get_logger("migrations.component")


def component_literal(decorated: DecoratedClass) -> DeclarationLiteral:
    literal = decorated.literal
    if literal is None:
        raise MalformedDeclarationError(f"@Component on {decorated.name} has no object literal")
    return DeclarationLiteral(literal)


def resolve_component(
    project: "Project", component_path: str, literal: DeclarationLiteral
) -> Optional[List[ResolvedDependency]]:
    """Locate, scan and resolve a component's template; None when it has no usable template."""
    template = locate_template(project, component_path, literal)
    if template is None:
        return None
    references = scan_template(template.text)
    logger.debug(
        "%s: %d tag(s), %d icon(s) in %s template",
        component_path,
        len(references.tag_names),
        len(references.icon_names),
        template.kind.value,
    )
    return resolve_dependencies(references)


def _replaceable(entry: str) -> bool:
    return is_standalone_symbol(entry) or entry == BLANKET_MODULE_SYMBOL


def plan_components(project: "Project", plan: FilePlan, module_index: "ModuleIndex") -> int:
    """Record edits for every ``@Component`` class in the file; returns how many were touched."""
    touched = 0
    for decorated in decorated_classes(plan.root, "Component"):
        literal = component_literal(decorated)
        declaring = module_index.modules_declaring(plan.path, decorated.name)
        standalone = literal.flag("standalone") is not False and not declaring

        if not standalone:
            if not (len(declaring) == 1 and declaring[0].migratable):
                logger.debug("%s: %s is declared by an NgModule; leaving it", plan.path, decorated.name)
                continue

        dependencies = resolve_component(project, plan.path, literal)
        if not dependencies:
            continue

        if standalone:
            existing = literal.array_elements("imports") or []
            entries = merge_entries(
                [node_text(element) for element in existing],
                component_symbols(dependencies),
                _replaceable,
            )
            literal.plan_set_array(plan.source, "imports", entries, plan.batch)
            plan.require(dependencies, ANCHOR_FRAMEWORK)
            plan.drop_import_if_unused(BLANKET_MODULE_SYMBOL, BLANKET_MODULE_PATH)
        else:
            # Declared by a module that is migrated separately: only icons belong here.
            icons = [dep for dep in dependencies if dep.kind is not DependencyKind.COMPONENT]
            if not icons:
                continue
            plan.require(icons, ANCHOR_FRAMEWORK)

        plan_icon_registration(
            plan.source,
            decorated.class_node,
            icon_identifiers(dependencies),
            plan.batch,
            plan.indent_unit,
        )
        plan.notes.append(f"component {decorated.name}")
        touched += 1
    return touched


__all__ = ["component_literal", "plan_components", "resolve_component"]
