"""Propagate resolved dependencies into single-component NgModules."""

from __future__ import annotations

import posixpath
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, List, Optional, Sequence, Set, Tuple

from tree_sitter import Node

from ..errors import MalformedDeclarationError
from ..logging import get_logger
from ..models import ResolvedDependency
from ..resolver import component_symbols
from ..rewrite.declaration import DeclarationLiteral
from ..rewrite.imports import ANCHOR_LAST, collect_imports
from ..rewrite.syntax import decorated_classes, node_text, parse_typescript
from ..vocabulary.tags import BLANKET_MODULE_PATH, BLANKET_MODULE_SYMBOL
from .component import component_literal, resolve_component
from .plan import FilePlan

if TYPE_CHECKING:  # pragma: no cover - typing only
    from ..project import Project, SourceFile

logger = get_logger("migrations.module")


@dataclass
class ModuleDeclaration:
    """What an ``@NgModule`` declares, as seen before any rewrite."""

    module_path: str
    module_name: str
    declarations: List[Tuple[Optional[str], str]] = field(default_factory=list)
    imports_blanket: bool = False
    literal: Optional[DeclarationLiteral] = field(default=None, repr=False, compare=False)

    @property
    def migratable(self) -> bool:
        return len(self.declarations) == 1 and self.imports_blanket and self.declarations[0][0] is not None


def resolve_class_file(project: "Project", module_path: str, root: Node, class_name: str) -> Optional[str]:
    """Return the project path that defines ``class_name`` as seen from ``module_path``."""
    for node in root.named_children:
        target = node
        if node.type == "export_statement":
            target = node.child_by_field_name("declaration") or node
        if target.type == "class_declaration" and node_text(target.child_by_field_name("name")) == class_name:
            return module_path

    for statement in collect_imports(root):
        if class_name not in statement.local_names:
            continue
        if not statement.module_path.startswith("."):
            return None
        base = posixpath.normpath(posixpath.join(posixpath.dirname(module_path), statement.module_path))
        for candidate in (base, f"{base}.ts", f"{base}/index.ts"):
            if candidate.endswith(".ts") and project.get_source_file(candidate) is not None:
                return candidate
        return None
    return None


def _array_or_none(literal: DeclarationLiteral, name: str) -> Optional[List[Node]]:
    try:
        return literal.array_elements(name)
    except MalformedDeclarationError:
        return None


def read_module(project: "Project", path: str, root: Node) -> List[ModuleDeclaration]:
    modules: List[ModuleDeclaration] = []
    for decorated in decorated_classes(root, "NgModule"):
        if decorated.literal is None:
            continue
        literal = DeclarationLiteral(decorated.literal)
        module = ModuleDeclaration(module_path=path, module_name=decorated.name, literal=literal)
        for element in _array_or_none(literal, "declarations") or []:
            name = node_text(element)
            class_file = resolve_class_file(project, path, root, name) if element.type == "identifier" else None
            module.declarations.append((class_file, name))
        imports = _array_or_none(literal, "imports") or []
        module.imports_blanket = any(node_text(element) == BLANKET_MODULE_SYMBOL for element in imports)
        modules.append(module)
    return modules


class ModuleIndex:
    """Read-only lookup of which NgModule declares which component class."""

    def __init__(self, modules: Sequence[ModuleDeclaration] = ()) -> None:
        self.modules = list(modules)
        self._by_class: Dict[Tuple[Optional[str], str], List[ModuleDeclaration]] = {}
        self._unresolved: Set[str] = set()
        for module in self.modules:
            for class_file, name in module.declarations:
                self._by_class.setdefault((class_file, name), []).append(module)
                if class_file is None:
                    self._unresolved.add(name)

    @classmethod
    def build(cls, project: "Project", files: Sequence["SourceFile"]) -> "ModuleIndex":
        modules: List[ModuleDeclaration] = []
        for source_file in files:
            if "@NgModule" not in source_file.text:
                continue
            tree = parse_typescript(source_file.text.encode("utf-8"))
            modules.extend(read_module(project, source_file.path, tree.root_node))
        return cls(modules)

    def modules_declaring(self, component_path: str, class_name: str) -> List[ModuleDeclaration]:
        found = list(self._by_class.get((component_path, class_name), []))
        if class_name in self._unresolved:
            found.extend(self._by_class.get((None, class_name), []))
        return found


def plan_modules(project: "Project", plan: FilePlan) -> int:
    """Replace ``IonicModule`` in single-component NgModules; returns how many were touched."""
    touched = 0
    for module in read_module(project, plan.path, plan.root):
        if not module.imports_blanket:
            continue
        if not module.migratable:
            logger.debug(
                "%s: %s declares %d component(s); leaving it",
                plan.path,
                module.module_name,
                len(module.declarations),
            )
            continue
        component_path, component_name = module.declarations[0]
        dependencies = (
            _resolve_declared_component(project, component_path, component_name) if component_path else None
        )
        if dependencies is None:
            logger.debug("%s: no template found for %s; leaving module", plan.path, component_name)
            continue

        literal = module.literal
        if literal is None:
            continue
        symbols = component_symbols(dependencies)
        entries: List[str] = []
        for element in literal.array_elements("imports") or []:
            text = node_text(element)
            replacement = symbols if text == BLANKET_MODULE_SYMBOL else [text]
            for entry in replacement:
                if entry not in entries:
                    entries.append(entry)
        literal.plan_set_array(plan.source, "imports", entries, plan.batch)
        plan.require([dep for dep in dependencies if dep.symbol in symbols], ANCHOR_LAST)
        plan.drop_import_if_unused(BLANKET_MODULE_SYMBOL, BLANKET_MODULE_PATH)
        plan.notes.append(f"module {module.module_name}")
        touched += 1
    return touched


def _resolve_declared_component(
    project: "Project", component_path: str, class_name: str
) -> Optional[List[ResolvedDependency]]:
    source_file = project.get_source_file(component_path)
    if source_file is None:
        return None
    tree = parse_typescript(source_file.text.encode("utf-8"))
    for decorated in decorated_classes(tree.root_node, "Component"):
        if decorated.name != class_name:
            continue
        try:
            literal = component_literal(decorated)
        except MalformedDeclarationError:
            return None
        return resolve_component(project, component_path, literal)
    return None


__all__ = ["ModuleDeclaration", "ModuleIndex", "plan_modules", "read_module", "resolve_class_file"]
