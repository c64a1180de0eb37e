"""Per-file accumulation of edits and required imports."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from tree_sitter import Node, Tree

from ..models import ResolvedDependency
from ..rewrite.edits import EditBatch
from ..rewrite.imports import (
    ANCHOR_FRAMEWORK,
    ImportStatement,
    collect_imports,
    plan_imports,
    plan_symbol_removal,
)
from ..rewrite.syntax import infer_indent_unit, infer_newline, node_text, parse_typescript, walk

_REFERENCE_TYPES = {"identifier", "type_identifier", "shorthand_property_identifier"}


@dataclass
class FilePlan:
    """Everything the migrations want to change in one file.

    Migrations only record intent here; :meth:`render` turns it into a
    single :class:`EditBatch` so that the file is rewritten in one step.
    """

    path: str
    source: bytes
    tree: Tree
    indent_unit: str
    quote: Optional[str] = None
    newline: str = "\n"
    batch: EditBatch = field(default_factory=EditBatch)
    dependencies: List[ResolvedDependency] = field(default_factory=list)
    anchor: Optional[str] = None
    unused_imports: List[Tuple[str, str]] = field(default_factory=list)
    notes: List[str] = field(default_factory=list)

    @classmethod
    def for_text(
        cls, path: str, text: str, *, indent: Optional[str] = None, quote: Optional[str] = None
    ) -> "FilePlan":
        source = text.encode("utf-8")
        return cls(
            path=path,
            source=source,
            tree=parse_typescript(source),
            indent_unit=indent or infer_indent_unit(source),
            newline=infer_newline(source),
            quote=quote,
        )

    @property
    def root(self) -> Node:
        return self.tree.root_node

    def require(self, dependencies: Sequence[ResolvedDependency], anchor: str = ANCHOR_FRAMEWORK) -> None:
        """Record imports the file needs; the first caller picks where new statements go."""
        if self.anchor is None:
            self.anchor = anchor
        known = {dep.symbol for dep in self.dependencies}
        for dependency in dependencies:
            if dependency.symbol not in known:
                known.add(dependency.symbol)
                self.dependencies.append(dependency)

    def drop_import_if_unused(self, symbol: str, module_path: str) -> None:
        if (symbol, module_path) not in self.unused_imports:
            self.unused_imports.append((symbol, module_path))

    def render(self) -> bytes:
        """Apply the batch and return the new source, or the original when nothing changed."""
        statements = collect_imports(self.root)
        removed: List[ImportStatement] = []
        for symbol, module_path in self.unused_imports:
            if self._still_referenced(symbol):
                continue
            for statement in statements:
                if statement.module_path != module_path:
                    continue
                if plan_symbol_removal(self.source, statement, symbol, self.batch):
                    removed.append(statement)

        if self.dependencies:
            plan_imports(
                self.source,
                statements,
                self.dependencies,
                self.batch,
                anchor=self.anchor or ANCHOR_FRAMEWORK,
                quote=self.quote,
                removed=removed,
            )
        if not self.batch:
            return self.source
        return self.batch.apply(self.source, self.newline)

    def _still_referenced(self, symbol: str) -> bool:
        """True when ``symbol`` is used outside imports and outside planned replacements."""
        replaced = [(edit.start, edit.end) for edit in self.batch.edits if not edit.is_insertion]
        for node in walk(self.root):
            if node.type not in _REFERENCE_TYPES or node_text(node) != symbol:
                continue
            if _inside_import(node):
                continue
            if any(start <= node.start_byte and node.end_byte <= end for start, end in replaced):
                continue
            return True
        return False


def _inside_import(node: Node) -> bool:
    parent = node.parent
    while parent is not None:
        if parent.type == "import_statement":
            return True
        parent = parent.parent
    return False


__all__ = ["FilePlan"]
