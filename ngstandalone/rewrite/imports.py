"""Import statement inspection and merge planning."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Set

from tree_sitter import Node

from ..models import ResolvedDependency
from .edits import EditBatch
from .syntax import literal_value, node_text

FRAMEWORK_MODULE = "@angular/core"

ANCHOR_FRAMEWORK = "framework"
ANCHOR_LAST = "last"


@dataclass
class ImportStatement:
    """A parsed ``import ... from "module"`` statement."""

    module_path: str
    node: Node
    named_symbols: List[str] = field(default_factory=list)
    local_names: List[str] = field(default_factory=list)
    specifiers: List[Node] = field(default_factory=list)
    named_imports: Optional[Node] = None
    has_default_or_namespace: bool = False
    type_only: bool = False

    @property
    def mergeable(self) -> bool:
        return self.named_imports is not None and not self.type_only

    def specifier_for(self, symbol: str) -> Optional[Node]:
        for name, spec in zip(self.named_symbols, self.specifiers):
            if name == symbol:
                return spec
        return None


def collect_imports(root: Node) -> List[ImportStatement]:
    """Return the file's top-level import statements in source order."""
    statements: List[ImportStatement] = []
    for node in root.named_children:
        if node.type != "import_statement":
            continue
        module_path = literal_value(node.child_by_field_name("source"))
        if module_path is None:
            continue
        statement = ImportStatement(
            module_path=module_path,
            node=node,
            type_only=any(child.type == "type" for child in node.children),
        )
        clause = next((child for child in node.named_children if child.type == "import_clause"), None)
        if clause is not None:
            for part in clause.named_children:
                if part.type == "named_imports":
                    statement.named_imports = part
                    for spec in part.named_children:
                        if spec.type != "import_specifier":
                            continue
                        name = node_text(spec.child_by_field_name("name"))
                        alias = spec.child_by_field_name("alias")
                        statement.named_symbols.append(name)
                        statement.local_names.append(node_text(alias) if alias else name)
                        statement.specifiers.append(spec)
                elif part.type == "identifier":
                    statement.has_default_or_namespace = True
                    statement.local_names.append(node_text(part))
                elif part.type == "namespace_import":
                    statement.has_default_or_namespace = True
                    ident = next((c for c in part.named_children if c.type == "identifier"), None)
                    if ident is not None:
                        statement.local_names.append(node_text(ident))
        statements.append(statement)
    return statements


def bound_names(statements: Iterable[ImportStatement]) -> Set[str]:
    names: Set[str] = set()
    for statement in statements:
        names.update(statement.local_names)
    return names


def detect_quote(statements: Sequence[ImportStatement]) -> str:
    for statement in statements:
        source = statement.node.child_by_field_name("source")
        text = node_text(source)
        if text[:1] in {'"', "'"}:
            return text[0]
    return '"'


def format_import(symbols: Sequence[str], module_path: str, quote: str) -> str:
    return f"import {{ {', '.join(symbols)} }} from {quote}{module_path}{quote};"


def plan_imports(
    source: bytes,
    statements: Sequence[ImportStatement],
    dependencies: Sequence[ResolvedDependency],
    batch: EditBatch,
    *,
    anchor: str = ANCHOR_FRAMEWORK,
    quote: Optional[str] = None,
    removed: Sequence[ImportStatement] = (),
) -> List[str]:
    """Plan the edits that make every dependency importable.

    Symbols are grouped per module in first-appearance order. Missing
    symbols are appended to an existing named import for the module; other
    modules get a new statement placed after the anchor import. Returns the
    list of symbols that were newly planned.
    """
    removed_offsets = {statement.node.start_byte for statement in removed}
    remaining = [statement for statement in statements if statement.node.start_byte not in removed_offsets]
    already_bound = bound_names(remaining)

    grouped: Dict[str, List[str]] = {}
    for dependency in dependencies:
        if dependency.symbol in already_bound:
            continue
        symbols = grouped.setdefault(dependency.module_path, [])
        if dependency.symbol not in symbols:
            symbols.append(dependency.symbol)

    quote = quote or detect_quote(statements)
    planned: List[str] = []
    new_lines: List[str] = []
    for module_path, symbols in grouped.items():
        if not symbols:
            continue
        planned.extend(symbols)
        existing = next(
            (s for s in remaining if s.module_path == module_path and s.mergeable),
            None,
        )
        if existing is None:
            new_lines.append(format_import(symbols, module_path, quote))
        elif existing.specifiers:
            batch.insert(existing.specifiers[-1].end_byte, "".join(f", {symbol}" for symbol in symbols))
        elif existing.named_imports is not None:
            batch.replace(
                existing.named_imports.start_byte,
                existing.named_imports.end_byte,
                f"{{ {', '.join(symbols)} }}",
            )

    if new_lines:
        anchor_node = _anchor_statement(remaining, anchor)
        if anchor_node is not None:
            batch.insert(anchor_node.end_byte, "".join(f"\n{line}" for line in new_lines))
        else:
            separator = "\n" if source.startswith((b"\n", b"\r\n")) else "\n\n"
            batch.insert(0, "\n".join(new_lines) + separator)
    return planned


def _anchor_statement(statements: Sequence[ImportStatement], anchor: str) -> Optional[Node]:
    if not statements:
        return None
    if anchor == ANCHOR_FRAMEWORK:
        for statement in statements:
            if statement.module_path == FRAMEWORK_MODULE:
                return statement.node
    return statements[-1].node


def plan_symbol_removal(source: bytes, statement: ImportStatement, symbol: str, batch: EditBatch) -> bool:
    """Remove ``symbol`` from ``statement``; returns True when the whole statement goes."""
    spec = statement.specifier_for(symbol)
    if spec is None:
        return False
    if len(statement.specifiers) == 1 and not statement.has_default_or_namespace:
        start = statement.node.start_byte
        end = statement.node.end_byte
        if source[end : end + 2] == b"\r\n":
            end += 2
        elif source[end : end + 1] == b"\n":
            end += 1
        batch.delete(start, end)
        return True
    named = statement.named_imports
    if len(statement.specifiers) == 1 and named is not None:
        # ``import Default, { symbol } from``: drop the braces and the comma before them.
        prev = named.prev_sibling
        start = prev.start_byte if prev is not None and prev.type == "," else named.start_byte
        batch.delete(start, named.end_byte)
        return False
    index = statement.named_symbols.index(symbol)
    if index + 1 < len(statement.specifiers):
        batch.delete(spec.start_byte, statement.specifiers[index + 1].start_byte)
    else:
        batch.delete(statement.specifiers[index - 1].end_byte, spec.end_byte)
    return False


__all__ = [
    "ANCHOR_FRAMEWORK",
    "ANCHOR_LAST",
    "FRAMEWORK_MODULE",
    "ImportStatement",
    "bound_names",
    "collect_imports",
    "detect_quote",
    "format_import",
    "plan_imports",
    "plan_symbol_removal",
]
