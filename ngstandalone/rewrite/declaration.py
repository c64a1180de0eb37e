"""Ordered view over a decorator's object literal and edits against it."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional, Sequence

from tree_sitter import Node

from ..errors import MalformedDeclarationError
from .edits import EditBatch
from .syntax import line_indent, literal_value, node_text


@dataclass
class LiteralProperty:
    name: str
    node: Node
    value: Optional[Node]


class DeclarationLiteral:
    """Properties of ``@Component({...})`` / ``@NgModule({...})`` in source order."""

    def __init__(self, node: Node) -> None:
        if node.type != "object":
            raise MalformedDeclarationError(f"Expected an object literal, found {node.type}")
        self.node = node
        self.members: List[Node] = [child for child in node.named_children if child.type != "comment"]
        self.properties: List[LiteralProperty] = []
        for member in self.members:
            if member.type == "pair":
                key = member.child_by_field_name("key")
                name = literal_value(key) if key is not None and key.type == "string" else node_text(key)
                self.properties.append(LiteralProperty(name, member, member.child_by_field_name("value")))
            elif member.type == "shorthand_property_identifier":
                self.properties.append(LiteralProperty(node_text(member), member, None))

    def __iter__(self) -> Iterator[LiteralProperty]:
        return iter(self.properties)

    def names(self) -> List[str]:
        return [prop.name for prop in self.properties]

    def get(self, name: str) -> Optional[LiteralProperty]:
        for prop in self.properties:
            if prop.name == name:
                return prop
        return None

    def value(self, name: str) -> Optional[Node]:
        prop = self.get(name)
        return prop.value if prop is not None else None

    def flag(self, name: str) -> Optional[bool]:
        """Return the boolean literal assigned to ``name``, or None when absent or not literal."""
        value = self.value(name)
        if value is None:
            return None
        if value.type == "true":
            return True
        if value.type == "false":
            return False
        return None

    def array_elements(self, name: str) -> Optional[List[Node]]:
        """Return the elements of an array-valued property, or None when it is absent."""
        prop = self.get(name)
        if prop is None:
            return None
        if prop.value is None or prop.value.type != "array":
            raise MalformedDeclarationError(f"'{name}' is not an array literal")
        return [child for child in prop.value.named_children if child.type != "comment"]

    def plan_set_array(self, source: bytes, name: str, entries: Sequence[str], batch: EditBatch) -> bool:
        """Set ``name`` to ``[entries]``, replacing the value or appending a property.

        Returns False when the property already holds exactly this array.
        """
        array_text = f"[{', '.join(entries)}]"
        prop = self.get(name)
        if prop is not None:
            if prop.value is None or prop.value.type != "array":
                raise MalformedDeclarationError(f"'{name}' is not an array literal")
            if node_text(prop.value) == array_text:
                return False
            batch.replace(prop.value.start_byte, prop.value.end_byte, array_text)
            return True

        if not self.members:
            batch.replace(self.node.start_byte, self.node.end_byte, f"{{ {name}: {array_text} }}")
            return True

        last = self.members[-1]
        comma = last.next_sibling if last.next_sibling is not None and last.next_sibling.type == "," else None
        multiline = last.start_point[0] != self.node.start_point[0]
        if multiline:
            indent = line_indent(source, last.start_byte)
            if comma is not None:
                batch.insert(comma.end_byte, f"\n{indent}{name}: {array_text},")
            else:
                batch.insert(last.end_byte, f",\n{indent}{name}: {array_text}")
        elif comma is not None:
            batch.insert(comma.end_byte, f" {name}: {array_text},")
        else:
            batch.insert(last.end_byte, f", {name}: {array_text}")
        return True


def merge_entries(
    existing: Sequence[str], resolved: Sequence[str], replaceable: Callable[[str], bool]
) -> List[str]:
    """Keep existing entries that ``replaceable`` rejects, then append ``resolved``."""
    merged: List[str] = [entry for entry in existing if not replaceable(entry)]
    for symbol in resolved:
        if symbol not in merged:
            merged.append(symbol)
    return merged


__all__ = ["DeclarationLiteral", "LiteralProperty", "merge_entries"]
