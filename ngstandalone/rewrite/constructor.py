"""Constructor synthesis for icon registration."""

from __future__ import annotations

from typing import List, Optional, Sequence

from tree_sitter import Node

from ..vocabulary.icons import ICON_REGISTRATION_SYMBOL
from .edits import EditBatch
from .syntax import line_indent, node_text

_FIELD_TYPES = {"public_field_definition", "abstract_class_field_definition"}


def registration_call(identifiers: Sequence[str]) -> str:
    return f"{ICON_REGISTRATION_SYMBOL}({{ {', '.join(identifiers)} }});"


def find_constructor(class_node: Node) -> Optional[Node]:
    body = class_node.child_by_field_name("body")
    if body is None:
        return None
    for member in body.named_children:
        if member.type == "method_definition" and node_text(member.child_by_field_name("name")) == "constructor":
            return member
    return None


def _registration_argument(statement: Node) -> Optional[Node]:
    """Return the argument node of an ``addIcons(...)`` statement, else None."""
    if statement.type != "expression_statement" or not statement.named_children:
        return None
    call = statement.named_children[0]
    if call.type != "call_expression":
        return None
    if node_text(call.child_by_field_name("function")) != ICON_REGISTRATION_SYMBOL:
        return None
    arguments = call.child_by_field_name("arguments")
    values = [child for child in arguments.named_children if child.type != "comment"] if arguments else []
    return values[0] if values else arguments


def _object_keys(node: Node) -> List[str]:
    keys: List[str] = []
    for member in node.named_children:
        if member.type == "shorthand_property_identifier":
            keys.append(node_text(member))
        elif member.type == "pair":
            keys.append(node_text(member.child_by_field_name("key")))
    return keys


def plan_icon_registration(
    source: bytes,
    class_node: Node,
    identifiers: Sequence[str],
    batch: EditBatch,
    indent_unit: str,
) -> bool:
    """Ensure the class constructor registers every icon in ``identifiers``.

    Returns False when the existing constructor already does.
    """
    if not identifiers:
        return False
    body = class_node.child_by_field_name("body")
    if body is None:
        return False

    constructor = find_constructor(class_node)
    if constructor is not None:
        return _plan_existing_constructor(source, constructor, identifiers, batch, indent_unit)

    class_indent = line_indent(source, body.start_byte)
    member_indent = class_indent + indent_unit
    text = (
        f"constructor() {{\n{member_indent}{indent_unit}{registration_call(identifiers)}\n{member_indent}}}"
    )
    members = [child for child in body.named_children if child.type != "comment"]
    if not members:
        batch.replace(body.start_byte, body.end_byte, f"{{\n{member_indent}{text}\n{class_indent}}}")
        return True

    fields = [member for member in members if member.type in _FIELD_TYPES]
    if fields:
        anchor = fields[-1]
        if anchor.next_sibling is not None and anchor.next_sibling.type == ";":
            anchor = anchor.next_sibling
        batch.insert(anchor.end_byte, f"\n\n{member_indent}{text}")
    else:
        batch.insert(body.start_byte + 1, f"\n{member_indent}{text}\n")
    return True


def _plan_existing_constructor(
    source: bytes,
    constructor: Node,
    identifiers: Sequence[str],
    batch: EditBatch,
    indent_unit: str,
) -> bool:
    block = constructor.child_by_field_name("body")
    if block is None:
        return False
    statements = [child for child in block.named_children if child.type != "comment"]

    for statement in statements:
        argument = _registration_argument(statement)
        if argument is None:
            continue
        if argument.type != "object":
            # Registered through a variable; nothing we can merge into.
            return False
        present = _object_keys(argument)
        missing = [identifier for identifier in identifiers if identifier not in present]
        if not missing:
            return False
        members = [child for child in argument.named_children if child.type != "comment"]
        if members:
            batch.insert(members[-1].end_byte, "".join(f", {identifier}" for identifier in missing))
        else:
            batch.replace(argument.start_byte, argument.end_byte, f"{{ {', '.join(missing)} }}")
        return True

    call = registration_call(identifiers)
    if statements:
        last = statements[-1]
        batch.insert(last.end_byte, f"\n{line_indent(source, last.start_byte)}{call}")
    else:
        method_indent = line_indent(source, constructor.start_byte)
        batch.replace(
            block.start_byte,
            block.end_byte,
            f"{{\n{method_indent}{indent_unit}{call}\n{method_indent}}}",
        )
    return True


__all__ = ["find_constructor", "plan_icon_registration", "registration_call"]
