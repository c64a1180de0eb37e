"""Extract Ionic tag names and icon names from template markup."""

from __future__ import annotations

import re
from typing import List, Optional

from tree_sitter import Node

from ..models import TemplateReferences
from ..rewrite.syntax import node_text, parse_html, walk
from ..vocabulary.icons import is_icon_name

ICON_TAG = "ion-icon"
_ICON_ATTRIBUTES = ("name", "ios", "md")
_BOUND_ICON_ATTRIBUTES = tuple(f"[{name}]" for name in _ICON_ATTRIBUTES)
_QUOTED_LITERAL = re.compile(r"'([^']*)'|\"([^\"]*)\"")

_TAG_NODES = {"start_tag", "self_closing_tag"}


def scan_template(text: str) -> TemplateReferences:
    """Return tags and icon names used by ``text`` in first-seen order."""
    if not text.strip():
        return TemplateReferences()
    tree = parse_html(text.encode("utf-8"))

    tags: List[str] = []
    icons: List[str] = []
    for node in walk(tree.root_node):
        if node.type not in _TAG_NODES:
            continue
        tag_name = _tag_name(node)
        if not tag_name:
            continue
        if tag_name not in tags:
            tags.append(tag_name)
        if tag_name == ICON_TAG:
            for icon in _icon_names(node):
                if icon not in icons:
                    icons.append(icon)
    return TemplateReferences(tag_names=tuple(tags), icon_names=tuple(icons))


def _tag_name(tag_node: Node) -> str:
    for child in tag_node.named_children:
        if child.type == "tag_name":
            return node_text(child)
    return ""


def _attribute_value(attribute: Node) -> Optional[str]:
    for child in attribute.named_children:
        if child.type == "attribute_value":
            return node_text(child)
        if child.type == "quoted_attribute_value":
            inner = next((c for c in child.named_children if c.type == "attribute_value"), None)
            return node_text(inner) if inner is not None else ""
    return None


def _icon_names(tag_node: Node) -> List[str]:
    names: List[str] = []
    for attribute in tag_node.named_children:
        if attribute.type != "attribute":
            continue
        name_node = next((c for c in attribute.named_children if c.type == "attribute_name"), None)
        attribute_name = node_text(name_node)
        value = _attribute_value(attribute)
        if value is None:
            continue
        if attribute_name in _ICON_ATTRIBUTES:
            candidate = value.strip()
            if is_icon_name(candidate):
                names.append(candidate)
        elif attribute_name in _BOUND_ICON_ATTRIBUTES:
            # Only literal strings inside the binding, e.g. [name]="active ? 'star' : 'star-outline'".
            for match in _QUOTED_LITERAL.finditer(value):
                candidate = match.group(1) if match.group(1) is not None else match.group(2)
                if is_icon_name(candidate):
                    names.append(candidate)
    return names


__all__ = ["ICON_TAG", "scan_template"]
