"""Tree-sitter parsing helpers for TypeScript sources and HTML templates."""

from __future__ import annotations

import re
import threading
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional

import tree_sitter_html
import tree_sitter_typescript
from tree_sitter import Language, Node, Parser, Tree

_LANGUAGES: Dict[str, Language] = {
    "typescript": Language(tree_sitter_typescript.language_typescript()),
    "html": Language(tree_sitter_html.language()),
}

# Parser instances are not safe to share between threads.
_local = threading.local()


def get_parser(language_key: str) -> Parser:
    parsers: Dict[str, Parser] = getattr(_local, "parsers", None) or {}
    parser = parsers.get(language_key)
    if parser is None:
        parser = Parser(_LANGUAGES[language_key])
        parsers[language_key] = parser
        _local.parsers = parsers
    return parser


def parse_typescript(source: bytes) -> Tree:
    return get_parser("typescript").parse(source)


def parse_html(source: bytes) -> Tree:
    return get_parser("html").parse(source)


def node_text(node: Optional[Node]) -> str:
    if node is None or node.text is None:
        return ""
    return node.text.decode("utf-8", errors="ignore")


def walk(node: Node) -> Iterator[Node]:
    """Yield ``node`` and its descendants in document order."""
    yield node
    for child in node.children:
        yield from walk(child)


def literal_value(node: Optional[Node]) -> Optional[str]:
    """Return the raw text of a string or substitution-free template literal."""
    if node is None:
        return None
    if node.type == "string":
        return node_text(node)[1:-1]
    if node.type == "template_string":
        if any(child.type == "template_substitution" for child in node.children):
            return None
        return node_text(node)[1:-1]
    return None


_ESCAPE_SEQUENCE = re.compile(r"\\(u\{[0-9a-fA-F]+\}|u[0-9a-fA-F]{4}|x[0-9a-fA-F]{2}|\r\n|[\s\S])")
_SIMPLE_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "b": "\b", "f": "\f", "v": "\v", "0": "\0"}


def unescape_literal(raw: str) -> str:
    """Decode JavaScript escape sequences in the raw body of a string literal."""

    def _decode(match: "re.Match[str]") -> str:
        sequence = match.group(1)
        if sequence in ("\n", "\r\n", "\r", "\u2028", "\u2029"):
            return ""
        if sequence.startswith("u{"):
            return chr(int(sequence[2:-1], 16))
        if len(sequence) > 1:
            return chr(int(sequence[1:], 16))
        return _SIMPLE_ESCAPES.get(sequence, sequence)

    return _ESCAPE_SEQUENCE.sub(_decode, raw)


def literal_text(node: Optional[Node]) -> Optional[str]:
    """Return the decoded value of a string or substitution-free template literal."""
    raw = literal_value(node)
    return unescape_literal(raw) if raw is not None else None


def line_indent(source: bytes, offset: int) -> str:
    """Return the leading whitespace of the line containing ``offset``."""
    line_start = source.rfind(b"\n", 0, offset) + 1
    end = line_start
    while end < len(source) and source[end : end + 1] in (b" ", b"\t"):
        end += 1
    return source[line_start:end].decode("utf-8")


def infer_indent_unit(source: bytes) -> str:
    """Return the smallest indentation step used by the file, defaulting to four spaces."""
    smallest: Optional[int] = None
    for raw in source.decode("utf-8", errors="ignore").splitlines():
        if raw.startswith("\t"):
            return "\t"
        stripped = raw.lstrip(" ")
        if not stripped:
            continue
        width = len(raw) - len(stripped)
        if width and (smallest is None or width < smallest):
            smallest = width
    return " " * (smallest or 4)


def infer_newline(source: bytes) -> str:
    """Return the line terminator of the file's first line, ``"\\n"`` by default."""
    first = source.find(b"\n")
    if first > 0 and source[first - 1 : first] == b"\r":
        return "\r\n"
    return "\n"


@dataclass
class DecoratedClass:
    """A class declaration together with one of its decorators."""

    name: str
    class_node: Node
    decorator_name: str
    arguments: List[Node]

    @property
    def literal(self) -> Optional[Node]:
        """The object literal passed to the decorator, if any."""
        if len(self.arguments) == 1 and self.arguments[0].type == "object":
            return self.arguments[0]
        return None


def decorated_classes(root: Node, decorator_name: str) -> List[DecoratedClass]:
    """Return top-level classes decorated with ``@decorator_name(...)`` in file order."""
    found: List[DecoratedClass] = []
    for node in walk(root):
        if node.type != "class_declaration":
            continue
        decorators = [child for child in node.children if child.type == "decorator"]
        if node.parent is not None and node.parent.type == "export_statement":
            decorators = [
                child for child in node.parent.children if child.type == "decorator"
            ] + decorators
        for decorator in decorators:
            call = next((child for child in decorator.named_children if child.type == "call_expression"), None)
            if call is None:
                continue
            if node_text(call.child_by_field_name("function")) != decorator_name:
                continue
            arguments_node = call.child_by_field_name("arguments")
            arguments = [
                child for child in (arguments_node.named_children if arguments_node else [])
                if child.type != "comment"
            ]
            found.append(
                DecoratedClass(
                    name=node_text(node.child_by_field_name("name")),
                    class_node=node,
                    decorator_name=decorator_name,
                    arguments=arguments,
                )
            )
    return found


__all__ = [
    "DecoratedClass",
    "decorated_classes",
    "get_parser",
    "infer_indent_unit",
    "infer_newline",
    "line_indent",
    "literal_text",
    "literal_value",
    "node_text",
    "parse_html",
    "parse_typescript",
    "unescape_literal",
    "walk",
]
