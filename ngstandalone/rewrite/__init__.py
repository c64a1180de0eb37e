"""Syntax-aware edits for imports, decorator literals and constructors."""

from .constructor import plan_icon_registration
from .declaration import DeclarationLiteral, merge_entries
from .edits import EditBatch, TextEdit
from .imports import ANCHOR_FRAMEWORK, ANCHOR_LAST, ImportStatement, collect_imports, plan_imports

__all__ = [
    "ANCHOR_FRAMEWORK",
    "ANCHOR_LAST",
    "DeclarationLiteral",
    "EditBatch",
    "ImportStatement",
    "TextEdit",
    "collect_imports",
    "merge_entries",
    "plan_icon_registration",
    "plan_imports",
]
