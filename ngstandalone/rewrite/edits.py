"""Byte-range text edits applied to a source file in one step."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from ..errors import EditConflictError


@dataclass(frozen=True)
class TextEdit:
    """Replace ``source[start:end]`` with ``text``; insertions have ``start == end``."""

    start: int
    end: int
    text: str

    @property
    def is_insertion(self) -> bool:
        return self.start == self.end


@dataclass
class EditBatch:
    """Collects edits against one source snapshot and applies them together.

    Edits are validated before anything is written so that a conflicting
    plan leaves the source untouched. Insertions at the same offset are
    emitted in the order they were added.
    """

    edits: List[TextEdit] = field(default_factory=list)

    def add(self, edit: TextEdit) -> None:
        self.edits.append(edit)

    def insert(self, offset: int, text: str) -> None:
        self.add(TextEdit(offset, offset, text))

    def replace(self, start: int, end: int, text: str) -> None:
        self.add(TextEdit(start, end, text))

    def delete(self, start: int, end: int) -> None:
        self.add(TextEdit(start, end, ""))

    def __bool__(self) -> bool:
        return bool(self.edits)

    def __len__(self) -> int:
        return len(self.edits)

    def apply(self, source: bytes, newline: str = "\n") -> bytes:
        """Return ``source`` with every edit applied; generated line breaks use ``newline``."""
        ordered = sorted(enumerate(self.edits), key=lambda item: (item[1].start, item[1].end, item[0]))
        edits = [edit for _, edit in ordered]
        for edit in edits:
            if edit.start < 0 or edit.end > len(source) or edit.start > edit.end:
                raise EditConflictError(f"Edit range {edit.start}:{edit.end} is outside the source")
        for previous, current in zip(edits, edits[1:]):
            if current.start < previous.end:
                raise EditConflictError(
                    f"Edits {previous.start}:{previous.end} and {current.start}:{current.end} overlap"
                )

        pieces: List[bytes] = []
        cursor = 0
        for edit in edits:
            pieces.append(source[cursor : edit.start])
            text = edit.text if newline == "\n" else edit.text.replace("\n", newline)
            pieces.append(text.encode("utf-8"))
            cursor = edit.end
        pieces.append(source[cursor:])
        return b"".join(pieces)


__all__ = ["EditBatch", "TextEdit"]
