"""Find the template text for a component declaration."""

from __future__ import annotations

import posixpath
from typing import TYPE_CHECKING, List, Optional

from ..logging import get_logger
from ..models import TemplateKind, TemplateSource
from ..rewrite.declaration import DeclarationLiteral
from ..rewrite.syntax import literal_text

if TYPE_CHECKING:  # pragma: no cover - typing only
    from ..project import Project

logger = get_logger("templates")


def _candidate_paths(component_path: str, template_url: str) -> List[str]:
    directory = posixpath.dirname(component_path)
    candidates = [posixpath.normpath(posixpath.join(directory, template_url))]
    stem, _ = posixpath.splitext(component_path)
    sibling = posixpath.normpath(f"{stem}.html")
    if sibling not in candidates:
        candidates.append(sibling)
    return candidates


def locate_template(
    project: "Project", component_path: str, literal: DeclarationLiteral
) -> Optional[TemplateSource]:
    """Return the component's template, or None when it cannot be found.

    Inline ``template`` text is returned with its escape sequences decoded,
    whitespace untouched. ``templateUrl`` is resolved against the
    component's directory, falling back to the ``.html`` file
    that shares the component's file name.
    """
    inline = literal.get("template")
    if inline is not None:
        text = literal_text(inline.value)
        if text is None:
            logger.debug("Template of %s is not a literal; skipping", component_path)
            return None
        return TemplateSource(kind=TemplateKind.INLINE, text=text, origin_path=component_path)

    external = literal.get("templateUrl")
    if external is None:
        return None
    template_url = literal_text(external.value)
    if not template_url:
        logger.debug("templateUrl of %s is not a literal; skipping", component_path)
        return None

    for candidate in _candidate_paths(component_path, template_url):
        text = project.read_text(candidate)
        if text is not None:
            return TemplateSource(kind=TemplateKind.EXTERNAL, text=text, origin_path=candidate)

    logger.debug("Template %s for %s not found", template_url, component_path)
    return None


__all__ = ["locate_template"]
