"""Conversion between ionicons kebab-case names and their exported constants."""

from __future__ import annotations

import re

from ..models import DependencyKind, IconReference, ResolvedDependency

ICON_REGISTRATION_MODULE = "ionicons"
ICON_REGISTRATION_SYMBOL = "addIcons"
ICON_CONSTANTS_MODULE = "ionicons/icons"

_KEBAB_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


def is_icon_name(value: str) -> bool:
    """Return True for well-formed kebab-case icon names such as ``logo-ionic``."""
    return bool(_KEBAB_PATTERN.match(value))


def to_identifier(kebab_name: str) -> str:
    """Return the camelCase constant name for an icon (``logo-ionic`` -> ``logoIonic``)."""
    if not is_icon_name(kebab_name):
        raise ValueError(f"Not a kebab-case icon name: {kebab_name!r}")
    head, *rest = kebab_name.split("-")
    return head + "".join(segment[:1].upper() + segment[1:] for segment in rest)


def icon_reference(kebab_name: str) -> IconReference:
    """Pair an icon name with its constant.

    The camel form alone does not identify the icon: ``logo-500px`` and
    ``logo500px`` both map to ``logo500px``. The reference keeps the kebab
    name so the original spelling is never reconstructed from the constant.
    """
    return IconReference(kebab_name=kebab_name, camel_identifier=to_identifier(kebab_name))


def registration_dependency() -> ResolvedDependency:
    return ResolvedDependency(
        symbol=ICON_REGISTRATION_SYMBOL,
        module_path=ICON_REGISTRATION_MODULE,
        kind=DependencyKind.ICON_REGISTRATION,
    )


def constant_dependency(reference: IconReference) -> ResolvedDependency:
    return ResolvedDependency(
        symbol=reference.camel_identifier,
        module_path=ICON_CONSTANTS_MODULE,
        kind=DependencyKind.ICON_CONSTANT,
    )


__all__ = [
    "ICON_CONSTANTS_MODULE",
    "ICON_REGISTRATION_MODULE",
    "ICON_REGISTRATION_SYMBOL",
    "constant_dependency",
    "icon_reference",
    "is_icon_name",
    "registration_dependency",
    "to_identifier",
]
