"""Ionic custom-element vocabulary for standalone imports."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Optional

from ..models import TagEntry

STANDALONE_MODULE = "@ionic/angular/standalone"
BLANKET_MODULE_SYMBOL = "IonicModule"
BLANKET_MODULE_PATH = "@ionic/angular"

_TAG_NAMES = (
    "ion-accordion",
    "ion-accordion-group",
    "ion-action-sheet",
    "ion-alert",
    "ion-app",
    "ion-avatar",
    "ion-back-button",
    "ion-backdrop",
    "ion-badge",
    "ion-breadcrumb",
    "ion-breadcrumbs",
    "ion-button",
    "ion-buttons",
    "ion-card",
    "ion-card-content",
    "ion-card-header",
    "ion-card-subtitle",
    "ion-card-title",
    "ion-checkbox",
    "ion-chip",
    "ion-col",
    "ion-content",
    "ion-datetime",
    "ion-datetime-button",
    "ion-fab",
    "ion-fab-button",
    "ion-fab-list",
    "ion-footer",
    "ion-grid",
    "ion-header",
    "ion-icon",
    "ion-img",
    "ion-infinite-scroll",
    "ion-infinite-scroll-content",
    "ion-input",
    "ion-item",
    "ion-item-divider",
    "ion-item-group",
    "ion-item-option",
    "ion-item-options",
    "ion-item-sliding",
    "ion-label",
    "ion-list",
    "ion-list-header",
    "ion-loading",
    "ion-menu",
    "ion-menu-button",
    "ion-menu-toggle",
    "ion-modal",
    "ion-nav",
    "ion-nav-link",
    "ion-note",
    "ion-picker",
    "ion-popover",
    "ion-progress-bar",
    "ion-radio",
    "ion-radio-group",
    "ion-range",
    "ion-refresher",
    "ion-refresher-content",
    "ion-reorder",
    "ion-reorder-group",
    "ion-ripple-effect",
    "ion-router-outlet",
    "ion-row",
    "ion-searchbar",
    "ion-segment",
    "ion-segment-button",
    "ion-select",
    "ion-select-option",
    "ion-skeleton-text",
    "ion-spinner",
    "ion-split-pane",
    "ion-tab",
    "ion-tab-bar",
    "ion-tab-button",
    "ion-tabs",
    "ion-text",
    "ion-textarea",
    "ion-thumbnail",
    "ion-title",
    "ion-toast",
    "ion-toggle",
    "ion-toolbar",
)


def _pascal_case(tag_name: str) -> str:
    return "".join(segment.capitalize() for segment in tag_name.split("-"))


VOCABULARY: Mapping[str, TagEntry] = MappingProxyType(
    {
        tag: TagEntry(tag_name=tag, exported_symbol=_pascal_case(tag), module_path=STANDALONE_MODULE)
        for tag in _TAG_NAMES
    }
)

_STANDALONE_SYMBOLS = frozenset(entry.exported_symbol for entry in VOCABULARY.values())


def resolve_tag(tag_name: str) -> Optional[TagEntry]:
    """Return the vocabulary entry for ``tag_name`` or None for unknown markup."""
    return VOCABULARY.get(tag_name)


def is_standalone_symbol(symbol: str) -> bool:
    """Return True when ``symbol`` is exported by the standalone module."""
    return symbol in _STANDALONE_SYMBOLS


__all__ = [
    "BLANKET_MODULE_PATH",
    "BLANKET_MODULE_SYMBOL",
    "STANDALONE_MODULE",
    "VOCABULARY",
    "is_standalone_symbol",
    "resolve_tag",
]
