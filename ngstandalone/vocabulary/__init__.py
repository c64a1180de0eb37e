"""Static lookup tables for Ionic tags and icons."""

from .icons import (
    ICON_CONSTANTS_MODULE,
    ICON_REGISTRATION_MODULE,
    ICON_REGISTRATION_SYMBOL,
    to_identifier,
)
from .tags import (
    BLANKET_MODULE_PATH,
    BLANKET_MODULE_SYMBOL,
    STANDALONE_MODULE,
    is_standalone_symbol,
    resolve_tag,
)

__all__ = [
    "BLANKET_MODULE_PATH",
    "BLANKET_MODULE_SYMBOL",
    "ICON_CONSTANTS_MODULE",
    "ICON_REGISTRATION_MODULE",
    "ICON_REGISTRATION_SYMBOL",
    "STANDALONE_MODULE",
    "is_standalone_symbol",
    "resolve_tag",
    "to_identifier",
]
