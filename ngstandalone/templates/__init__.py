"""Template discovery and markup scanning."""

from .locator import locate_template
from .scanner import scan_template

__all__ = ["locate_template", "scan_template"]
