"""Component and NgModule migrations built on the rewrite helpers."""

from .component import plan_components, resolve_component
from .module import ModuleIndex, plan_modules
from .plan import FilePlan

__all__ = ["FilePlan", "ModuleIndex", "plan_components", "plan_modules", "resolve_component"]
