"""Value records describing modules, their targets and the dependency graph."""

from .dependency import DependencyKey, ModuleDependency, dependency_key
from .module import ExternalDependency, MacroConfiguration, Module, ModuleLocation
from .node import ModuleNode
from .platform import FAMILY_ORDER, Platform, PlatformFamily
from .target import ModuleTarget, ModuleTargetType, ModuleType, ProductType, TargetKind

__all__ = [
    "DependencyKey",
    "ExternalDependency",
    "FAMILY_ORDER",
    "MacroConfiguration",
    "Module",
    "ModuleDependency",
    "ModuleLocation",
    "ModuleNode",
    "ModuleTarget",
    "ModuleTargetType",
    "ModuleType",
    "Platform",
    "PlatformFamily",
    "ProductType",
    "TargetKind",
    "dependency_key",
]
