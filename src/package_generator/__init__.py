"""
Package Generator - modular Swift package scaffolding from a validated module graph.

Modules, their per-target dependencies and re-exports are declared once;
the graph is validated (existence, exports, targets, cycles) before any
Package.swift manifest or placeholder source is written.
"""

__version__ = "0.3.0"

from .config import ModuleDirectoryConfiguration, PackageConfiguration, load_config
from .generator import GenerationResult, PackageGenerator
from .models import (
    Module,
    ModuleDependency,
    ModuleNode,
    ModuleTarget,
    ModuleTargetType,
    ModuleType,
    Platform,
    ProductType,
)
from .registry import load_graph
from .validation import GraphValidator, validate_graph

__all__ = [
    "GenerationResult",
    "GraphValidator",
    "Module",
    "ModuleDependency",
    "ModuleDirectoryConfiguration",
    "ModuleNode",
    "ModuleTarget",
    "ModuleTargetType",
    "ModuleType",
    "PackageConfiguration",
    "PackageGenerator",
    "Platform",
    "ProductType",
    "load_config",
    "load_graph",
    "validate_graph",
]
