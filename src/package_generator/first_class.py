"""Modules the generator knows about by name.

A node that depends on one of these gets extra scaffolding (see
``generator.PackageGenerator``).
"""

from .models import Module, ModuleType

MODULAR_DEPENDENCY_CONTAINER = Module.of_type("ModularDependencyContainer", ModuleType.UTILITY)
MODULAR_NAVIGATION = Module.of_type("ModularNavigation", ModuleType.UTILITY)
