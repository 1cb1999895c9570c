"""Graph validation exceptions.

Every graph defect is fatal to a generation run. Each error keeps the
identifying names as attributes so callers can build their own diagnostics;
``str(error)`` gives the standard one-line message.
"""

from typing import Any

from .base import PackageGeneratorError


class ValidationError(PackageGeneratorError):
    """Base class for graph validation failures."""

    pass


class DuplicateModuleError(ValidationError):
    """Raised when two nodes declare modules with the same name."""

    def __init__(self, module: str):
        super().__init__(f"Module '{module}' appears more than once in the graph")
        self.module = module


class MissingDependencyError(ValidationError):
    """Raised when a resolved dependency names a module absent from the graph."""

    def __init__(self, module: str, dependency: str):
        super().__init__(
            f"Module '{module}' depends on '{dependency}' which doesn't exist in the graph"
        )
        self.module = module
        self.dependency = dependency


class MissingExportError(ValidationError):
    """Raised when an export names a module absent from the graph."""

    def __init__(self, module: str, export: str):
        super().__init__(
            f"Module '{module}' exports '{export}' which doesn't exist in the graph"
        )
        self.module = module
        self.export = export


class ExportNotInDependenciesError(ValidationError):
    """Raised when a module re-exports something it does not depend on."""

    def __init__(self, module: str, export: str):
        super().__init__(f"Module '{module}' exports '{export}' but doesn't depend on it")
        self.module = module
        self.export = export


class InvalidTargetError(ValidationError):
    """Raised when explicit dependencies are declared for an undeclared target."""

    def __init__(self, module: str, target: Any):
        target_name = getattr(target, "key", str(target))
        super().__init__(
            f"Module '{module}' has dependencies for target '{target_name}' "
            "which doesn't exist in its targets list"
        )
        self.module = module
        self.target = target


class CyclicDependencyError(ValidationError):
    """Raised when the resolved target graph contains a cycle."""

    def __init__(self, target: str):
        super().__init__(f"Cyclic dependency detected involving target '{target}'")
        self.target = target
