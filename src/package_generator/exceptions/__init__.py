"""Exception hierarchy for the package generator."""

from .base import PackageGeneratorError
from .config import (
    ConfigurationError,
    InvalidConfigError,
    MissingDirectoryError,
    RegistryError,
)
from .generation import GenerationError
from .validation import (
    CyclicDependencyError,
    DuplicateModuleError,
    ExportNotInDependenciesError,
    InvalidTargetError,
    MissingDependencyError,
    MissingExportError,
    ValidationError,
)

__all__ = [
    "PackageGeneratorError",
    "ConfigurationError",
    "InvalidConfigError",
    "MissingDirectoryError",
    "RegistryError",
    "GenerationError",
    "ValidationError",
    "DuplicateModuleError",
    "MissingDependencyError",
    "MissingExportError",
    "ExportNotInDependenciesError",
    "InvalidTargetError",
    "CyclicDependencyError",
]
