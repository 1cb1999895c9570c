"""Configuration exceptions: settings, directory layout, graph definition files."""

from pathlib import Path
from typing import Any, Optional

from .base import PackageGeneratorError


class ConfigurationError(PackageGeneratorError):
    """Base class for configuration-related errors."""

    pass


class InvalidConfigError(ConfigurationError):
    """Raised when configuration values are invalid."""

    def __init__(self, key: str, value: Any, reason: str):
        super().__init__(
            f"Invalid configuration for {key}: {value}",
            details={"key": key, "value": str(value), "reason": reason},
        )
        self.key = key
        self.value = value
        self.reason = reason


class MissingDirectoryError(ConfigurationError):
    """Raised when a type-based module location has no configured directory."""

    def __init__(self, module_type: Any):
        type_name = getattr(module_type, "value", str(module_type))
        super().__init__(
            f"No directory configured for module type: {type_name}",
            details={"module_type": type_name},
        )
        self.module_type = module_type


class RegistryError(ConfigurationError):
    """Raised when a graph definition file cannot be parsed."""

    def __init__(self, reason: str, path: Optional[Path] = None):
        details = {"reason": reason}
        if path:
            details["path"] = str(path)

        super().__init__(f"Invalid graph definition: {reason}", details=details)
        self.reason = reason
        self.path = path
