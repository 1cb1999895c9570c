"""Configuration loading and management for the package generator.

``PackageConfiguration`` is read-only once constructed and is threaded
explicitly through every resolution call. Scalar settings are merged in
priority order:
    1. Defaults (defined in PackageConfiguration)
    2. Project config (./package-generator.toml, ``[package]`` table)
    3. Explicit config file (``[package]`` table)
    4. Environment variables (PACKAGE_GENERATOR_* prefix)
    5. Keyword overrides (typically from CLI flags)

The module graph and the global dependency table live in the same TOML file
but are parsed by ``registry.load_graph`` because they reference modules.

Example:
    >>> config = load_config(app_name="ExampleApp")
    >>> config.swift_tools_version
    '5.10'
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional

from .exceptions import InvalidConfigError, MissingDirectoryError, PackageGeneratorError
from .models import ModuleDependency, ModuleTarget, ModuleTargetType, ModuleType, Platform

PROJECT_CONFIG_NAME = "package-generator.toml"
ENV_PREFIX = "PACKAGE_GENERATOR_"

_TOOLS_VERSION = re.compile(r"^\d+\.\d+(\.\d+)?$")

DEFAULT_DIRECTORIES: dict[ModuleType, str] = {
    ModuleType.CLIENT: "Modules/Clients",
    ModuleType.COORDINATOR: "Modules/Coordinators",
    ModuleType.MACRO: "Modules/Macros",
    ModuleType.SCREEN: "Modules/Screens",
    ModuleType.UTILITY: "Modules/Utilities",
}


@dataclass(frozen=True)
class ModuleDirectoryConfiguration:
    """Directory layout conventions.

    Attributes:
        directory_for_type: Base directory for each module type, relative to
            the output root
        root_path: Directory of the root aggregator package; also the base
            directory of root-typed modules unless ``directory_for_type``
            names one
    """

    directory_for_type: Mapping[ModuleType, str] = field(
        default_factory=lambda: dict(DEFAULT_DIRECTORIES)
    )
    root_path: str = "."

    def directory_for(self, module_type: ModuleType) -> str:
        directory = self.directory_for_type.get(module_type)
        if directory is not None:
            return directory
        if module_type is ModuleType.ROOT:
            return self.root_path
        raise MissingDirectoryError(module_type)


@dataclass(frozen=True)
class PackageConfiguration:
    """Process-wide settings for one generation run.

    Attributes:
        app_name: Application name, used as the logging subsystem fallback
        swift_tools_version: ``swift-tools-version`` written to manifests
        supported_platforms: Platforms every module supports
        swift_settings: Opaque SwiftSetting expressions copied into manifests
        module_directory_configuration: Where each module type lives
        global_dependencies: Edges injected into every module of a given
            (type, target)
    """

    app_name: str = "App"
    swift_tools_version: str = "5.10"
    supported_platforms: tuple[Platform, ...] = ()
    swift_settings: tuple[str, ...] = ()
    module_directory_configuration: ModuleDirectoryConfiguration = field(
        default_factory=ModuleDirectoryConfiguration
    )
    global_dependencies: Mapping[ModuleTargetType, tuple[ModuleDependency, ...]] = field(
        default_factory=dict
    )

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not self.app_name or not self.app_name.strip():
            raise InvalidConfigError("app_name", self.app_name, "must not be empty")
        if not _TOOLS_VERSION.match(self.swift_tools_version):
            raise InvalidConfigError(
                "swift_tools_version", self.swift_tools_version, "expected a version like 5.10"
            )

        object.__setattr__(self, "supported_platforms", tuple(self.supported_platforms))
        object.__setattr__(self, "swift_settings", tuple(self.swift_settings))
        object.__setattr__(
            self,
            "global_dependencies",
            {key: tuple(edges) for key, edges in self.global_dependencies.items()},
        )

    def global_dependencies_for(
        self, module_type: ModuleType, target: ModuleTarget
    ) -> tuple[ModuleDependency, ...]:
        return tuple(self.global_dependencies.get(ModuleTargetType(module_type, target), ()))


_SCALAR_FIELDS = {"app_name", "swift_tools_version", "root_path"}
_LIST_FIELDS = {"platforms", "swift_settings"}
_TABLE_FIELDS = {"directories"}


def load_config(config_file: Optional[Path] = None, **overrides: Any) -> PackageConfiguration:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags); accepts the
            ``[package]`` keys

    Returns:
        Validated PackageConfiguration instance (without global dependencies)

    Raises:
        PackageGeneratorError: If a config file is invalid or missing
    """
    merged: dict[str, Any] = {}

    project_config = Path.cwd() / PROJECT_CONFIG_NAME
    if project_config.exists() and project_config != config_file:
        merged.update(_package_table(project_config))

    if config_file is not None:
        if not config_file.exists():
            raise PackageGeneratorError(f"Config file not found: {config_file}")
        merged.update(_package_table(config_file))

    merged.update(_load_env_vars())
    merged.update({key: value for key, value in overrides.items() if value is not None})

    return build_configuration(merged)


def build_configuration(
    settings: Mapping[str, Any],
    global_dependencies: Optional[Mapping[ModuleTargetType, tuple[ModuleDependency, ...]]] = None,
) -> PackageConfiguration:
    """Build a PackageConfiguration from ``[package]``-shaped settings."""
    unknown = set(settings) - _SCALAR_FIELDS - _LIST_FIELDS - _TABLE_FIELDS
    if unknown:
        key = sorted(unknown)[0]
        raise InvalidConfigError(key, settings[key], "unknown setting")

    directories = dict(DEFAULT_DIRECTORIES)
    for type_name, directory in dict(settings.get("directories", {})).items():
        try:
            directories[ModuleType(type_name)] = str(directory)
        except ValueError:
            raise InvalidConfigError(f"directories.{type_name}", directory, "unknown module type")

    platforms = []
    for text in settings.get("platforms", []):
        try:
            platforms.append(Platform.parse(str(text)))
        except ValueError as e:
            raise InvalidConfigError("platforms", text, str(e))

    kwargs: dict[str, Any] = {
        "supported_platforms": tuple(platforms),
        "swift_settings": tuple(str(s) for s in settings.get("swift_settings", [])),
        "module_directory_configuration": ModuleDirectoryConfiguration(
            directory_for_type=directories,
            root_path=str(settings.get("root_path", ".")),
        ),
        "global_dependencies": dict(global_dependencies or {}),
    }
    for key in ("app_name", "swift_tools_version"):
        if key in settings:
            kwargs[key] = str(settings[key])

    return PackageConfiguration(**kwargs)


def _package_table(path: Path) -> dict[str, Any]:
    try:
        data = load_toml_file(path)
    except PackageGeneratorError:
        raise
    except Exception as e:
        raise PackageGeneratorError(f"Invalid config file '{path}': {e}")

    table = data.get("package", {})
    if not isinstance(table, dict):
        raise InvalidConfigError("package", table, "expected a table")
    return table


def _load_env_vars() -> dict[str, Any]:
    """Load scalar settings from PACKAGE_GENERATOR_* environment variables.

    Supported environment variables:
        PACKAGE_GENERATOR_APP_NAME
        PACKAGE_GENERATOR_SWIFT_TOOLS_VERSION
        PACKAGE_GENERATOR_ROOT_PATH
    """
    result: dict[str, Any] = {}
    for field_name in sorted(_SCALAR_FIELDS):
        value = os.environ.get(f"{ENV_PREFIX}{field_name.upper()}")
        if value is not None:
            result[field_name] = value
    return result


def load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict.

    Raises:
        PackageGeneratorError: If tomllib/tomli not available
        Exception: If TOML parsing fails
    """
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        try:
            import tomli as tomllib  # type: ignore
        except ImportError:
            raise PackageGeneratorError(
                "TOML support requires Python 3.11+ or 'tomli' package. "
                "Install with: pip install tomli"
            )

    with open(path, "rb") as f:
        return tomllib.load(f)
