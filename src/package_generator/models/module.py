"""Modules: one logical package with its sub-targets and requirements.

A module's identity is its ``name``. Equality and hashing ignore every other
field, so two differently configured ``Module`` values with the same name are
the same module to every set, dict and graph operation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable, Optional

from .dependency import ModuleDependency
from .platform import Platform
from .target import ModuleTarget, ModuleType, ProductType, TargetKind

if TYPE_CHECKING:
    from ..config import PackageConfiguration


@dataclass(frozen=True)
class ModuleLocation:
    """Where a module lives on disk.

    Either an explicit ``path``, or a module ``type`` whose base directory
    comes from configuration. A type-based location may override the base
    directory with ``path`` and nest the module under ``subpath``.
    """

    path: Optional[str] = None
    module_type: Optional[ModuleType] = None
    subpath: Optional[str] = None

    def __post_init__(self) -> None:
        if self.module_type is None and not self.path:
            raise ValueError("a location needs either a path or a module type")
        if self.module_type is None and self.subpath:
            raise ValueError("subpath is only valid for type-based locations")

    @classmethod
    def at_path(cls, path: str) -> ModuleLocation:
        return cls(path=path)

    @classmethod
    def of_type(
        cls,
        module_type: ModuleType,
        path: Optional[str] = None,
        subpath: Optional[str] = None,
    ) -> ModuleLocation:
        return cls(path=path, module_type=module_type, subpath=subpath)


@dataclass(frozen=True)
class ExternalDependency:
    """A remote package, passed through to the manifest untouched."""

    url: str
    requirement: str  # e.g. 'from: "1.2.0"' or 'exact: "2.0.1"'


@dataclass(frozen=True)
class MacroConfiguration:
    """Extra settings for modules that ship a compiler macro."""

    swift_syntax_version: str = "600.0.0"
    requires_compiler_plugin_support: bool = True

    @property
    def swift_syntax_dependency(self) -> ExternalDependency:
        return ExternalDependency(
            url="https://github.com/swiftlang/swift-syntax.git",
            requirement=f'from: "{self.swift_syntax_version}"',
        )


@dataclass(frozen=True, eq=False)
class Module:
    """One logical package.

    ``targets`` defaults to the layout of the location's module type (or just
    ``main`` for path-based modules).
    """

    name: str
    location: ModuleLocation
    targets: tuple[ModuleTarget, ...] = ()
    product_type: ProductType = ProductType.LIBRARY
    has_tests: bool = True
    external_dependencies: tuple[ExternalDependency, ...] = ()
    platforms: tuple[Platform, ...] = ()
    macro_config: Optional[MacroConfiguration] = None
    uses_namespace: bool = False

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("module name must not be empty")
        targets = tuple(self.targets)
        if not targets:
            if self.location.module_type is not None:
                targets = self.location.module_type.default_targets
            else:
                targets = (ModuleTarget.MAIN,)
        object.__setattr__(self, "targets", targets)
        object.__setattr__(self, "external_dependencies", tuple(self.external_dependencies))
        object.__setattr__(self, "platforms", tuple(self.platforms))

    @classmethod
    def of_type(
        cls,
        name: str,
        module_type: ModuleType,
        *,
        path: Optional[str] = None,
        subpath: Optional[str] = None,
        targets: Optional[Iterable[ModuleTarget]] = None,
        **attributes,
    ) -> Module:
        """Build a module whose location is resolved from its type."""
        return cls(
            name=name,
            location=ModuleLocation.of_type(module_type, path=path, subpath=subpath),
            targets=tuple(targets or ()),
            **attributes,
        )

    @classmethod
    def at_path(
        cls,
        name: str,
        path: str,
        *,
        targets: Optional[Iterable[ModuleTarget]] = None,
        **attributes,
    ) -> Module:
        """Build a module that lives at an explicit path."""
        return cls(
            name=name,
            location=ModuleLocation.at_path(path),
            targets=tuple(targets or ()),
            **attributes,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Module):
            return NotImplemented
        return self.name == other.name

    def __hash__(self) -> int:
        return hash(self.name)

    def __repr__(self) -> str:
        return f"Module({self.name!r})"

    # ── Derived data ─────────────────────────────────────────────────

    @property
    def module_type(self) -> Optional[ModuleType]:
        """The type of a type-based location, else ``None``."""
        return self.location.module_type

    @property
    def is_root(self) -> bool:
        return self.module_type is ModuleType.ROOT

    def resolved_path(self, configuration: PackageConfiguration) -> str:
        """Directory of this module's package, relative to the output root."""
        location = self.location
        if location.module_type is None:
            assert location.path is not None
            return location.path

        base = location.path or configuration.module_directory_configuration.directory_for(
            location.module_type
        )
        parts = [base.rstrip("/")]
        if location.subpath:
            parts.append(location.subpath.strip("/"))
        # The root package is the directory itself, never a child named after it
        if location.module_type is not ModuleType.ROOT:
            parts.append(self.name)
        return "/".join(part for part in parts if part)

    def target_name(self, target: ModuleTarget) -> str:
        if target.kind is TargetKind.MAIN:
            return self.name
        if target.kind is TargetKind.INTERFACE:
            return f"{self.name}Interface"
        if target.kind is TargetKind.VIEWS:
            return f"{self.name}Views"
        if target.kind is TargetKind.MACRO_IMPLEMENTATION:
            return f"{self.name}Implementation"
        assert target.custom_name is not None
        return target.custom_name

    @property
    def target_names(self) -> list[str]:
        return [self.target_name(target) for target in self.targets]

    @property
    def uses_default_targets(self) -> bool:
        module_type = self.module_type
        return module_type is not None and self.targets == module_type.default_targets

    @property
    def default_dependencies(self) -> dict[ModuleTarget, tuple[ModuleDependency, ...]]:
        """Implicit intra-module edges implied by the module type.

        Only modules that keep their type's default target layout get these;
        a customised target list opts out entirely.
        """
        if not self.uses_default_targets:
            return {}

        module_type = self.module_type
        if module_type is ModuleType.CLIENT:
            implied = ModuleTarget.INTERFACE
        elif module_type in (ModuleType.COORDINATOR, ModuleType.SCREEN):
            implied = ModuleTarget.VIEWS
        elif module_type is ModuleType.MACRO:
            implied = ModuleTarget.MACRO_IMPLEMENTATION
        else:
            return {}
        return {ModuleTarget.MAIN: (ModuleDependency(self, implied),)}

    def resolved_platforms(self, configuration: PackageConfiguration) -> list[Platform]:
        """Configuration, module and type-default platforms, deduplicated."""
        type_defaults = self.module_type.default_platforms if self.module_type else ()
        return Platform.deduplicate(
            [*configuration.supported_platforms, *self.platforms, *type_defaults]
        )

    @property
    def package_dependencies(self) -> tuple[ExternalDependency, ...]:
        """External packages, plus swift-syntax for macro implementations."""
        dependencies = list(self.external_dependencies)
        if ModuleTarget.MACRO_IMPLEMENTATION in self.targets:
            swift_syntax = (self.macro_config or MacroConfiguration()).swift_syntax_dependency
            if all(dep.url != swift_syntax.url for dep in dependencies):
                dependencies.append(swift_syntax)
        return tuple(dependencies)
