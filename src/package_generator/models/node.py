"""Graph nodes and dependency resolution.

``ModuleNode.dependencies_for`` is the single source of truth for what a
target really depends on. The validator and every renderer call it instead
of merging dependency sources themselves.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable, Mapping, Optional, Union

from .dependency import DependencyKey, ModuleDependency
from .module import Module
from .target import ModuleTarget

if TYPE_CHECKING:
    from ..config import PackageConfiguration

logger = logging.getLogger(__name__)

DependencyLike = Union[Module, ModuleDependency]
DependencyDeclaration = Union[
    Iterable[DependencyLike],
    Mapping[ModuleTarget, Iterable[DependencyLike]],
]


def _as_dependency(item: DependencyLike) -> ModuleDependency:
    if isinstance(item, ModuleDependency):
        return item
    if isinstance(item, Module):
        return ModuleDependency(item)
    raise TypeError(f"expected Module or ModuleDependency, got {type(item).__name__}")


def _normalize_dependencies(
    declaration: Optional[DependencyDeclaration],
) -> dict[ModuleTarget, tuple[ModuleDependency, ...]]:
    """A plain sequence declares dependencies of the main target."""
    if not declaration:
        return {}
    if isinstance(declaration, Mapping):
        return {
            target: tuple(_as_dependency(item) for item in items)
            for target, items in declaration.items()
        }
    return {ModuleTarget.MAIN: tuple(_as_dependency(item) for item in declaration)}


@dataclass(frozen=True, eq=False)
class ModuleNode:
    """A module bound to its explicit per-target dependencies and re-exports.

    ``dependencies`` accepts either a mapping from one of the module's own
    targets to the edges declared for it, or a plain list which is taken as
    the dependencies of the main target. Bare ``Module`` values stand for a
    dependency on that module's main target.
    """

    module: Module
    dependencies: Mapping[ModuleTarget, tuple[ModuleDependency, ...]] = field(default_factory=dict)
    exports: tuple[Module, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "dependencies", _normalize_dependencies(self.dependencies))
        object.__setattr__(self, "exports", tuple(self.exports))

    @property
    def name(self) -> str:
        return self.module.name

    # ── Resolution ───────────────────────────────────────────────────

    def global_dependencies_for(
        self, target: ModuleTarget, configuration: PackageConfiguration
    ) -> tuple[ModuleDependency, ...]:
        """Configuration-injected edges; only type-based modules receive them."""
        module_type = self.module.module_type
        if module_type is None:
            return ()
        return configuration.global_dependencies_for(module_type, target)

    def dependencies_for(
        self, target: ModuleTarget, configuration: PackageConfiguration
    ) -> list[ModuleDependency]:
        """Resolved dependencies of one of this module's targets.

        Merges global, then type-default, then explicit edges. The first
        occurrence of each dependency key wins; later duplicates are dropped,
        so explicit edges can only add to the list, never reorder it.
        """
        sources = (
            self.global_dependencies_for(target, configuration),
            self.module.default_dependencies.get(target, ()),
            self.dependencies.get(target, ()),
        )

        resolved: list[ModuleDependency] = []
        seen: set[DependencyKey] = set()
        for source in sources:
            for dependency in source:
                key = dependency.key
                if key in seen:
                    continue
                seen.add(key)
                resolved.append(dependency)

        logger.debug(
            "Resolved %s.%s -> %s",
            self.module.name,
            target.key,
            [dependency.target_name for dependency in resolved],
        )
        return resolved

    def dependent_modules(self, configuration: PackageConfiguration) -> list[Module]:
        """Every module referenced by any declared target, first-seen order."""
        modules: list[Module] = []
        seen: set[str] = set()
        for target in self.module.targets:
            for dependency in self.dependencies_for(target, configuration):
                if dependency.module_name not in seen:
                    seen.add(dependency.module_name)
                    modules.append(dependency.module)
        return modules

    def external_modules(self, configuration: PackageConfiguration) -> list[Module]:
        """Dependent modules other than this node's own module."""
        return [
            module
            for module in self.dependent_modules(configuration)
            if module.name != self.module.name
        ]

    def depends_on(
        self, other: Module, configuration: Optional[PackageConfiguration] = None
    ) -> bool:
        """Whether an explicit edge, or a global edge when ``configuration``
        is given, references ``other`` by name."""
        for edges in self.dependencies.values():
            if any(dependency.module_name == other.name for dependency in edges):
                return True

        if configuration is None:
            return False
        for target in self.module.targets:
            for dependency in self.global_dependencies_for(target, configuration):
                if dependency.module_name == other.name:
                    return True
        return False

    def is_internal(self, dependency: ModuleDependency) -> bool:
        """Whether ``dependency`` points back into this node's own module."""
        return dependency.module_name == self.module.name
