"""References from one module to another module's dependency surface."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from .target import ModuleTarget

if TYPE_CHECKING:
    from .module import Module

DependencyKey = tuple[Optional[str], str]


def dependency_key(dependency: ModuleDependency) -> DependencyKey:
    """Identity of a dependency edge: (target key or None, module name).

    Two references naming the same module and target are the same edge even
    when the referenced ``Module`` values differ in other attributes. A
    reference without a target and one naming ``main`` explicitly are
    distinct keys, although both point at the main target.
    """
    target_key = dependency.target.key if dependency.target is not None else None
    return (target_key, dependency.module.name)


@dataclass(frozen=True, eq=False)
class ModuleDependency:
    """Depend on ``module`` as a whole (its main target) or on one ``target`` of it."""

    module: Module
    target: Optional[ModuleTarget] = None

    @property
    def module_name(self) -> str:
        return self.module.name

    @property
    def resolved_target(self) -> ModuleTarget:
        """The target this edge actually points at."""
        return self.target if self.target is not None else ModuleTarget.MAIN

    @property
    def target_name(self) -> str:
        """Name of the depended-upon target, e.g. ``ContentClientInterface``."""
        return self.module.target_name(self.resolved_target)

    @property
    def key(self) -> DependencyKey:
        return dependency_key(self)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ModuleDependency):
            return NotImplemented
        return dependency_key(self) == dependency_key(other)

    def __hash__(self) -> int:
        return hash(dependency_key(self))

    def __repr__(self) -> str:
        if self.target is None:
            return f"ModuleDependency({self.module.name})"
        return f"ModuleDependency({self.module.name}.{self.target.key})"
