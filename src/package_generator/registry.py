"""Graph definitions loaded from TOML.

A graph file holds the ``[package]`` settings read by ``config.load_config``
plus the module registry, the nodes and the global dependency table::

    [[modules]]
    name = "ScreenA"
    type = "screen"

    [[modules]]
    name = "ContentClient"
    type = "client"

    [[nodes]]
    module = "ScreenA"
    dependencies = ["ContentClient:interface"]

    [[nodes]]
    module = "ContentClient"

    [global_dependencies]
    "screen:views" = ["CopyableMacros"]

Dependencies are ``"Name"`` (the module's main target) or ``"Name:target"``.
A node may instead give a table keyed by its own target names. Every node
module must be declared in ``[[modules]]``; dependency and export names that are
not registered are kept as bare references so the validator reports them.
"""

from __future__ import annotations

import dataclasses
import logging
from pathlib import Path
from typing import Any, Mapping, Optional

from .config import PackageConfiguration, load_config, load_toml_file
from .exceptions import PackageGeneratorError, RegistryError
from .models import (
    ExternalDependency,
    MacroConfiguration,
    Module,
    ModuleDependency,
    ModuleNode,
    ModuleTarget,
    ModuleTargetType,
    ModuleType,
    Platform,
    ProductType,
)

logger = logging.getLogger(__name__)

_MODULE_KEYS = {
    "name",
    "type",
    "path",
    "subpath",
    "targets",
    "product",
    "tests",
    "platforms",
    "external",
    "macro",
    "namespace",
}


class ModuleRegistry:
    """Modules by name, as declared in ``[[modules]]``."""

    def __init__(self) -> None:
        self._modules: dict[str, Module] = {}

    def __contains__(self, name: str) -> bool:
        return name in self._modules

    def __len__(self) -> int:
        return len(self._modules)

    def register(self, module: Module) -> None:
        if module.name in self._modules:
            raise RegistryError(f"module '{module.name}' is declared twice")
        self._modules[module.name] = module

    def get(self, name: str) -> Module:
        """Registered module, or a bare reference for unknown names."""
        module = self._modules.get(name)
        if module is None:
            logger.debug("Unregistered module reference: %s", name)
            return Module.at_path(name, name)
        return module

    def dependency(self, reference: str) -> ModuleDependency:
        """Parse ``"Name"`` or ``"Name:target"``."""
        name, _, target_text = reference.partition(":")
        target = ModuleTarget.parse(target_text.strip()) if target_text.strip() else None
        return ModuleDependency(self.get(name.strip()), target)


def parse_module(data: Mapping[str, Any]) -> Module:
    unknown = set(data) - _MODULE_KEYS
    if unknown:
        raise RegistryError(f"unknown module keys: {', '.join(sorted(unknown))}")
    if "name" not in data:
        raise RegistryError("module without a name")

    name = str(data["name"])
    try:
        attributes: dict[str, Any] = {
            "product_type": ProductType(data.get("product", "library")),
            "has_tests": bool(data.get("tests", True)),
            "platforms": tuple(Platform.parse(str(p)) for p in data.get("platforms", [])),
            "uses_namespace": bool(data.get("namespace", False)),
            "external_dependencies": tuple(
                ExternalDependency(url=str(dep["url"]), requirement=str(dep["requirement"]))
                for dep in data.get("external", [])
            ),
        }
        if "macro" in data:
            attributes["macro_config"] = MacroConfiguration(**data["macro"])
        targets = [ModuleTarget.parse(str(t)) for t in data.get("targets", [])]

        if "type" in data:
            return Module.of_type(
                name,
                ModuleType(data["type"]),
                path=data.get("path"),
                subpath=data.get("subpath"),
                targets=targets,
                **attributes,
            )
        if "path" not in data:
            raise RegistryError(f"module '{name}' needs a type or a path")
        return Module.at_path(name, str(data["path"]), targets=targets, **attributes)
    except (KeyError, TypeError, ValueError) as e:
        raise RegistryError(f"module '{name}': {e}")


def _reference_list(value: Any, what: str) -> list[str]:
    """``value`` as a list of reference strings; a bare string is an error."""
    if not isinstance(value, list):
        raise RegistryError(f"{what} must be a list, got {type(value).__name__}")
    return [str(ref) for ref in value]


def parse_node(data: Mapping[str, Any], registry: ModuleRegistry) -> ModuleNode:
    if "module" not in data:
        raise RegistryError("node without a module")
    name = str(data["module"])
    if name not in registry:
        raise RegistryError(f"node module '{name}' is not declared in [[modules]]")
    module = registry.get(name)

    declared = data.get("dependencies", [])
    if isinstance(declared, Mapping):
        dependencies: Any = {
            ModuleTarget.parse(str(target)): [
                registry.dependency(ref)
                for ref in _reference_list(refs, f"node '{name}' dependencies of '{target}'")
            ]
            for target, refs in declared.items()
        }
    elif isinstance(declared, list):
        dependencies = [registry.dependency(str(ref)) for ref in declared]
    else:
        raise RegistryError(
            f"node '{name}' dependencies must be a list or a table, got {type(declared).__name__}"
        )

    exports = [
        registry.get(ref) for ref in _reference_list(data.get("exports", []), f"node '{name}' exports")
    ]
    return ModuleNode(module, dependencies, exports=exports)


def parse_global_dependencies(
    data: Mapping[str, Any], registry: ModuleRegistry
) -> dict[ModuleTargetType, tuple[ModuleDependency, ...]]:
    table = {}
    for key, refs in data.items():
        try:
            target_type = ModuleTargetType.parse(key)
        except ValueError as e:
            raise RegistryError(f"global dependency key '{key}': {e}")
        references = _reference_list(refs, f"global dependencies of '{key}'")
        table[target_type] = tuple(registry.dependency(ref) for ref in references)
    return table


def parse_graph(
    data: Mapping[str, Any], configuration: PackageConfiguration
) -> tuple[PackageConfiguration, list[ModuleNode]]:
    """Build the graph from a parsed TOML document.

    Returns ``configuration`` extended with the global dependency table, and
    the nodes in declaration order.
    """
    registry = ModuleRegistry()
    for module_data in data.get("modules", []):
        registry.register(parse_module(module_data))

    graph = [parse_node(node_data, registry) for node_data in data.get("nodes", [])]
    global_dependencies = parse_global_dependencies(data.get("global_dependencies", {}), registry)

    logger.debug("Loaded %d modules, %d nodes", len(registry), len(graph))
    return dataclasses.replace(configuration, global_dependencies=global_dependencies), graph


def load_graph(
    path: Path, **overrides: Any
) -> tuple[PackageConfiguration, list[ModuleNode]]:
    """Load configuration and graph from a TOML graph file."""
    configuration = load_config(config_file=path, **overrides)
    try:
        data = load_toml_file(path)
    except PackageGeneratorError:
        raise
    except Exception as e:
        raise RegistryError(str(e), path=path)

    try:
        return parse_graph(data, configuration)
    except RegistryError as e:
        if e.path is None:
            raise RegistryError(e.reason, path=path)
        raise


def find_node(graph: list[ModuleNode], name: str) -> Optional[ModuleNode]:
    for node in graph:
        if node.module.name == name:
            return node
    return None
