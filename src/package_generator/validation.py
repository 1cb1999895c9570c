"""Graph validation.

A graph must be proven well-formed before anything is generated from it.
Checks run in a fixed order and the first violation aborts validation:

1. Every referenced module exists (resolved dependencies and exports)
2. Every export is backed by a resolved dependency
3. Explicit dependencies are only declared for targets the module has
4. The fully resolved (module, target) graph is acyclic

Running existence first means a missing module is reported as such rather
than as a confusing downstream error caused by it.
"""

from __future__ import annotations

import logging
from typing import Iterator, Sequence

from .config import PackageConfiguration
from .exceptions import (
    CyclicDependencyError,
    DuplicateModuleError,
    ExportNotInDependenciesError,
    InvalidTargetError,
    MissingDependencyError,
    MissingExportError,
)
from .models import ModuleDependency, ModuleNode, ModuleTarget

logger = logging.getLogger(__name__)

TargetGraph = dict[str, list[str]]


def target_vertex_key(module_name: str, target: ModuleTarget) -> str:
    """Vertex key of one module target, e.g. ``ContentClient.interface``."""
    return f"{module_name}.{target.key}"


def dependency_vertex_key(dependency: ModuleDependency) -> str:
    """Depending on a module without naming a target means its main target."""
    return target_vertex_key(dependency.module_name, dependency.resolved_target)


class GraphValidator:
    """Validates a module graph against a configuration."""

    def __init__(self, graph: Sequence[ModuleNode], configuration: PackageConfiguration):
        self.graph = list(graph)
        self.configuration = configuration

    def validate(self) -> None:
        """Run all checks in order.

        Raises:
            ValidationError: The first violation found
        """
        logger.debug("Validating graph of %d modules", len(self.graph))
        self._validate_all_modules_exist()
        self._validate_exports_are_in_dependencies()
        self._validate_targets_exist()
        self._validate_no_cycles()
        logger.debug("Graph validation passed")

    # ── Check 1: existence ───────────────────────────────────────────

    def _module_names(self) -> set[str]:
        names: set[str] = set()
        for node in self.graph:
            if node.module.name in names:
                raise DuplicateModuleError(node.module.name)
            names.add(node.module.name)
        return names

    def _validate_all_modules_exist(self) -> None:
        all_module_names = self._module_names()

        for node in self.graph:
            for target in node.module.targets:
                for dependency in node.dependencies_for(target, self.configuration):
                    if dependency.module_name not in all_module_names:
                        raise MissingDependencyError(node.module.name, dependency.module_name)

            for export in node.exports:
                if export.name not in all_module_names:
                    raise MissingExportError(node.module.name, export.name)

    # ── Check 2: exports ─────────────────────────────────────────────

    def _validate_exports_are_in_dependencies(self) -> None:
        for node in self.graph:
            dependency_names = {
                module.name for module in node.dependent_modules(self.configuration)
            }
            for export in node.exports:
                if export.name not in dependency_names:
                    raise ExportNotInDependenciesError(node.module.name, export.name)

    # ── Check 3: targets ─────────────────────────────────────────────

    def _validate_targets_exist(self) -> None:
        for node in self.graph:
            valid_targets = set(node.module.targets)
            for target in node.dependencies:
                if target not in valid_targets:
                    raise InvalidTargetError(node.module.name, target)

    # ── Check 4: cycles ──────────────────────────────────────────────

    def target_graph(self) -> TargetGraph:
        """Resolved dependency edges between (module, target) vertices.

        Vertices and edges keep graph, target and resolution order, so the
        traversal below is deterministic.
        """
        graph: TargetGraph = {}
        for node in self.graph:
            for target in node.module.targets:
                edges = (
                    dependency_vertex_key(dependency)
                    for dependency in node.dependencies_for(target, self.configuration)
                )
                graph[target_vertex_key(node.module.name, target)] = list(dict.fromkeys(edges))
        return graph

    def _validate_no_cycles(self) -> None:
        target_graph = self.target_graph()
        # Each start vertex gets fresh visited/stack sets, so the reported
        # vertex depends only on vertex order, not on earlier traversals.
        for start in target_graph:
            _detect_cycle_from(start, target_graph)


def _children(vertex: str, target_graph: TargetGraph) -> Iterator[str]:
    return iter(target_graph.get(vertex, ()))


def _detect_cycle_from(start: str, target_graph: TargetGraph) -> None:
    """Depth-first search from ``start`` (iterative).

    Vertices move unvisited -> on stack -> done. Reaching a vertex that is
    still on the stack is a back edge; a done vertex is a shared dependency
    and is skipped.
    """
    visited: set[str] = {start}
    on_stack: set[str] = {start}
    call_stack: list[tuple[str, Iterator[str]]] = [(start, _children(start, target_graph))]

    while call_stack:
        vertex, children = call_stack[-1]
        for child in children:
            if child in on_stack:
                raise CyclicDependencyError(child)
            if child in visited:
                continue
            visited.add(child)
            on_stack.add(child)
            call_stack.append((child, _children(child, target_graph)))
            break
        else:
            call_stack.pop()
            on_stack.discard(vertex)


def validate_graph(graph: Sequence[ModuleNode], configuration: PackageConfiguration) -> None:
    """Validate ``graph``; raises the first ``ValidationError`` found."""
    GraphValidator(graph, configuration).validate()
