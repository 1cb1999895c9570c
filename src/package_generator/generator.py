"""Generation driver: validate, then write packages.

Nothing is written unless the whole graph validates. Manifests and export
files are rewritten on every run; source scaffolding is only created for
modules whose directory does not exist yet, so hand-written code is never
touched.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Sequence

from .config import PackageConfiguration
from .exceptions import GenerationError
from .first_class import MODULAR_DEPENDENCY_CONTAINER, MODULAR_NAVIGATION
from .models import ModuleNode, ModuleTarget
from .render import (
    GraphRenderer,
    exports_file_name,
    render_dependencies_file,
    render_exports,
    render_module_logger,
    render_namespace,
    render_navigation_files,
    render_package,
    render_placeholder_source,
    render_placeholder_test,
    render_root_package,
    render_root_placeholder,
)
from .validation import validate_graph

logger = logging.getLogger(__name__)

DETAILED_GRAPH_FILE = "dependency-graph-detailed.dot"
MODULE_GRAPH_FILE = "dependency-graph-modules.dot"


@dataclass
class GenerationResult:
    """Files written by one run, relative to the output root."""

    written: list[Path] = field(default_factory=list)
    scaffolded_modules: list[str] = field(default_factory=list)


class PackageGenerator:
    """Writes one package per graph node under ``root_path``."""

    def __init__(
        self,
        graph: Sequence[ModuleNode],
        configuration: PackageConfiguration,
        root_path: Path,
    ):
        self.graph = list(graph)
        self.configuration = configuration
        self.root_path = Path(root_path)
        self._result = GenerationResult()
        self._paths: dict[str, Path] = {}

    def generate(self) -> GenerationResult:
        """Validate the graph and write every package.

        Raises:
            ValidationError: If the graph is not well-formed (nothing is written)
            MissingDirectoryError: If a module type has no directory (nothing is written)
            GenerationError: If a file cannot be written
        """
        logger.info("Validating graph...")
        validate_graph(self.graph, self.configuration)
        logger.info("Graph validation passed")

        self._paths = {
            node.module.name: Path(node.module.resolved_path(self.configuration))
            for node in self.graph
        }

        self._result = GenerationResult()
        for node in self.graph:
            if node.module.is_root:
                self._generate_root_package(node)
            else:
                self._generate_package(node)

            if node.exports:
                self._generate_exports(node)

        logger.info("Generated %d files", len(self._result.written))
        return self._result

    def generate_graphs(self) -> list[Path]:
        """Write target-level and module-level DOT files to the output root."""
        renderer = GraphRenderer(self.graph, self.configuration)
        detailed = self._write(Path(DETAILED_GRAPH_FILE), renderer.render_dot())
        modules = self._write(Path(MODULE_GRAPH_FILE), renderer.render_module_level_dot())
        return [detailed, modules]

    # ── Packages ─────────────────────────────────────────────────────

    def _generate_package(self, node: ModuleNode) -> None:
        module_path = self._paths[node.module.name]
        is_new_module = not (self.root_path / module_path).exists()
        self._mkdir(module_path)

        if is_new_module:
            logger.debug("Scaffolding new module %s", node.module.name)
            self._create_sources(node, module_path)
            self._result.scaffolded_modules.append(node.module.name)

        self._write(module_path / "Package.swift", render_package(node, self.configuration))

    def _generate_root_package(self, node: ModuleNode) -> None:
        module_path = self._paths[node.module.name]
        self._write(module_path / "_" / "Tests.swift", render_root_placeholder())
        self._write(
            module_path / "Package.swift",
            render_root_package(node, self.configuration, self.graph),
        )

    def _generate_exports(self, node: ModuleNode) -> None:
        module_path = self._paths[node.module.name]
        main_target = node.module.target_name(ModuleTarget.MAIN)
        self._write(
            module_path / "Sources" / main_target / exports_file_name(node),
            render_exports(node),
        )

    # ── Scaffolding ──────────────────────────────────────────────────

    def uses_modular_dependency_container(self, node: ModuleNode) -> bool:
        return node.depends_on(MODULAR_DEPENDENCY_CONTAINER, self.configuration)

    def uses_modular_navigation(self, node: ModuleNode) -> bool:
        return node.depends_on(MODULAR_NAVIGATION, self.configuration)

    def _create_sources(self, node: ModuleNode, module_path: Path) -> None:
        module = node.module
        for target in module.targets:
            target_name = module.target_name(target)
            target_path = module_path / "Sources" / target_name

            if target == ModuleTarget.MACRO_IMPLEMENTATION:
                self._write(target_path / f"{target_name}.swift", render_placeholder_source(target_name))
                continue

            support = target_path / "Support"
            # The namespace enum takes the main target's placeholder file name
            if target == ModuleTarget.MAIN and module.uses_namespace:
                self._write(support / f"{target_name}.swift", render_namespace(module))
            else:
                self._write(support / f"{target_name}.swift", render_placeholder_source(target_name))
            self._write(
                support / "ModuleLogger.swift",
                render_module_logger(module, target, self.configuration),
            )

            if target == ModuleTarget.MAIN and self.uses_modular_dependency_container(node):
                self._write(
                    target_path / "Dependencies" / f"{module.name}Dependencies.swift",
                    render_dependencies_file(module),
                )

            if target == ModuleTarget.MAIN and self.uses_modular_navigation(node):
                has_dependencies = self.uses_modular_dependency_container(node)
                for file_name, content in render_navigation_files(module, has_dependencies):
                    self._write(target_path / "Navigation" / file_name, content)

        if module.has_tests:
            tests_path = module_path / "Tests" / f"{module.name}Tests"
            self._write(tests_path / f"{module.name}Tests.swift", render_placeholder_test(module))

    # ── Filesystem ───────────────────────────────────────────────────

    def _mkdir(self, relative: Path) -> Path:
        path = self.root_path / relative
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise GenerationError(path, str(e))
        return path

    def _write(self, relative: Path, content: str) -> Path:
        self._mkdir(relative.parent)
        path = self.root_path / relative
        try:
            path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise GenerationError(path, str(e))

        logger.info("Wrote %s", relative)
        self._result.written.append(relative)
        return relative
