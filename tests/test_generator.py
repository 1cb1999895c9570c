"""Tests for generator.py - writing packages to disk."""

from pathlib import Path

import pydot
import pytest

from package_generator.examples import example_configuration, example_graph
from package_generator.config import ModuleDirectoryConfiguration, PackageConfiguration
from package_generator.exceptions import CyclicDependencyError, GenerationError, MissingDirectoryError
from package_generator.first_class import MODULAR_DEPENDENCY_CONTAINER, MODULAR_NAVIGATION
from package_generator.generator import (
    DETAILED_GRAPH_FILE,
    MODULE_GRAPH_FILE,
    PackageGenerator,
)
from package_generator.models import Module, ModuleNode, ModuleType, ProductType


def _files(root):
    return sorted(str(p.relative_to(root)) for p in root.rglob("*") if p.is_file())


class TestGenerate:
    def test_scaffolds_new_modules(self, tmp_path, three_module_graph, configuration):
        result = PackageGenerator(three_module_graph, configuration, tmp_path).generate()

        assert result.scaffolded_modules == ["Util", "Client", "Screen"]
        assert _files(tmp_path / "Modules" / "Clients" / "Client") == [
            "Package.swift",
            "Sources/Client/Support/Client.swift",
            "Sources/Client/Support/ModuleLogger.swift",
            "Sources/ClientInterface/Support/ClientInterface.swift",
            "Sources/ClientInterface/Support/ModuleLogger.swift",
            "Tests/ClientTests/ClientTests.swift",
        ]
        assert Path("Modules/Screens/Screen/Package.swift") in result.written
        assert all(not path.is_absolute() for path in result.written)

    def test_nothing_written_when_invalid(self, tmp_path, configuration):
        a = Module.of_type("A", ModuleType.UTILITY)
        b = Module.of_type("B", ModuleType.UTILITY)
        generator = PackageGenerator([ModuleNode(a, [b]), ModuleNode(b, [a])], configuration, tmp_path)

        with pytest.raises(CyclicDependencyError):
            generator.generate()
        assert list(tmp_path.iterdir()) == []

    def test_existing_module_keeps_sources(self, tmp_path, three_module_graph, configuration):
        existing = tmp_path / "Modules" / "Utilities" / "Util"
        existing.mkdir(parents=True)
        (existing / "Handwritten.swift").write_text("// mine\n")

        result = PackageGenerator(three_module_graph, configuration, tmp_path).generate()

        assert "Util" not in result.scaffolded_modules
        assert _files(existing) == ["Handwritten.swift", "Package.swift"]
        assert (existing / "Handwritten.swift").read_text() == "// mine\n"

    def test_manifest_rewritten_on_rerun(self, tmp_path, three_module_graph, configuration):
        PackageGenerator(three_module_graph, configuration, tmp_path).generate()
        manifest = tmp_path / "Modules" / "Utilities" / "Util" / "Package.swift"
        manifest.write_text("stale")

        result = PackageGenerator(three_module_graph, configuration, tmp_path).generate()
        assert result.scaffolded_modules == []
        assert manifest.read_text().startswith("// swift-tools-version: 5.10")

    def test_exports_file(self, tmp_path, util, client, configuration):
        graph = [ModuleNode(util), ModuleNode(client, [util], exports=[util])]
        PackageGenerator(graph, configuration, tmp_path).generate()

        exports = tmp_path / "Modules/Clients/Client/Sources/Client/Client+Exports.swift"
        assert exports.read_text().endswith("@_exported import Util\n")

    def test_dependency_container_scaffolding(self, tmp_path, configuration):
        feature = Module.of_type("Feed", ModuleType.SCREEN, uses_namespace=True)
        graph = [ModuleNode(MODULAR_DEPENDENCY_CONTAINER), ModuleNode(feature, [MODULAR_DEPENDENCY_CONTAINER])]
        generator = PackageGenerator(graph, configuration, tmp_path)
        generator.generate()

        sources = tmp_path / "Modules/Screens/Feed/Sources/Feed"
        assert (sources / "Dependencies" / "FeedDependencies.swift").exists()
        assert (sources / "Support" / "Feed.swift").read_text().endswith("public enum Feed {}\n")
        assert not (tmp_path / "Modules/Screens/Feed/Sources/FeedViews/Dependencies").exists()
        assert generator.uses_modular_dependency_container(graph[1])
        assert not generator.uses_modular_dependency_container(graph[0])

    def test_nothing_written_when_a_directory_is_missing(self, tmp_path, util, screen):
        # Util resolves fine; Screen's type has no directory
        configuration = PackageConfiguration(
            app_name="TestApp",
            module_directory_configuration=ModuleDirectoryConfiguration(
                directory_for_type={ModuleType.UTILITY: "Modules/Utilities"}
            ),
        )
        graph = [ModuleNode(util), ModuleNode(screen, [util])]

        with pytest.raises(MissingDirectoryError):
            PackageGenerator(graph, configuration, tmp_path).generate()
        assert list(tmp_path.iterdir()) == []

    def test_macro_implementation_placeholder(self, tmp_path, configuration):
        macro = Module.of_type("Copyable", ModuleType.MACRO, product_type=ProductType.MACRO, has_tests=False)
        PackageGenerator([ModuleNode(macro)], configuration, tmp_path).generate()

        assert _files(tmp_path / "Modules/Macros/Copyable") == [
            "Package.swift",
            "Sources/Copyable/Support/Copyable.swift",
            "Sources/Copyable/Support/ModuleLogger.swift",
            "Sources/CopyableImplementation/CopyableImplementation.swift",
        ]

    def test_root_package(self, tmp_path, util, configuration):
        root = Module.of_type("App", ModuleType.ROOT, product_type=ProductType.NONE, has_tests=False)
        graph = [ModuleNode(util), ModuleNode(root, [util])]
        PackageGenerator(graph, configuration, tmp_path).generate()

        assert (tmp_path / "_" / "Tests.swift").exists()
        assert 'name: "AppTestTarget"' in (tmp_path / "Package.swift").read_text()

    def test_write_failure(self, tmp_path, three_module_graph, configuration):
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        with pytest.raises(GenerationError):
            PackageGenerator(three_module_graph, configuration, blocker).generate()

    def test_bundled_example(self, tmp_path):
        result = PackageGenerator(example_graph(), example_configuration(), tmp_path).generate()

        assert len(result.scaffolded_modules) == 7
        assert (tmp_path / "Package.swift").exists()
        assert (tmp_path / "Modules/Screens/ScreenA/Sources/ScreenA/Dependencies").exists() is False
        exports = tmp_path / (
            "Modules/Utilities/DependencyContainer/Sources/DependencyContainer/"
            "DependencyContainer+Exports.swift"
        )
        assert exports.exists()


class TestNavigationScaffolding:
    NAVIGATION_FILES = [
        "FeedDestination+Live.swift",
        "FeedDestination+Mock.swift",
        "FeedDestination.swift",
        "FeedDestinationState.swift",
        "FeedDestinationView.swift",
    ]

    def _generate(self, tmp_path, configuration, feature, dependencies):
        graph = [ModuleNode(module) for module in dependencies] + [ModuleNode(feature, dependencies)]
        generator = PackageGenerator(graph, configuration, tmp_path)
        generator.generate()
        return generator, graph

    def test_files_written_for_main_target(self, tmp_path, configuration):
        feature = Module.of_type("Feed", ModuleType.SCREEN)
        generator, graph = self._generate(tmp_path, configuration, feature, [MODULAR_NAVIGATION])

        navigation = tmp_path / "Modules/Screens/Feed/Sources/Feed/Navigation"
        assert _files(navigation) == self.NAVIGATION_FILES
        assert not (tmp_path / "Modules/Screens/Feed/Sources/FeedViews/Navigation").exists()
        assert generator.uses_modular_navigation(graph[-1])
        assert not generator.uses_modular_navigation(graph[0])

    def test_live_entry_without_container(self, tmp_path, configuration):
        feature = Module.of_type("Feed", ModuleType.SCREEN)
        self._generate(tmp_path, configuration, feature, [MODULAR_NAVIGATION])

        live = (tmp_path / "Modules/Screens/Feed/Sources/Feed/Navigation/FeedDestination+Live.swift").read_text()
        assert "public extension FeedDestination {" in live
        assert "publicDestination: Public," in live
        assert "// TODO: Add dependencies parameter" in live
        assert "dependencies:" not in live

    def test_live_entry_takes_dependencies_with_container(self, tmp_path, configuration):
        feature = Module.of_type("Feed", ModuleType.SCREEN, uses_namespace=True)
        self._generate(
            tmp_path, configuration, feature, [MODULAR_NAVIGATION, MODULAR_DEPENDENCY_CONTAINER]
        )

        sources = tmp_path / "Modules/Screens/Feed/Sources/Feed"
        live = (sources / "Navigation" / "FeedDestination+Live.swift").read_text()
        assert "public extension Feed {" in live
        assert "publicDestination: Destination.Public," in live
        assert "dependencies: Dependencies" in live
        assert (sources / "Dependencies" / "FeedDependencies.swift").exists()

    def test_existing_module_not_rescaffolded(self, tmp_path, configuration):
        (tmp_path / "Modules/Screens/Feed").mkdir(parents=True)
        feature = Module.of_type("Feed", ModuleType.SCREEN)
        self._generate(tmp_path, configuration, feature, [MODULAR_NAVIGATION])

        assert not (tmp_path / "Modules/Screens/Feed/Sources").exists()


class TestGenerateGraphs:
    def test_writes_both_files(self, tmp_path, three_module_graph, configuration):
        written = PackageGenerator(three_module_graph, configuration, tmp_path).generate_graphs()

        assert written == [Path(DETAILED_GRAPH_FILE), Path(MODULE_GRAPH_FILE)]
        assert (tmp_path / DETAILED_GRAPH_FILE).read_text().startswith("digraph")
        (parsed,) = pydot.graph_from_dot_data((tmp_path / MODULE_GRAPH_FILE).read_text())
        assert [(e.get_source(), e.get_destination()) for e in parsed.get_edges()] == [("Screen", "Client")]
