"""Tests for render/scaffold.py and render/exports.py - placeholder sources."""

from package_generator.models import Module, ModuleNode, ModuleTarget, ModuleType
from package_generator.render import (
    exports_file_name,
    logger_category,
    render_dependencies_file,
    render_exports,
    render_module_logger,
    render_namespace,
    render_navigation_files,
    render_placeholder_test,
)


class TestModuleLogger:
    def test_category_for_typed_module(self, screen):
        assert logger_category(screen, ModuleTarget.VIEWS) == "Screen.ScreenViews"

    def test_category_for_path_module(self):
        assert logger_category(Module.at_path("Vendor", "Vendor"), ModuleTarget.MAIN) == "Vendor"

    def test_subsystem_fallback(self, client, configuration):
        source = render_module_logger(client, ModuleTarget.INTERFACE, configuration)
        assert 'Bundle.main.bundleIdentifier ?? "TestApp"' in source
        assert 'category: "Client.ClientInterface"' in source
        assert "import OSLog" in source


class TestPlaceholders:
    def test_test_file(self, util):
        source = render_placeholder_test(util)
        assert "//  UtilTests.swift" in source
        assert "@testable import Util\n" in source

    def test_namespace(self, util):
        assert render_namespace(util).endswith("public enum Util {}\n")

    def test_dependencies_file(self, screen):
        source = render_dependencies_file(screen)
        assert "import ModularDependencyContainer" in source
        assert "public struct ScreenDependencies: DependencyRequirements {" in source

    def test_namespaced_dependencies_file(self):
        module = Module.of_type("Feed", ModuleType.SCREEN, uses_namespace=True)
        source = render_dependencies_file(module)
        assert "extension Feed {" in source
        assert "DependencyContainer<Dependencies>" in source


class TestNavigation:
    def _files(self, module, has_dependencies=False):
        return dict(render_navigation_files(module, has_dependencies))

    def test_file_names_in_order(self, screen):
        names = [name for name, _ in render_navigation_files(screen, has_dependencies=False)]
        assert names == [
            "ScreenDestination.swift",
            "ScreenDestinationState.swift",
            "ScreenDestinationView.swift",
            "ScreenDestination+Live.swift",
            "ScreenDestination+Mock.swift",
        ]

    def test_headers_and_imports(self, screen):
        for name, content in render_navigation_files(screen, has_dependencies=False):
            assert content.startswith(f"//\n//  {name}\n//  Screen\n//\n\nimport ModularNavigation\nimport SwiftUI\n")
    def test_flat_destination(self, screen):
        destination = self._files(screen)["ScreenDestination.swift"]
        assert "public struct ScreenDestination: Hashable {" in destination
        assert "        case `public`(Public)" in destination
        assert destination.endswith(
            "public extension ScreenDestination {\n"
            "    typealias Entry = ModuleEntry<ScreenDestination, ScreenDestinationView>\n"
            "}\n"
        )

    def test_namespaced_destination(self):
        feed = Module.of_type("Feed", ModuleType.SCREEN, uses_namespace=True)
        destination = self._files(feed)["FeedDestination.swift"]
        assert "public extension Feed {\n    struct Destination: Hashable {\n" in destination
        assert "    typealias Entry = ModuleEntry<Destination, DestinationView>\n" in destination

    def test_destination_state(self, screen):
        state = self._files(screen)["ScreenDestinationState.swift"]
        assert state.endswith("enum ScreenDestinationState {\n    // PUBLIC\n    case main\n}\n")
        assert "public enum" not in state

    def test_namespaced_destination_state(self):
        feed = Module.of_type("Feed", ModuleType.SCREEN, uses_namespace=True)
        state = self._files(feed)["FeedDestinationState.swift"]
        assert state.endswith("extension Feed {\n    enum DestinationState {\n        // PUBLIC\n        case main\n    }\n}\n")

    def test_destination_view(self, screen):
        view = self._files(screen)["ScreenDestinationView.swift"]
        assert "public struct ScreenDestinationView: View {" in view
        assert "    let client: NavigationClient<ScreenDestination>" in view
        assert '            Text("main View")' in view

    def test_live_entry_parameters(self, screen):
        without = self._files(screen)["ScreenDestination+Live.swift"]
        assert "        publicDestination: Public,\n        // TODO: Add dependencies parameter\n    ) -> Entry {" in without

        with_dependencies = self._files(screen, has_dependencies=True)["ScreenDestination+Live.swift"]
        assert "        publicDestination: Public,\n        dependencies: ScreenDependencies\n    ) -> Entry {" in with_dependencies

    def test_entry_builder(self, screen):
        live = self._files(screen)["ScreenDestination+Live.swift"]
        assert "    static func liveEntry(" in live
        assert "            let state: ScreenDestinationState" in live
        assert '                fatalError("Add an internal switch once you add internal destinations.")' in live
        assert "            return ScreenDestinationView(" in live

    def test_mock_entry_and_preview(self):
        feed = Module.of_type("Feed", ModuleType.SCREEN, uses_namespace=True)
        mock = self._files(feed)["FeedDestination+Mock.swift"]
        assert "        publicDestination: Destination.Public = .main\n    ) -> Entry {" in mock
        assert "#Preview {\n    let entry = Feed.mockEntry()\n" in mock
        assert "NavigationClient<RootDestination>.root()" in mock


class TestExports:
    def test_exports(self, util, client):
        node = ModuleNode(client, [util], exports=[util])
        assert exports_file_name(node) == "Client+Exports.swift"
        assert render_exports(node).endswith("\n@_exported import Util\n")
