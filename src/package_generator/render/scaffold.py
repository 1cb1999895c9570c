"""Placeholder source files written once, when a module is first scaffolded."""

from typing import Optional

from ..config import PackageConfiguration
from ..models import Module, ModuleTarget


def _file_header(file_name: str, owner: str) -> str:
    return f"//\n//  {file_name}\n//  {owner}\n//\n"


def render_placeholder_source(name: str) -> str:
    return _file_header(f"{name}.swift", name) + "\n"


def render_placeholder_test(module: Module) -> str:
    name = module.name
    return (
        _file_header(f"{name}Tests.swift", f"{name}Tests")
        + "\n"
        + "import Testing\n"
        + f"@testable import {name}\n"
    )


def render_root_placeholder() -> str:
    return (
        "//\n"
        "//  Tests.swift\n"
        "//  Root Test Target\n"
        "//\n"
        "//  Exists only because every target needs at least one source file.\n"
        "//\n"
    )


def logger_category(module: Module, target: ModuleTarget) -> str:
    """``Screen.ScreenAViews`` for typed modules, the bare target name otherwise."""
    target_name = module.target_name(target)
    if module.module_type is None:
        return target_name
    return f"{module.module_type.value.capitalize()}.{target_name}"


def render_module_logger(
    module: Module, target: ModuleTarget, configuration: PackageConfiguration
) -> str:
    target_name = module.target_name(target)
    return (
        "//\n"
        "//  ModuleLogger.swift\n"
        f"//  {target_name}\n"
        "//\n"
        "\n"
        "import OSLog\n"
        "\n"
        "private let logger = Logger(\n"
        f'    subsystem: Bundle.main.bundleIdentifier ?? "{configuration.app_name}",\n'
        f'    category: "{logger_category(module, target)}"\n'
        ")\n"
    )


def render_namespace(module: Module) -> str:
    return _file_header(f"{module.name}.swift", module.name) + f"\npublic enum {module.name} {{}}\n"


def render_dependencies_file(module: Module) -> str:
    """Dependency requirements for modules using ModularDependencyContainer."""
    name = module.name
    if module.uses_namespace:
        declaration = (
            f"extension {name} {{\n"
            "    @DependencyRequirements([\n"
            "    ])\n"
            "    public struct Dependencies: DependencyRequirements {\n"
            "        public func registerDependencies(in container: "
            "ModularDependencyContainer.DependencyContainer<Dependencies>) {\n"
            "        }\n"
            "    }\n"
            "}\n"
        )
    else:
        declaration = (
            "@DependencyRequirements([\n"
            "])\n"
            f"public struct {name}Dependencies: DependencyRequirements {{\n"
            "    public func registerDependencies(in container: "
            f"ModularDependencyContainer.DependencyContainer<{name}Dependencies>) {{\n"
            "    }\n"
            "}\n"
        )
    return (
        _file_header(f"{name}Dependencies.swift", name)
        + "\n"
        + "import ModularDependencyContainer\n"
        + "\n"
        + declaration
    )


# ── Navigation ───────────────────────────────────────────────────────

_NAVIGATION_IMPORTS = "import ModularNavigation\nimport SwiftUI\n"


def _indent(text: str, level: int = 1) -> str:
    pad = "    " * level
    return "\n".join(pad + line if line else line for line in text.split("\n"))


class _NavigationNames:
    """Swift type names of a module's navigation scaffold.

    Namespaced modules nest ``Destination``, ``DestinationState`` and
    ``DestinationView`` in their namespace enum; others prefix them with the
    module name.
    """

    def __init__(self, module: Module):
        self.module = module
        self.namespaced = module.uses_namespace
        prefix = "" if self.namespaced else module.name
        self.destination = f"{prefix}Destination"
        self.state = f"{prefix}DestinationState"
        self.view = f"{prefix}DestinationView"
        self.dependencies = f"{prefix}Dependencies"
        self.public_destination = "Destination.Public" if self.namespaced else "Public"
        # Type that carries Entry, liveEntry and mockEntry
        self.entry_owner = module.name if self.namespaced else f"{module.name}Destination"

    def declare(self, declaration: str, public: bool) -> str:
        """Top-level declaration, wrapped in the namespace extension when needed."""
        visibility = "public " if public else ""
        if self.namespaced:
            return f"{visibility}extension {self.module.name} {{\n{_indent(declaration)}\n}}\n"
        return f"{visibility}{declaration}\n"


def _navigation_file(module: Module, suffix: str, body: str) -> str:
    return (
        _file_header(f"{module.name}{suffix}.swift", module.name)
        + "\n"
        + _NAVIGATION_IMPORTS
        + "\n"
        + body
    )


def _destination_struct(names: _NavigationNames) -> str:
    return "\n".join(
        [
            f"struct {names.destination}: Hashable {{",
            "    public enum Public: Hashable {",
            "        case main",
            "    }",
            "",
            "    enum Internal: Hashable {",
            "        // TODO: Add internal destinations or remove if not needed",
            "    }",
            "",
            "    enum External: Hashable {",
            "        // TODO: Add external destinations or remove if not needed",
            "    }",
            "",
            "    enum DestinationType: Hashable {",
            "        case `public`(Public)",
            "        case `internal`(Internal)",
            "        case external(External)",
            "    }",
            "",
            "    var type: DestinationType",
            "",
            "    init(_ destination: Public) {",
            "        self.type = .public(destination)",
            "    }",
            "",
            "    init(_ destination: Internal) {",
            "        self.type = .internal(destination)",
            "    }",
            "",
            "    init(_ destination: External) {",
            "        self.type = .external(destination)",
            "    }",
            "",
            "    public static func `public`(_ destination: Public) -> Self {",
            "        self.init(destination)",
            "    }",
            "",
            "    static func `internal`(_ destination: Internal) -> Self {",
            "        self.init(destination)",
            "    }",
            "",
            "    static func external(_ destination: External) -> Self {",
            "        self.init(destination)",
            "    }",
            "}",
        ]
    )


def render_navigation_destination(module: Module) -> str:
    names = _NavigationNames(module)
    entry = "\n".join(
        [
            f"public extension {names.entry_owner} {{",
            f"    typealias Entry = ModuleEntry<{names.destination}, {names.view}>",
            "}",
        ]
    )
    body = (
        "// MARK: - Destination Enum\n\n"
        + names.declare(_destination_struct(names), public=True)
        + "\n// MARK: - Entry Point\n\n"
        + entry
        + "\n"
    )
    return _navigation_file(module, "Destination", body)


def render_navigation_destination_state(module: Module) -> str:
    names = _NavigationNames(module)
    declaration = f"enum {names.state} {{\n    // PUBLIC\n    case main\n}}"
    body = "// MARK: - DestinationState Enum\n\n" + names.declare(declaration, public=False)
    return _navigation_file(module, "DestinationState", body)


def render_navigation_destination_view(module: Module) -> str:
    names = _NavigationNames(module)
    declaration = "\n".join(
        [
            f"struct {names.view}: View {{",
            f"    let state: {names.state}",
            "    let mode: NavigationMode",
            f"    let client: NavigationClient<{names.destination}>",
            "",
            "    init(",
            f"        state: {names.state},",
            "        mode: NavigationMode,",
            f"        client: NavigationClient<{names.destination}>",
            "    ) {",
            "        self.state = state",
            "        self.mode = mode",
            "        self.client = client",
            "    }",
            "",
            "    public var body: some View {",
            "        switch state {",
            "        // PUBLIC",
            "        case .main:",
            '            Text("main View")',
            "        }",
            "    }",
            "}",
        ]
    )
    return _navigation_file(module, "DestinationView", names.declare(declaration, public=True))


def _entry_builder(names: _NavigationNames) -> str:
    return "\n".join(
        [
            "Entry(",
            "    entryDestination: .public(publicDestination),",
            "    builder: { destination, mode, navigationClient in",
            f"        let state: {names.state}",
            "        switch destination.type {",
            "        // PUBLIC",
            "        case .public(let publicDestination):",
            "            switch publicDestination {",
            "            case .main:",
            "                state = .main",
            "            }",
            "",
            "        // INTERNAL",
            "        case .internal:",
            '            fatalError("Add an internal switch once you add internal destinations.")',
            "",
            "        // EXTERNAL",
            "        case .external:",
            '            fatalError("Add an external switch once you add external destinations.")',
            "        }",
            "",
            "        // DESTINATION VIEW",
            f"        return {names.view}(",
            "            state: state,",
            "            mode: mode,",
            "            client: navigationClient",
            "        )",
            "    }",
            ")",
        ]
    )


def _entry_function(
    names: _NavigationNames,
    name: str,
    parameters: list[str],
    trailing: Optional[str] = None,
) -> str:
    """``static func <name>(...) -> Entry`` on the entry owner.

    ``trailing`` is a comment line placed after the parameters.
    """
    signature = ",\n".join(f"        {parameter}" for parameter in parameters)
    if trailing is not None:
        signature += f",\n        {trailing}"
    lines = [
        f"public extension {names.entry_owner} {{",
        "    @MainActor",
        f"    static func {name}(",
        signature,
        "    ) -> Entry {",
        _indent(_entry_builder(names), 2),
        "    }",
        "}",
    ]
    return "\n".join(lines) + "\n"


def render_navigation_live(module: Module, has_dependencies: bool) -> str:
    """Live entry point; takes the module's dependencies when it has any."""
    names = _NavigationNames(module)
    parameters = [f"publicDestination: {names.public_destination}"]
    if has_dependencies:
        parameters.append(f"dependencies: {names.dependencies}")
    body = _entry_function(
        names,
        "liveEntry",
        parameters,
        trailing=None if has_dependencies else "// TODO: Add dependencies parameter",
    )
    return _navigation_file(module, "Destination+Live", body)


def render_navigation_mock(module: Module) -> str:
    names = _NavigationNames(module)
    body = _entry_function(
        names, "mockEntry", [f"publicDestination: {names.public_destination} = .main"]
    )
    preview = "\n".join(
        [
            "// MARK: - SwiftUI Preview",
            "",
            "#Preview {",
            f"    let entry = {names.entry_owner}.mockEntry()",
            "    let rootClient = NavigationClient<RootDestination>.root()",
            "",
            "    NavigationDestinationView(",
            "        previousClient: rootClient,",
            "        mode: .root,",
            "        entry: entry",
            "    )",
            "}",
        ]
    )
    return _navigation_file(module, "Destination+Mock", body + "\n" + preview + "\n")


def render_navigation_files(module: Module, has_dependencies: bool) -> list[tuple[str, str]]:
    """(file name, content) for every file of the ``Navigation/`` scaffold."""
    return [
        (f"{module.name}Destination.swift", render_navigation_destination(module)),
        (f"{module.name}DestinationState.swift", render_navigation_destination_state(module)),
        (f"{module.name}DestinationView.swift", render_navigation_destination_view(module)),
        (f"{module.name}Destination+Live.swift", render_navigation_live(module, has_dependencies)),
        (f"{module.name}Destination+Mock.swift", render_navigation_mock(module)),
    ]
