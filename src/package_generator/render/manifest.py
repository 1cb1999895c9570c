"""Package.swift rendering for module packages and the root aggregator."""

from __future__ import annotations

from typing import Optional, Sequence

from ..config import PackageConfiguration
from ..models import Module, ModuleDependency, ModuleNode, ModuleTarget, ModuleType, ProductType
from ..paths import relative_path

GENERATED_BANNER = "// Generated file, do not edit by hand"

# Grouping order used by the root aggregator
GROUP_ORDER: tuple[Optional[ModuleType], ...] = (
    ModuleType.UTILITY,
    ModuleType.CLIENT,
    ModuleType.COORDINATOR,
    ModuleType.SCREEN,
    ModuleType.MACRO,
    None,
)

_PRODUCT_KEYWORD = {
    ProductType.LIBRARY: "library",
    ProductType.EXECUTABLE: "executable",
    ProductType.MACRO: "library",
    ProductType.PLUGIN: "plugin",
}


def _indent(text: str, level: int) -> str:
    pad = "    " * level
    return "\n".join(pad + line if line else line for line in text.split("\n"))


def _list(items: Sequence[str], level: int) -> str:
    """Comma-separated, one item per line, indented to ``level``."""
    return ",\n".join(_indent(item, level) for item in items)


# ── Module packages ──────────────────────────────────────────────────


def render_dependency(node: ModuleNode, dependency: ModuleDependency) -> str:
    """Target dependency entry: same-module targets by name, others as products."""
    if node.is_internal(dependency):
        return f'"{dependency.target_name}"'
    return f'.product(name: "{dependency.target_name}", package: "{dependency.module_name}")'


def render_products(module: Module) -> list[str]:
    if module.product_type is ProductType.NONE:
        return []

    keyword = _PRODUCT_KEYWORD[module.product_type]
    products = []
    for target in module.targets:
        # The compiler plugin is an implementation detail of the macro client
        if target == ModuleTarget.MACRO_IMPLEMENTATION:
            continue
        name = module.target_name(target)
        products.append(f'.{keyword}(name: "{name}", targets: ["{name}"])')
    return products


def render_package_dependencies(
    node: ModuleNode, configuration: PackageConfiguration
) -> list[str]:
    module_path = node.module.resolved_path(configuration)
    entries = [
        f".package(url: \"{dependency.url}\", {dependency.requirement})"
        for dependency in node.module.package_dependencies
    ]
    for module in node.external_modules(configuration):
        path = relative_path(module_path, module.resolved_path(configuration))
        entries.append(f'.package(path: "{path}")')
    return entries


def render_target(
    node: ModuleNode, target: ModuleTarget, configuration: PackageConfiguration
) -> str:
    name = node.module.target_name(target)

    if target == ModuleTarget.MACRO_IMPLEMENTATION:
        return "\n".join(
            [
                ".macro(",
                f'    name: "{name}",',
                "    dependencies: [",
                '        .product(name: "SwiftSyntaxMacros", package: "swift-syntax"),',
                '        .product(name: "SwiftCompilerPlugin", package: "swift-syntax")',
                "    ]",
                ")",
            ]
        )

    lines = [".target(", f'    name: "{name}",']
    dependencies = [
        render_dependency(node, dependency)
        for dependency in node.dependencies_for(target, configuration)
    ]
    if dependencies:
        lines.append("    dependencies: [")
        lines.append(_list(dependencies, 2))
        lines.append("    ],")
    lines.append("    swiftSettings: swiftSettings")
    lines.append(")")
    return "\n".join(lines)


def render_test_target(module: Module) -> str:
    testable = [
        module.target_name(target)
        for target in module.targets
        if target != ModuleTarget.MACRO_IMPLEMENTATION
    ]
    return "\n".join(
        [
            ".testTarget(",
            f'    name: "{module.name}Tests",',
            "    dependencies: [",
            _list([f'"{name}"' for name in testable], 2),
            "    ]",
            ")",
        ]
    )


def render_package(node: ModuleNode, configuration: PackageConfiguration) -> str:
    """Package.swift for one module."""
    module = node.module

    header = [f"// swift-tools-version: {configuration.swift_tools_version}", GENERATED_BANNER]
    header.append("import PackageDescription")
    if module.macro_config is not None and module.macro_config.requires_compiler_plugin_support:
        header.append("import CompilerPluginSupport")

    settings = ["let swiftSettings: [PackageDescription.SwiftSetting] = ["]
    if configuration.swift_settings:
        settings.append(_list(list(configuration.swift_settings), 1))
    settings.append("]")

    platforms = ", ".join(platform.render() for platform in module.resolved_platforms(configuration))
    body = ["let package = Package(", f'    name: "{module.name}",', f"    platforms: [{platforms}],"]

    products = render_products(module)
    if products:
        body += ["    products: [", _list(products, 2), "    ],"]

    package_dependencies = render_package_dependencies(node, configuration)
    if package_dependencies:
        body += ["    dependencies: [", _list(package_dependencies, 2), "    ],"]

    targets = [render_target(node, target, configuration) for target in module.targets]
    if module.has_tests:
        targets.append(render_test_target(module))
    body += ["    targets: [", _list(targets, 2), "    ]", ")"]

    return "\n".join(header + [""] + settings + [""] + body) + "\n"


# ── Root aggregator ──────────────────────────────────────────────────


def _group_label(module_type: Optional[ModuleType]) -> str:
    return module_type.label if module_type is not None else "Other"


def group_by_type(modules: Sequence[Module]) -> list[tuple[str, list[Module]]]:
    """Modules grouped in ``GROUP_ORDER``, sorted by name within a group."""
    groups = []
    for module_type in GROUP_ORDER:
        members = sorted(
            (module for module in modules if module.module_type is module_type),
            key=lambda module: module.name,
        )
        if members:
            groups.append((_group_label(module_type), members))
    return groups


def render_root_package(
    node: ModuleNode,
    configuration: PackageConfiguration,
    graph: Sequence[ModuleNode],
) -> str:
    """Aggregator package depending on every module the root node depends on.

    Dependencies are looked up in ``graph`` so the full module declarations
    (and thus their locations) are used.
    """
    by_name = {candidate.module.name: candidate.module for candidate in graph}
    modules = [
        by_name.get(module.name, module) for module in node.external_modules(configuration)
    ]
    root_name = node.module.name
    root_path = node.module.resolved_path(configuration)
    platforms = ", ".join(
        platform.render() for platform in node.module.resolved_platforms(configuration)
    )

    package_lines: list[str] = []
    product_lines: list[str] = []
    for label, members in group_by_type(modules):
        package_lines.append(f"// {label}")
        product_lines.append(f"// {label}")
        for module in members:
            path = relative_path(root_path, module.resolved_path(configuration))
            package_lines.append(f'.package(path: "{path}"),')
            product_lines.append(
                f'.product(name: "{module.target_name(ModuleTarget.MAIN)}", package: "{module.name}"),'
            )
        package_lines.append("")
        product_lines.append("")

    for lines in (package_lines, product_lines):
        if lines:
            lines.pop()
            lines[-1] = lines[-1].rstrip(",")

    body = [
        f"// swift-tools-version: {configuration.swift_tools_version}",
        GENERATED_BANNER,
        "import PackageDescription",
        "",
        "let package = Package(",
        f'    name: "{root_name}",',
        f"    platforms: [{platforms}],",
        "    dependencies: [",
        _indent("\n".join(package_lines), 2),
        "    ],",
        "    targets: [",
        "        // NOT FOR PRODUCTION USE",
        "        // This target exists only for workspace visibility and code search.",
        "        // The app should import modules directly, not through this target.",
        "        .target(",
        f'            name: "{root_name}TestTarget",',
        "            dependencies: [",
        _indent("\n".join(product_lines), 4),
        "            ],",
        '            path: "_"',
        "        )",
        "    ]",
        ")",
    ]
    return "\n".join(body) + "\n"
