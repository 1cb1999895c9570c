"""Bundled example: a small app with screens, a coordinator, a client and macros.

``example_graph()`` validates against ``example_configuration()`` and is what
``package-generator --example`` uses.
"""

from __future__ import annotations

from .config import ModuleDirectoryConfiguration, PackageConfiguration
from .models import (
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

# Screens
SCREEN_A = Module.of_type("ScreenA", ModuleType.SCREEN)
SCREEN_B = Module.of_type("ScreenB", ModuleType.SCREEN)

# Coordinators
TAB_COORDINATOR = Module.of_type("TabCoordinator", ModuleType.COORDINATOR, has_tests=False)

# Utilities
DEPENDENCY_CONTAINER = Module.of_type("DependencyContainer", ModuleType.UTILITY)

# Macros
DEPENDENCY_REQUIREMENTS = Module.of_type(
    "DependencyRequirements",
    ModuleType.MACRO,
    product_type=ProductType.MACRO,
    has_tests=False,
    macro_config=MacroConfiguration(),
)
COPYABLE_MACROS = Module.of_type(
    "CopyableMacros",
    ModuleType.MACRO,
    product_type=ProductType.MACRO,
    has_tests=False,
    macro_config=MacroConfiguration(),
)

# Clients
CONTENT_CLIENT = Module.of_type("ContentClient", ModuleType.CLIENT)

# Root aggregator
EXAMPLE_ROOT = Module.of_type(
    "ExampleApp", ModuleType.ROOT, product_type=ProductType.NONE, has_tests=False
)


def example_configuration() -> PackageConfiguration:
    return PackageConfiguration(
        app_name="ExampleApp",
        supported_platforms=(Platform.ios(17), Platform.macos(15)),
        swift_settings=(
            '.unsafeFlags(["-Wall", "-Wextra"])',
            '.enableUpcomingFeature("StrictConcurrency")',
        ),
        module_directory_configuration=ModuleDirectoryConfiguration(
            directory_for_type={
                ModuleType.CLIENT: "Modules/Clients",
                ModuleType.COORDINATOR: "Modules/Coordinators",
                ModuleType.MACRO: "Modules/Macros",
                ModuleType.SCREEN: "Modules/Screens",
                ModuleType.UTILITY: "Modules/Utilities",
            },
        ),
        global_dependencies={
            ModuleTargetType(ModuleType.COORDINATOR, ModuleTarget.MAIN): (
                ModuleDependency(DEPENDENCY_CONTAINER),
            ),
            ModuleTargetType(ModuleType.SCREEN, ModuleTarget.MAIN): (
                ModuleDependency(DEPENDENCY_CONTAINER),
            ),
            ModuleTargetType(ModuleType.SCREEN, ModuleTarget.VIEWS): (
                ModuleDependency(COPYABLE_MACROS),
            ),
        },
    )


def example_graph() -> list[ModuleNode]:
    feature_nodes = [
        ModuleNode(
            TAB_COORDINATOR,
            [
                ModuleDependency(SCREEN_A, ModuleTarget.VIEWS),
                ModuleDependency(SCREEN_B, ModuleTarget.VIEWS),
                ModuleDependency(DEPENDENCY_CONTAINER),
            ],
        ),
        ModuleNode(
            SCREEN_A,
            [
                ModuleDependency(DEPENDENCY_CONTAINER),
                ModuleDependency(CONTENT_CLIENT, ModuleTarget.INTERFACE),
            ],
        ),
        ModuleNode(
            SCREEN_B,
            [
                ModuleDependency(DEPENDENCY_CONTAINER),
                ModuleDependency(CONTENT_CLIENT, ModuleTarget.INTERFACE),
            ],
        ),
        ModuleNode(
            DEPENDENCY_CONTAINER,
            [DEPENDENCY_REQUIREMENTS],
            exports=[DEPENDENCY_REQUIREMENTS],
        ),
        ModuleNode(CONTENT_CLIENT),
        ModuleNode(DEPENDENCY_REQUIREMENTS),
        ModuleNode(COPYABLE_MACROS),
    ]
    root = ModuleNode(EXAMPLE_ROOT, [node.module for node in feature_nodes])
    return feature_nodes + [root]
