"""Shared test fixtures for package generator tests."""

import pytest

from package_generator.config import ModuleDirectoryConfiguration, PackageConfiguration
from package_generator.models import (
    Module,
    ModuleDependency,
    ModuleNode,
    ModuleTarget,
    ModuleTargetType,
    ModuleType,
    Platform,
)


def pytest_addoption(parser):
    """Add --run-slow option for slow tests."""
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="run slow tests",
    )


def pytest_configure(config):
    """Configure slow marker."""
    config.addinivalue_line("markers", "slow: mark test as slow to run")


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless --run-slow is given."""
    if config.getoption("--run-slow"):
        return
    skip_slow = pytest.mark.skip(reason="need --run-slow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


@pytest.fixture
def configuration():
    """Plain configuration with the default directory layout and no globals."""
    return PackageConfiguration(
        app_name="TestApp",
        supported_platforms=(Platform.ios(17), Platform.macos(14)),
        swift_settings=('.enableUpcomingFeature("StrictConcurrency")',),
    )


@pytest.fixture
def util():
    return Module.of_type("Util", ModuleType.UTILITY)


@pytest.fixture
def client():
    return Module.of_type("Client", ModuleType.CLIENT)


@pytest.fixture
def screen():
    return Module.of_type("Screen", ModuleType.SCREEN)


@pytest.fixture
def three_module_graph(util, client, screen):
    """Util (no deps), Client (defaults only), Screen -> Client.main."""
    return [
        ModuleNode(util),
        ModuleNode(client),
        ModuleNode(screen, {ModuleTarget.MAIN: [ModuleDependency(client, ModuleTarget.MAIN)]}),
    ]


@pytest.fixture
def global_configuration(util):
    """Every screen's main target gets Util injected."""
    return PackageConfiguration(
        app_name="TestApp",
        module_directory_configuration=ModuleDirectoryConfiguration(),
        global_dependencies={
            ModuleTargetType(ModuleType.SCREEN, ModuleTarget.MAIN): (ModuleDependency(util),),
        },
    )
