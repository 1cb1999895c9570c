"""Tests for models/node.py - dependency resolution order and helpers."""

import pytest

from package_generator.config import PackageConfiguration
from package_generator.models import (
    Module,
    ModuleDependency,
    ModuleNode,
    ModuleTarget,
    ModuleTargetType,
    ModuleType,
)


class TestNormalization:
    def test_plain_list_is_main_target(self, util, client):
        node = ModuleNode(client, [util])
        assert node.dependencies == {ModuleTarget.MAIN: (ModuleDependency(util),)}

    def test_mapping_kept_per_target(self, util, screen):
        node = ModuleNode(screen, {ModuleTarget.VIEWS: [ModuleDependency(util)]})
        assert node.dependencies == {ModuleTarget.VIEWS: (ModuleDependency(util),)}

    def test_rejects_other_values(self, client):
        with pytest.raises(TypeError):
            ModuleNode(client, ["Util"])

    def test_exports_become_tuple(self, util, client):
        node = ModuleNode(client, [util], exports=[util])
        assert node.exports == (util,)


class TestDependencyKey:
    def test_same_module_and_target_are_equal(self):
        a = Module.of_type("Shared", ModuleType.UTILITY)
        b = Module.at_path("Shared", "Vendor/Shared")
        assert ModuleDependency(a) == ModuleDependency(b)
        assert hash(ModuleDependency(a)) == hash(ModuleDependency(b))

    def test_unspecified_and_explicit_main_differ(self, util):
        assert ModuleDependency(util) != ModuleDependency(util, ModuleTarget.MAIN)

    def test_both_point_at_main(self, util):
        assert ModuleDependency(util).resolved_target == ModuleTarget.MAIN
        assert ModuleDependency(util).target_name == "Util"

    def test_target_name(self, client):
        assert ModuleDependency(client, ModuleTarget.INTERFACE).target_name == "ClientInterface"


class TestDependenciesFor:
    def test_order_is_global_default_explicit(self, util, client):
        screen = Module.of_type("Screen", ModuleType.SCREEN)
        configuration = PackageConfiguration(
            global_dependencies={
                ModuleTargetType(ModuleType.SCREEN, ModuleTarget.MAIN): (ModuleDependency(util),),
            }
        )
        node = ModuleNode(screen, [ModuleDependency(client, ModuleTarget.INTERFACE)])

        assert node.dependencies_for(ModuleTarget.MAIN, configuration) == [
            ModuleDependency(util),
            ModuleDependency(screen, ModuleTarget.VIEWS),
            ModuleDependency(client, ModuleTarget.INTERFACE),
        ]

    def test_explicit_duplicate_of_global_dropped(self, util, screen, global_configuration):
        node = ModuleNode(screen, [ModuleDependency(util)])
        resolved = node.dependencies_for(ModuleTarget.MAIN, global_configuration)
        assert resolved.count(ModuleDependency(util)) == 1
        assert resolved[0] == ModuleDependency(util)

    def test_explicit_main_is_not_a_duplicate(self, util, screen, global_configuration):
        node = ModuleNode(screen, [ModuleDependency(util, ModuleTarget.MAIN)])
        resolved = node.dependencies_for(ModuleTarget.MAIN, global_configuration)
        assert resolved == [
            ModuleDependency(util),
            ModuleDependency(screen, ModuleTarget.VIEWS),
            ModuleDependency(util, ModuleTarget.MAIN),
        ]

    def test_duplicate_explicit_edges_collapse(self, util, configuration):
        consumer = Module.of_type("Consumer", ModuleType.UTILITY)
        node = ModuleNode(consumer, [util, util, ModuleDependency(util)])
        assert node.dependencies_for(ModuleTarget.MAIN, configuration) == [ModuleDependency(util)]

    def test_deterministic(self, util, client, screen, global_configuration):
        node = ModuleNode(
            screen,
            {
                ModuleTarget.MAIN: [ModuleDependency(client, ModuleTarget.INTERFACE), util],
                ModuleTarget.VIEWS: [client],
            },
        )
        first = [d.key for d in node.dependencies_for(ModuleTarget.MAIN, global_configuration)]
        for _ in range(5):
            again = [d.key for d in node.dependencies_for(ModuleTarget.MAIN, global_configuration)]
            assert again == first

    def test_path_modules_get_no_globals(self, util, global_configuration):
        legacy = Module.at_path("Legacy", "Vendor/Legacy")
        node = ModuleNode(legacy)
        assert node.dependencies_for(ModuleTarget.MAIN, global_configuration) == []

    def test_target_without_edges(self, client, configuration):
        assert ModuleNode(client).dependencies_for(ModuleTarget.INTERFACE, configuration) == []


class TestDependentModules:
    def test_first_seen_order_unique(self, util, client, screen, configuration):
        node = ModuleNode(
            screen,
            {
                ModuleTarget.MAIN: [ModuleDependency(client, ModuleTarget.INTERFACE), util],
                ModuleTarget.VIEWS: [client],
            },
        )
        assert [m.name for m in node.dependent_modules(configuration)] == [
            "Screen",
            "Client",
            "Util",
        ]

    def test_external_modules_exclude_self(self, util, client, screen, configuration):
        node = ModuleNode(screen, [ModuleDependency(client, ModuleTarget.INTERFACE), util])
        assert [m.name for m in node.external_modules(configuration)] == ["Client", "Util"]

    def test_is_internal(self, client, screen):
        node = ModuleNode(screen)
        assert node.is_internal(ModuleDependency(screen, ModuleTarget.VIEWS))
        assert not node.is_internal(ModuleDependency(client))


class TestDependsOn:
    def test_explicit_edge(self, util, client):
        assert ModuleNode(client, [util]).depends_on(util)

    def test_matches_by_name(self, client):
        node = ModuleNode(client, [Module.of_type("Util", ModuleType.UTILITY)])
        assert node.depends_on(Module.at_path("Util", "Elsewhere"))

    def test_global_edge_needs_configuration(self, util, screen, global_configuration):
        node = ModuleNode(screen)
        assert not node.depends_on(util)
        assert node.depends_on(util, global_configuration)

    def test_defaults_do_not_count(self, client, configuration):
        assert not ModuleNode(client).depends_on(client, configuration)


class TestHashing:
    def test_nodes_are_hashable(self, util, client):
        node = ModuleNode(client, [util])
        assert {node: "client"}[node] == "client"
        assert len({node, ModuleNode(util)}) == 2

    def test_identity_equality(self, util):
        node = ModuleNode(util)
        assert node == node
        assert node != ModuleNode(util)
