"""Graphviz DOT rendering of a module graph.

Usage:
    renderer = GraphRenderer(graph, configuration)
    Path("graph.dot").write_text(renderer.render_dot())

then ``dot -Tsvg graph.dot -o graph.svg``.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Sequence

import pydot

from ..config import PackageConfiguration
from ..models import Module, ModuleNode, ModuleTarget, ModuleType, TargetKind

GRAPH_NAME = "ModuleDependencies"

CLUSTER_ORDER: tuple[ModuleType, ...] = (
    ModuleType.UTILITY,
    ModuleType.CLIENT,
    ModuleType.SCREEN,
    ModuleType.COORDINATOR,
    ModuleType.MACRO,
    ModuleType.ROOT,
)

# (cluster background, node fill)
_COLORS = {
    ModuleType.CLIENT: ("#e8f4f8", "#cce7f0"),
    ModuleType.COORDINATOR: ("#f8e8f4", "#f0cce7"),
    ModuleType.MACRO: ("#f4f8e8", "#e7f0cc"),
    ModuleType.SCREEN: ("#f8f4e8", "#f0e7cc"),
    ModuleType.UTILITY: ("#e8e8f8", "#ccccf0"),
    ModuleType.ROOT: ("#f0f0f0", "#e0e0e0"),
}
_DEFAULT_FILL = "#dddddd"
_MODULE_BORDER = "#666666"

_TARGET_LABELS = {
    TargetKind.MAIN: "main",
    TargetKind.INTERFACE: "Interface",
    TargetKind.VIEWS: "Views",
    TargetKind.MACRO_IMPLEMENTATION: "Implementation",
}


def node_id(module_name: str, target: ModuleTarget) -> str:
    if target.kind is TargetKind.MACRO_IMPLEMENTATION:
        suffix = "impl"
    else:
        suffix = target.key
    return f"{module_name}_{suffix}"


def target_label(target: ModuleTarget) -> str:
    return _TARGET_LABELS.get(target.kind, target.key)


def node_fill(module: Module) -> str:
    if module.module_type is None:
        return _DEFAULT_FILL
    return _COLORS[module.module_type][1]


def cluster_name(module_type: ModuleType) -> str:
    """Name pydot gives the type cluster (``cluster_`` prefix included)."""
    return f"cluster_{module_type.label.lower()}"


class GraphRenderer:
    """Renders a module graph as DOT, clustered by module type.

    Modules with explicit path locations are drawn with the utilities.
    ``build_*`` return the ``pydot.Dot`` itself; ``render_*`` its DOT text.
    """

    def __init__(self, graph: Sequence[ModuleNode], configuration: PackageConfiguration):
        self.graph = list(graph)
        self.configuration = configuration

    def _grouped(self) -> dict[ModuleType, list[ModuleNode]]:
        grouped: dict[ModuleType, list[ModuleNode]] = defaultdict(list)
        for node in self.graph:
            grouped[node.module.module_type or ModuleType.UTILITY].append(node)
        return grouped

    @staticmethod
    def _new_graph(with_edge_style: bool) -> pydot.Dot:
        dot_graph = pydot.Dot(
            GRAPH_NAME,
            graph_type="digraph",
            rankdir="TB",
            ranksep="1.0",
            nodesep="0.8",
            pad="0.5",
        )
        dot_graph.set_node_defaults(shape="box", style="filled", fontname="Helvetica")
        if with_edge_style:
            dot_graph.set_edge_defaults(fontname="Helvetica", fontsize="10")
        return dot_graph

    def _type_clusters(self):
        """(cluster, nodes sorted by module name) per non-empty module type, in draw order."""
        grouped = self._grouped()
        for module_type in CLUSTER_ORDER:
            nodes = grouped.get(module_type)
            if not nodes:
                continue
            cluster = pydot.Cluster(
                module_type.label.lower(),
                label=module_type.label,
                style="filled",
                color=_COLORS[module_type][0],
            )
            yield cluster, sorted(nodes, key=lambda n: n.module.name)

    # ── Target level ─────────────────────────────────────────────────

    def build_dot(self) -> pydot.Dot:
        """Full graph with one vertex per module target."""
        dot_graph = self._new_graph(with_edge_style=True)

        for cluster, nodes in self._type_clusters():
            for node in nodes:
                cluster.add_subgraph(self._module_cluster(node.module))
            dot_graph.add_subgraph(cluster)

        for node in self.graph:
            for target in node.module.targets:
                source = node_id(node.module.name, target)
                for dependency in node.dependencies_for(target, self.configuration):
                    destination = node_id(dependency.module_name, dependency.resolved_target)
                    style = "dashed" if node.is_internal(dependency) else "solid"
                    dot_graph.add_edge(pydot.Edge(source, destination, style=style))
        return dot_graph

    def render_dot(self) -> str:
        return self.build_dot().to_string()

    @staticmethod
    def _module_cluster(module: Module) -> pydot.Cluster:
        cluster = pydot.Cluster(module.name, label=module.name, style="rounded", color=_MODULE_BORDER)
        fill = node_fill(module)
        for target in module.targets:
            cluster.add_node(
                pydot.Node(node_id(module.name, target), label=target_label(target), fillcolor=fill)
            )
        return cluster

    # ── Module level ─────────────────────────────────────────────────

    def build_module_level_dot(self) -> pydot.Dot:
        """Simplified graph with one vertex per module and no internal edges."""
        dot_graph = self._new_graph(with_edge_style=False)

        for cluster, nodes in self._type_clusters():
            for node in nodes:
                module = node.module
                cluster.add_node(pydot.Node(module.name, label=module.name, fillcolor=node_fill(module)))
            dot_graph.add_subgraph(cluster)

        for node in self.graph:
            for module in node.external_modules(self.configuration):
                dot_graph.add_edge(pydot.Edge(node.module.name, module.name))
        return dot_graph

    def render_module_level_dot(self) -> str:
        return self.build_module_level_dot().to_string()
