"""Renderers: text produced from a validated graph."""

from .dot import GraphRenderer, node_id
from .exports import exports_file_name, render_exports
from .manifest import (
    group_by_type,
    render_dependency,
    render_package,
    render_products,
    render_root_package,
)
from .scaffold import (
    logger_category,
    render_dependencies_file,
    render_module_logger,
    render_namespace,
    render_navigation_files,
    render_placeholder_source,
    render_placeholder_test,
    render_root_placeholder,
)

__all__ = [
    "GraphRenderer",
    "exports_file_name",
    "group_by_type",
    "logger_category",
    "node_id",
    "render_dependencies_file",
    "render_dependency",
    "render_exports",
    "render_module_logger",
    "render_namespace",
    "render_navigation_files",
    "render_package",
    "render_placeholder_source",
    "render_placeholder_test",
    "render_products",
    "render_root_package",
    "render_root_placeholder",
]
