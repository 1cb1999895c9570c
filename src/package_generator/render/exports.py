"""Re-export file rendering."""

from ..models import ModuleNode


def exports_file_name(node: ModuleNode) -> str:
    return f"{node.module.name}+Exports.swift"


def render_exports(node: ModuleNode) -> str:
    """Source file re-exporting every module in ``node.exports``."""
    statements = "\n".join(f"@_exported import {export.name}" for export in node.exports)
    return (
        "//\n"
        f"//  {exports_file_name(node)}\n"
        "//\n"
        "//  Generated file, do not edit by hand\n"
        "//\n"
        "\n"
        f"{statements}\n"
    )
