"""Pluggy integration for the built-in HTML exporter."""

from __future__ import annotations

from notebook_export.config import NotebookExportConfig
from notebook_export.plugins import ExportContribution, hookimpl

from .config import PLUGIN_ID, resolve_plugin_config
from .exporter import HtmlExporter


@hookimpl
def export_formats(config: NotebookExportConfig) -> tuple[ExportContribution, ...]:
    """Expose the built-in HTML exporter as a plugin contribution."""

    plugin_config = resolve_plugin_config(config)
    exporter = HtmlExporter(
        plugin_config.templates_dir,
        site_title=plugin_config.site_title,
    )

    contribution = ExportContribution(
        format_id=exporter.format_id,
        exporter=exporter,
        description="One standalone HTML page per note",
    )
    return (contribution,)


__all__ = ["PLUGIN_ID", "export_formats"]
