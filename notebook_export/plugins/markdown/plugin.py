"""Pluggy integration for the built-in Markdown exporter."""

from __future__ import annotations

from notebook_export.config import NotebookExportConfig
from notebook_export.plugins import ExportContribution, hookimpl

from .exporter import MarkdownExporter

PLUGIN_ID = "notebook-export-markdown"


@hookimpl
def export_formats(config: NotebookExportConfig) -> tuple[ExportContribution, ...]:
    """Expose the built-in Markdown exporter as a plugin contribution."""

    settings = config.plugins.get(PLUGIN_ID, {})
    exporter = MarkdownExporter(front_matter=bool(settings.get("front_matter", True)))

    contribution = ExportContribution(
        format_id=exporter.format_id,
        exporter=exporter,
        description="Markdown files with YAML front matter",
    )
    return (contribution,)


__all__ = ["PLUGIN_ID", "export_formats"]
