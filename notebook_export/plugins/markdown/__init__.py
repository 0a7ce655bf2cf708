"""Built-in Markdown exporter plugin for notebook-export."""

from __future__ import annotations

from .exporter import MarkdownExporter
from .plugin import PLUGIN_ID, export_formats

__all__ = [
    "MarkdownExporter",
    "PLUGIN_ID",
    "export_formats",
]
