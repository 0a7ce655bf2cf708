"""Built-in HTML exporter plugin for notebook-export."""

from __future__ import annotations

from .config import (
    DEFAULT_SITE_TITLE,
    PLUGIN_ID,
    HtmlPluginConfig,
    resolve_plugin_config,
)
from .exporter import HtmlExporter
from .plugin import export_formats

__all__ = [
    "DEFAULT_SITE_TITLE",
    "HtmlExporter",
    "HtmlPluginConfig",
    "PLUGIN_ID",
    "export_formats",
    "resolve_plugin_config",
]
