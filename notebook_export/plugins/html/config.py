"""Configuration helpers for the built-in HTML exporter plugin."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from notebook_export.config import DEFAULT_CONFIG_DIR

if TYPE_CHECKING:
    from notebook_export.config import NotebookExportConfig

PLUGIN_ID = "notebook-export-html"
DEFAULT_SITE_TITLE = ""


@dataclass(frozen=True)
class HtmlPluginConfig:
    """Resolved configuration data for the HTML exporter plugin."""

    site_title: str = DEFAULT_SITE_TITLE
    templates_dir: Path | None = None


def resolve_plugin_config(config: "NotebookExportConfig") -> HtmlPluginConfig:
    """Convert configuration data into plugin configuration.

    ``templates_dir`` may point to a folder holding a custom ``note.html``;
    relative paths are resolved against the configuration directory.
    """

    config_dir = (
        config.source_path.parent
        if config.source_path is not None
        else DEFAULT_CONFIG_DIR
    )

    raw_settings = config.plugins.get(PLUGIN_ID, {})

    site_title = str(raw_settings.get("site_title", DEFAULT_SITE_TITLE)).strip()

    templates_raw = raw_settings.get("templates_dir")
    templates_dir: Path | None = None
    if templates_raw is not None:
        root_path = Path(str(templates_raw)).expanduser()
        if not root_path.is_absolute():
            root_path = (config_dir / root_path).resolve()
        templates_dir = root_path

    return HtmlPluginConfig(site_title=site_title, templates_dir=templates_dir)


__all__ = [
    "DEFAULT_SITE_TITLE",
    "PLUGIN_ID",
    "HtmlPluginConfig",
    "resolve_plugin_config",
]
