"""Hook specifications for notebook-export plugins."""

from __future__ import annotations

from collections.abc import Iterable

from notebook_export.config import NotebookExportConfig

from ._markers import hookspec
from .types import ExportContribution


class NotebookExportHookSpec:
    """Collection of pluggy hook specifications."""

    @hookspec
    def export_formats(
        self, config: NotebookExportConfig
    ) -> Iterable[ExportContribution]:
        """Return single-note exporters (one per format) provided by the plugin."""
