"""Type definitions for notebook-export plugin contracts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - type check only
    from ..exporters import SingleNoteExporter


@dataclass(slots=True, frozen=True)
class ExportContribution:
    """Descriptor describing an export format provided by a plugin."""

    format_id: str
    exporter: "SingleNoteExporter"
    description: str


__all__ = ["ExportContribution"]
