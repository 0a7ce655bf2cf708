"""Pluggy markers and constants for the notebook-export plugin namespace."""

from __future__ import annotations

import pluggy

PLUGIN_NAMESPACE = "notebook_export"
ENTRY_POINT_GROUP = "notebook_export.plugins"

hookspec = pluggy.HookspecMarker(PLUGIN_NAMESPACE)
hookimpl = pluggy.HookimplMarker(PLUGIN_NAMESPACE)

__all__ = ["PLUGIN_NAMESPACE", "ENTRY_POINT_GROUP", "hookspec", "hookimpl"]
