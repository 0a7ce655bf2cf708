"""Datetime formatting utilities for consistent, user-friendly display."""

from __future__ import annotations

from datetime import datetime, timezone

# Fixed, universal format: "YYYY-MM-DD HH:MM UTC"
_DISPLAY_FORMAT = "%Y-%m-%d %H:%M UTC"


def to_user_friendly_utc(dt: datetime) -> str:
    """Format ``dt`` in UTC; naive values are taken to already be UTC."""

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).strftime(_DISPLAY_FORMAT)
