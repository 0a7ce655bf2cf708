"""System tag conventions and note classification."""

from __future__ import annotations

from typing import Iterable, Protocol

SYSTEM_TAG_PREFIX = "system:"
TEMPLATE_NOTE_SYSTEM_TAG = "template"
NOTEBOOK_TAG_PREFIX = SYSTEM_TAG_PREFIX + "notebook:"

TEMPLATE_TAG = SYSTEM_TAG_PREFIX + TEMPLATE_NOTE_SYSTEM_TAG


class Tagged(Protocol):
    """Anything exposing a sequence of tag names."""

    tags: tuple[str, ...]


def is_system_tag(tag: str) -> bool:
    return tag.startswith(SYSTEM_TAG_PREFIX)


def is_template(note: Tagged) -> bool:
    """Return ``True`` when ``note`` carries the template system tag.

    Any tag starting with ``system:template`` counts, which also covers the
    template option markers (e.g. ``system:template:save_title``).
    """

    return any(tag.startswith(TEMPLATE_TAG) for tag in note.tags)


def notebook_tag(name: str) -> str:
    """Return the system tag that places a note into notebook ``name``."""

    return NOTEBOOK_TAG_PREFIX + name.strip()


def user_tags(tags: Iterable[str]) -> tuple[str, ...]:
    """Return the tags meant for display, dropping system markers."""

    return tuple(tag for tag in tags if not is_system_tag(tag))


__all__ = [
    "NOTEBOOK_TAG_PREFIX",
    "SYSTEM_TAG_PREFIX",
    "TEMPLATE_NOTE_SYSTEM_TAG",
    "TEMPLATE_TAG",
    "Tagged",
    "is_system_tag",
    "is_template",
    "notebook_tag",
    "user_tags",
]
