"""Notebook resolution on top of the tag catalog.

A notebook is not stored anywhere: it exists because notes carry a
``system:notebook:<name>`` tag. Everything here is recomputed from the note
store on every call.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Protocol

from .storage import NoteSnapshot
from .tags import NOTEBOOK_TAG_PREFIX

logger = logging.getLogger(__name__)

ALL_NOTES_NAME = "___NotebookManager___AllNotes__Notebook___"
UNFILED_NOTES_NAME = "___NotebookManager___UnfiledNotes__Notebook___"


class NoteStore(Protocol):
    """Read-only note source consumed by the export pipeline."""

    def all_notes(self) -> list[NoteSnapshot]:  # pragma: no cover - Protocol
        ...

    def all_tags(self) -> list[str]:  # pragma: no cover - Protocol
        ...


def normalize_name(name: str) -> str:
    """Strip ``name`` and collapse runs of whitespace into single spaces."""

    return " ".join(name.split())


def notebook_key(name: str) -> str:
    """Identity of a notebook name: normalized and case-folded."""

    return normalize_name(name).casefold()


@dataclass(slots=True, frozen=True, eq=False)
class Notebook:
    """A user notebook defined by its system tag.

    Two notebooks are the same notebook when their names agree after
    :func:`notebook_key`, so ``Road Trip``, ``Road  Trip`` and ``road trip``
    tags all file notes into one notebook. ``tag`` is the tag the notebook
    was first seen with.
    """

    name: str
    tag: str

    @property
    def normalized_name(self) -> str:
        return normalize_name(self.name)

    @property
    def key(self) -> str:
        return notebook_key(self.name)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Notebook):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)


@dataclass(slots=True, frozen=True)
class SpecialNotebook:
    """Pseudo-notebook standing for "all notes" or "unfiled notes"."""

    name: str
    normalized_name: str


ALL_NOTES = SpecialNotebook(name="All Notes", normalized_name=ALL_NOTES_NAME)
UNFILED_NOTES = SpecialNotebook(name="Unfiled Notes", normalized_name=UNFILED_NOTES_NAME)

RESERVED_NAMES = frozenset({ALL_NOTES_NAME, UNFILED_NOTES_NAME})

AnyNotebook = Notebook | SpecialNotebook


def is_all_notes(notebook: AnyNotebook) -> bool:
    return notebook.normalized_name == ALL_NOTES_NAME


def is_unfiled_notes(notebook: AnyNotebook) -> bool:
    return notebook.normalized_name == UNFILED_NOTES_NAME


class NotebookResolver:
    """Map tags and notes to notebooks for a given note store.

    A note belongs to at most one notebook: when it carries several notebook
    tags, the first one in its tag order is used and the others are ignored.
    """

    def __init__(self, store: NoteStore) -> None:
        self.store = store

    def notebook_for_tag(self, tag: str) -> Notebook | None:
        if not tag.startswith(NOTEBOOK_TAG_PREFIX):
            return None
        name = tag[len(NOTEBOOK_TAG_PREFIX) :]
        if not normalize_name(name) or normalize_name(name) in RESERVED_NAMES:
            return None
        return Notebook(name=name, tag=tag)

    def notebook_for_note(self, note: NoteSnapshot) -> Notebook | None:
        for tag in note.tags:
            notebook = self.notebook_for_tag(tag)
            if notebook is not None:
                return notebook
        return None

    def notebooks(self) -> list[Notebook]:
        """Return every notebook found in the tag catalog, in catalog order.

        Tags naming the same notebook collapse into the first one seen.
        """

        found: list[Notebook] = []
        seen: set[str] = set()
        for tag in self.store.all_tags():
            notebook = self.notebook_for_tag(tag)
            if notebook is None or notebook.key in seen:
                continue
            seen.add(notebook.key)
            found.append(notebook)
        return found

    def list_unfiled_notes(
        self, notes: Iterable[NoteSnapshot] | None = None
    ) -> list[NoteSnapshot]:
        """Return the notes without a notebook, preserving store order."""

        source = self.store.all_notes() if notes is None else notes
        return [note for note in source if self.notebook_for_note(note) is None]

    def notes_in_notebook(self, notebook: Notebook) -> list[NoteSnapshot]:
        notes = []
        for note in self.store.all_notes():
            owner = self.notebook_for_note(note)
            if owner is not None and owner.key == notebook.key:
                notes.append(note)
        return notes

    def find_notebook(self, name: str) -> AnyNotebook | None:
        """Look up a notebook by display name, or a pseudo-notebook by name.

        Matching uses :func:`notebook_key`, the same rule that decides which
        notes belong to a notebook.
        """

        key = notebook_key(name)
        for special in (ALL_NOTES, UNFILED_NOTES):
            aliases = (notebook_key(special.normalized_name), notebook_key(special.name))
            if key in aliases:
                return special

        for notebook in self.notebooks():
            if notebook.key == key:
                return notebook
        logger.debug("No notebook named %r", name)
        return None


__all__ = [
    "ALL_NOTES",
    "ALL_NOTES_NAME",
    "AnyNotebook",
    "NoteStore",
    "Notebook",
    "NotebookResolver",
    "RESERVED_NAMES",
    "SpecialNotebook",
    "UNFILED_NOTES",
    "UNFILED_NOTES_NAME",
    "is_all_notes",
    "is_unfiled_notes",
    "normalize_name",
    "notebook_key",
]
