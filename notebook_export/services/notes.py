"""High-level note workflows used by the CLI."""

from __future__ import annotations

from typing import Iterable

from ..app import AppContext
from ..storage import NoteSnapshot, StorageError
from ..tags import TEMPLATE_TAG, is_system_tag, notebook_tag


def create_note(
    ctx: AppContext,
    title: str,
    body: str = "",
    *,
    notebook: str | None = None,
    tags: Iterable[str] | None = None,
    template: bool = False,
) -> NoteSnapshot:
    """Create a note, filing it into ``notebook`` and marking templates.

    User tags may not use the ``system:`` prefix; notebook and template
    membership go through the dedicated arguments instead.
    """

    all_tags: list[str] = []
    for tag in tags or ():
        if is_system_tag(tag.strip()):
            raise StorageError(f"Tag '{tag}' uses the reserved 'system:' prefix.")
        all_tags.append(tag)

    if notebook is not None:
        if not notebook.strip():
            raise StorageError("Notebook name cannot be empty.")
        all_tags.append(notebook_tag(notebook))
    if template:
        all_tags.append(TEMPLATE_TAG)

    return ctx.storage.create_note(title=title, body=body, tags=all_tags)


def delete_note(ctx: AppContext, note_id: int) -> tuple[NoteSnapshot, int]:
    """Remove a note and return it with the number of notes left."""

    note = ctx.storage.fetch_note(note_id)
    ctx.storage.delete_note(note.id)
    return note, ctx.storage.count_notes()
