"""List command for notebook-export CLI."""

from __future__ import annotations

import click

from ..notebooks import is_all_notes, is_unfiled_notes
from ..tags import is_template, user_tags
from ..utils.datetime_fmt import to_user_friendly_utc
from ._common import NotebookExportCliError, get_app


@click.command(name="ls")
@click.option("-n", "--notebook", default=None, help="Only list notes of a notebook.")
@click.pass_context
def ls(ctx: click.Context, notebook: str | None) -> None:
    """List notes with their notebook."""

    app = get_app(ctx)
    resolver = app.resolver

    if notebook is None:
        notes = app.storage.all_notes()
    else:
        selected = resolver.find_notebook(notebook)
        if selected is None:
            raise NotebookExportCliError(f"Unknown notebook: {notebook}")
        if is_all_notes(selected):
            notes = app.storage.all_notes()
        elif is_unfiled_notes(selected):
            notes = resolver.list_unfiled_notes()
        else:
            notes = resolver.notes_in_notebook(selected)

    for note in notes:
        updated = to_user_friendly_utc(note.updated_at)
        owner = resolver.notebook_for_note(note)
        notebook_display = owner.name if owner is not None else "-"
        marker = " (template)" if is_template(note) else ""
        tag_list = user_tags(note.tags)
        tag_suffix = f"  [tags: {', '.join(tag_list)}]" if tag_list else ""
        click.echo(
            f"{note.id:>4}  {updated}  {notebook_display:<16}  "
            f"{note.title}{marker}{tag_suffix}"
        )


def register(cli: click.Group) -> None:
    """Register the command with the root CLI group."""

    cli.add_command(ls)
