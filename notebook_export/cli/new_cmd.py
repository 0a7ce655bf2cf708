"""New-note command for notebook-export CLI."""

from __future__ import annotations

import click

from ..services.notes import create_note
from ..storage import StorageError
from ._common import NotebookExportCliError, get_app


@click.command(name="new")
@click.argument("title")
@click.option("-b", "--body", default="", help="Note body text.")
@click.option("-n", "--notebook", default=None, help="Notebook to file the note in.")
@click.option(
    "-t",
    "--tag",
    "tags",
    multiple=True,
    help="Attach a tag (repeatable).",
)
@click.option(
    "--template",
    is_flag=True,
    help="Mark the note as a template (never exported).",
)
@click.pass_context
def new(
    ctx: click.Context,
    title: str,
    body: str,
    notebook: str | None,
    tags: tuple[str, ...],
    template: bool,
) -> None:
    """Add a note to the store."""

    app = get_app(ctx)
    try:
        note = create_note(
            app, title, body, notebook=notebook, tags=tags, template=template
        )
    except StorageError as exc:
        raise NotebookExportCliError(str(exc)) from exc

    click.echo(f"Created note {note.id}")


def register(cli: click.Group) -> None:
    """Register the command with the root CLI group."""

    cli.add_command(new)
