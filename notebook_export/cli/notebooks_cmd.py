"""Notebooks command for notebook-export CLI."""

from __future__ import annotations

import click

from ..tags import is_template
from ._common import get_app


@click.command(name="notebooks")
@click.pass_context
def notebooks(ctx: click.Context) -> None:
    """List notebooks with the number of exportable notes in each."""

    app = get_app(ctx)
    resolver = app.resolver

    for notebook in resolver.notebooks():
        count = sum(
            1 for note in resolver.notes_in_notebook(notebook) if not is_template(note)
        )
        click.echo(f"{notebook.name}  ({count})")

    unfiled = [note for note in resolver.list_unfiled_notes() if not is_template(note)]
    click.echo(f"Unfiled Notes  ({len(unfiled)})")


def register(cli: click.Group) -> None:
    """Register the command with the root CLI group."""

    cli.add_command(notebooks)
