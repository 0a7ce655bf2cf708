"""Export command for notebook-export CLI."""

from __future__ import annotations

from pathlib import Path

import click

from ..exporters import ExportError, ExportFailure
from ..notebooks import ALL_NOTES, UNFILED_NOTES
from ..services.export import (
    ExportOrchestrator,
    default_destination,
    default_folder_name,
    get_export_format_descriptions,
    remember_destination,
    resolve_exporter,
)
from ._common import NotebookExportCliError, get_app


@click.command(name="export")
@click.option(
    "-l",
    "--list-formats",
    "list_formats",
    is_flag=True,
    help="List available export formats and exit.",
)
@click.option(
    "-f",
    "--format",
    "export_format",
    type=str,
    required=False,
    metavar="FORMAT",
    help="Export format identifier (defaults to the configured format).",
)
@click.option(
    "-d",
    "--dest",
    "destination",
    type=click.Path(path_type=Path, file_okay=False),
    required=False,
    help="Destination directory for the export.",
)
@click.option(
    "-n",
    "--notebook",
    "notebook_name",
    default=None,
    help="Export only this notebook.",
)
@click.option(
    "--unfiled",
    is_flag=True,
    help="Export only notes that are not in any notebook.",
)
@click.pass_context
def export(
    ctx: click.Context,
    list_formats: bool,
    export_format: str | None,
    destination: Path | None,
    notebook_name: str | None,
    unfiled: bool,
) -> None:
    """Export all notes, one notebook, or the unfiled notes."""

    app = get_app(ctx)

    if list_formats:
        try:
            descriptions = get_export_format_descriptions(app.config)
        except ExportError as exc:
            raise NotebookExportCliError(str(exc)) from exc

        if not descriptions:
            click.echo("No export formats are available.")
        else:
            click.echo("Available export formats:\n")
            for fmt, desc in descriptions:
                if desc:
                    click.echo(f"  - {fmt}: {desc}")
                else:
                    click.echo(f"  - {fmt}")
        ctx.exit(0)

    if notebook_name is not None and unfiled:
        raise NotebookExportCliError("Use either '--notebook' or '--unfiled', not both.")

    if unfiled:
        notebook = UNFILED_NOTES
    elif notebook_name is not None:
        notebook = app.resolver.find_notebook(notebook_name)
        if notebook is None:
            raise NotebookExportCliError(f"Unknown notebook: {notebook_name}")
    else:
        notebook = ALL_NOTES

    try:
        exporter = resolve_exporter(app.config, export_format)
    except ExportError as exc:
        raise NotebookExportCliError(str(exc)) from exc

    if destination is None:
        destination = default_destination(
            app.storage, default_folder_name(notebook, exporter)
        )
    destination = destination.expanduser()

    if destination.exists() and destination.is_file():
        raise NotebookExportCliError("Destination must be a directory path.")

    orchestrator = ExportOrchestrator(app.storage, exporter, resolver=app.resolver)
    try:
        summary = orchestrator.export_notebook(notebook, destination)
    except ExportFailure as exc:
        raise NotebookExportCliError(str(exc)) from exc

    remember_destination(app.storage, summary.output_folder)
    click.echo(f'Your notes were exported to "{summary.output_folder}".')
    click.echo(
        f"Exported {summary.notes_exported} notes "
        f"from {summary.notebooks_processed} notebooks."
    )


def register(cli: click.Group) -> None:
    """Register the command with the root CLI group."""

    cli.add_command(export)
