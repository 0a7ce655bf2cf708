"""Config command for notebook-export CLI."""

from __future__ import annotations

from pathlib import Path

import click

from .. import config as config_module
from ..config import bootstrap_config_file
from ._common import NotebookExportCliError


@click.command(name="config")
@click.option(
    "--no-edit",
    is_flag=True,
    help="Only create the configuration file, do not open an editor.",
)
@click.pass_context
def config(ctx: click.Context, no_edit: bool) -> None:
    """Create and open the configuration file in the editor."""

    selected_path: Path | None = ctx.obj.get("config_path")
    config_path = selected_path or config_module.DEFAULT_CONFIG_PATH

    created = bootstrap_config_file(config_path)
    if created:
        click.echo(f"Created configuration at {config_path}")

    if no_edit:
        return

    try:
        result = click.edit(filename=str(config_path))
    except click.ClickException as exc:  # pragma: no cover - editor launch failure rare
        raise NotebookExportCliError(f"Failed to launch editor: {exc}") from exc

    if result is None:
        click.echo(f"Opened configuration at {config_path}")
    else:  # pragma: no cover - depends on click behaviour
        click.echo(f"Updated configuration at {config_path}")


def register(cli: click.Group) -> None:
    """Register the command with the root CLI group."""

    cli.add_command(config)
