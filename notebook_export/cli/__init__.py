"""notebook-export CLI package."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

import click

from . import config_cmd, delete_cmd, export_cmd, ls, new_cmd, notebooks_cmd
from ._common import CONTEXT_SETTINGS, NotebookExportCliError

__all__ = ["cli", "main", "NotebookExportCliError"]

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@click.group(context_settings=CONTEXT_SETTINGS)
@click.option(
    "-c",
    "--config",
    "config_path_opt",
    type=click.Path(path_type=Path),
    default=None,
    help="Path to configuration TOML file.",
)
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="Increase log output (-v for info, -vv for debug).",
)
@click.pass_context
def cli(ctx: click.Context, config_path_opt: Path | None, verbose: int) -> None:
    """Export notes to files, organised by notebook."""

    ctx.ensure_object(dict)
    invoked = ctx.invoked_subcommand

    if invoked is None:
        click.echo(ctx.command.get_help(ctx))
        ctx.exit(0)

    level = logging.WARNING
    if verbose == 1:
        level = logging.INFO
    elif verbose >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format=LOG_FORMAT)

    ctx.obj["config_path"] = config_path_opt


for register_command in (
    config_cmd.register,
    new_cmd.register,
    delete_cmd.register,
    ls.register,
    notebooks_cmd.register,
    export_cmd.register,
):
    register_command(cli)


def main(argv: Sequence[str] | None = None) -> int:
    args = list(argv) if argv is not None else None
    try:
        return cli.main(args=args, prog_name="nbexport", standalone_mode=False) or 0
    except click.ClickException as exc:
        click.echo(str(exc), err=True)
        return 1
    except SystemExit as exc:
        return int(exc.code or 0)
