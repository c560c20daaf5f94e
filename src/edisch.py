#!/usr/bin/env python3
"""
edisch CLI

Bulk-rename Discord channels with your $EDITOR.
Built with Click.

Copyright (c) 2025 Steve Angelovich
Licensed under the MIT License - see LICENSE file for details.

Usage:
    edisch --help
    edisch --text                      # edit text channel names in $EDITOR
    edisch export --all -o channels.txt
    edisch apply --all -i channels.txt --yes
    edisch completion bash
"""

import logging
import sys

import click

# Local application imports
import constants as const
import util

# Import commands
from cli.channels import apply, edit, export
from cli.completion import completion
from cli.options import apply_options, connection_options, editor_option, filter_options, pop_filter


logger = logging.getLogger(__name__)


@click.group(name=const.PROG_NAME, invoke_without_command=True)
@connection_options
@filter_options
@apply_options
@editor_option
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    envvar="LOG_LEVEL",
    default=const.DEFAULT_LOG_LEVEL,
    show_default=True,
    help="Console log level",
)
@click.option("--log-file", default=const.LOG_FILE, show_default=True, help="Log file")
@click.version_option(const.VERSION, prog_name=const.PROG_NAME)
@click.pass_context
def cli(ctx, token, guild_id, yes, workers, editor, log_level, log_file, **kinds):
    """
    Change Discord channel names in bulk with your $EDITOR

    Without a command, the selected channels open in your editor and the
    saved names are applied after confirmation (same as `edisch edit`).
    """
    ctx.ensure_object(dict)

    util.setup_logger(name=None, level=log_level, console=True, log_file=log_file)

    ctx.obj["root"] = {
        "token": token,
        "guild_id": guild_id,
        "channel_filter": pop_filter(kinds),
        "yes": yes,
        "workers": workers,
        "editor": editor,
    }
    logger.debug(f"edisch v{const.VERSION} starting, subcommand: {ctx.invoked_subcommand or 'edit'}")

    if ctx.invoked_subcommand is None:
        ctx.invoke(edit)


# Register commands
cli.add_command(edit)
cli.add_command(export)
cli.add_command(apply)
cli.add_command(completion)


@cli.command()
def version():
    """Show version information"""
    click.echo(f"{const.PROG_NAME} v{const.VERSION}")
    click.echo(f"Author: {const.AUTHOR}")


def main():
    try:
        cli()
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        click.secho(f"\n✗ Fatal error: {e}\n", fg="red", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
