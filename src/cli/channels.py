"""
Channel Rename Commands

export, apply and edit: the scriptable and interactive ways of renaming
channels in bulk.

Copyright (c) 2025 Steve Angelovich
Licensed under the MIT License - see LICENSE file for details.
"""

import asyncio
import logging

import click

import bulk_edit
from cli.options import (
    apply_options,
    build_settings,
    client_factory,
    connection_options,
    editor_option,
    filter_options,
    pop_filter,
)
from errors import EdischError


logger = logging.getLogger(__name__)


def _fail(ctx: click.Context, action: str, e: EdischError) -> None:
    logger.error(f"Error {action}: {e}")
    click.secho(f"\n✗ Error {action}: {e}\n", fg="red", err=True)
    ctx.exit(1)


@click.command("export")
@connection_options
@filter_options
@click.option(
    "-o", "--output", type=click.File("w", encoding="utf-8"), default="-",
    help="File to export to (default: stdout)",
)
@click.option("--comments/--no-comments", default=True, help="Include the header and category headings")
@click.pass_context
def export(ctx, token, guild_id, output, comments, **kinds):
    """
    Export channel names to a file or stdout

    \b
    Examples:
      edisch export --all -o channels.txt
      edisch export --text | sed 's/ -> team-/ -> squad-/' | edisch apply --text --yes
    """
    exit_code = 0
    try:
        settings = build_settings(ctx, token, guild_id, pop_filter(kinds))
        exit_code = asyncio.run(bulk_edit.export_to(settings, output, client_factory(ctx), comments=comments))
    except EdischError as e:
        _fail(ctx, "exporting channels", e)
    ctx.exit(exit_code)


@click.command("apply")
@connection_options
@filter_options
@apply_options
@click.option(
    "-i", "--input", "input_file", type=click.File("r", encoding="utf-8"), default="-",
    help="File to apply from (default: stdin)",
)
@click.pass_context
def apply(ctx, token, guild_id, yes, workers, input_file, **kinds):
    """
    Apply channel names from a file or stdin

    Use the same channel type flags as the export the list came from;
    IDs outside the selected types are rejected as unknown.
    """
    exit_code = 0
    try:
        settings = build_settings(ctx, token, guild_id, pop_filter(kinds), yes=yes, workers=workers)
        text = input_file.read()
        logger.info(f"Read {len(text)} characters from {input_file.name}")
        exit_code = asyncio.run(bulk_edit.apply_from(settings, bulk_edit.text_source(text), client_factory(ctx)))
    except EdischError as e:
        _fail(ctx, "applying channel names", e)
    ctx.exit(exit_code)


@click.command("edit")
@connection_options
@filter_options
@apply_options
@editor_option
@click.pass_context
def edit(ctx, token, guild_id, yes, workers, editor, **kinds):
    """
    Edit channel names in your $EDITOR (default command)

    Saving and closing the editor shows the pending renames for
    confirmation; an editor exiting with an error aborts without changes.
    """
    exit_code = 0
    try:
        settings = build_settings(ctx, token, guild_id, pop_filter(kinds), yes=yes, editor=editor, workers=workers)
        source = bulk_edit.editor_source(settings.editor)
        exit_code = asyncio.run(bulk_edit.apply_from(settings, source, client_factory(ctx)))
    except EdischError as e:
        _fail(ctx, "editing channel names", e)
    ctx.exit(exit_code)
