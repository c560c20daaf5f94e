"""
Bulk Edit

The three flows behind the CLI:

- export: fetch channels and write the channel list
- apply: fetch channels, diff a channel list against them, confirm, rename
- edit: apply, with the channel list produced by the operator's editor

Each flow opens its own Discord session and closes it before returning.

Copyright (c) 2025 Steve Angelovich
Licensed under the MIT License - see LICENSE file for details.
"""

import asyncio
import logging
from collections.abc import Callable
from typing import IO, Any

import click
import discord

import util
from channel import Channel
from channel_text import compute_changes, export_channels
from config import Settings
from editor import edit_buffer
from guild_channels import open_guild
from renamer import ChannelRenamer, confirm_changes, report_results


logger = logging.getLogger(__name__)

# Produces the buffer to apply, given the freshly fetched channels
BufferSource = Callable[[list[Channel]], str]


async def export_to(
    settings: Settings,
    output: IO[str],
    client_factory: Callable[..., Any] = discord.Client,
    comments: bool = True,
) -> int:
    """
    Write the filtered channel list to output.

    Returns:
        Process exit code
    """
    async with open_guild(settings, client_factory) as guild:
        channels = await guild.fetch(settings.channel_filter)

    if not channels:
        click.secho("No channels found", fg="yellow", err=True)
        return 0

    output.write(export_channels(channels, comments=comments))
    output.flush()
    logger.info(f"Exported {util.plural(len(channels), 'channel')}")
    return 0


async def apply_from(settings: Settings, source: BufferSource, client_factory: Callable[..., Any] = discord.Client) -> int:
    """
    Fetch channels, diff the buffer from source against them and rename what changed.

    Nothing is renamed unless the whole buffer validates and the operator
    confirms (or settings.assume_yes is set).

    Returns:
        Process exit code: 0 on success, nothing to do or a rejected prompt; 1 if any rename failed

    Raises:
        ValidationError: Buffer has malformed, unknown or duplicate lines
        EditorError: Editor failed (edit flow)
        DiscordApiError: Login or fetch failed
    """
    async with open_guild(settings, client_factory) as guild:
        channels = await guild.fetch(settings.channel_filter)
        if not channels:
            click.secho("No channels found", fg="yellow", err=True)
            return 0

        # The editor blocks until it exits; keep it off the event loop
        buffer = await asyncio.to_thread(source, channels)
        changes = compute_changes(channels, buffer)
        if not changes:
            click.echo("No changes to apply", err=True)
            return 0

        if not settings.assume_yes and not confirm_changes(changes):
            click.echo("Aborted, no channels were renamed", err=True)
            logger.info(f"Operator rejected {util.plural(len(changes), 'rename')}")
            return 0

        renamer = ChannelRenamer(guild, worker_count=settings.workers)
        results = await renamer.apply(changes)

    return 0 if report_results(results) else 1


def text_source(text: str) -> BufferSource:
    """Buffer source for a channel list read from a file or stdin"""
    return lambda channels: text


def editor_source(editor: str | None) -> BufferSource:
    """Buffer source that exports the channels and lets the operator edit them"""
    def source(channels: list[Channel]) -> str:
        return edit_buffer(export_channels(channels), editor)
    return source
