"""
Shared CLI options

Option decorators used by the root command and the export/apply/edit
commands, and the code that turns their values into Settings.

Copyright (c) 2025 Steve Angelovich
Licensed under the MIT License - see LICENSE file for details.
"""

import logging
from collections.abc import Callable
from typing import Any

import click
import discord

import constants as const
from channel import ChannelKind
from config import ChannelFilter, Settings


logger = logging.getLogger(__name__)

KIND_HELP = {
    ChannelKind.TEXT: "Edit text channels",
    ChannelKind.VOICE: "Edit voice channels",
    ChannelKind.FORUM: "Edit forum channels",
    ChannelKind.STAGE: "Edit stage channels",
    ChannelKind.NEWS: "Edit news (announcement) channels",
    ChannelKind.CATEGORY: "Edit categories",
}


def connection_options(f: Callable) -> Callable:
    """--token / --guild-id, falling back to $DISCORD_TOKEN / $GUILD_ID"""
    f = click.option(
        "-g", "--guild-id", type=int, envvar=const.GUILD_ID_ENV, show_envvar=True,
        help="Guild (server) ID",
    )(f)
    f = click.option(
        "-t", "--token", envvar=const.TOKEN_ENV, show_envvar=True,
        help="Bot token",
    )(f)
    return f


def filter_options(f: Callable) -> Callable:
    """One flag per channel kind plus --all"""
    f = click.option("--all", "all_kinds", is_flag=True, help="Edit channels of every type")(f)
    for kind in reversed(list(ChannelKind)):
        f = click.option(f"--{kind.value}", kind.value, is_flag=True, help=KIND_HELP[kind])(f)
    return f


def apply_options(f: Callable) -> Callable:
    """--yes / --workers"""
    f = click.option(
        "--workers", type=click.IntRange(1, const.MAX_WORKERS), default=None,
        help=f"Concurrent rename calls (default {const.DEFAULT_WORKERS})",
    )(f)
    f = click.option("-y", "--yes", is_flag=True, help="Automatically confirm all changes")(f)
    return f


def editor_option(f: Callable) -> Callable:
    return click.option(
        "--editor",
        help="Editor command (default: $VISUAL, then $EDITOR, then vi)",
    )(f)


def pop_filter(params: dict[str, Any]) -> ChannelFilter:
    """Remove the kind flags from a callback's keyword arguments and build the filter"""
    flags = {kind.value: bool(params.pop(kind.value, False)) for kind in ChannelKind}
    return ChannelFilter.from_flags(all_kinds=bool(params.pop("all_kinds", False)), **flags)


def root_options(ctx: click.Context) -> dict[str, Any]:
    """Option values given before the subcommand name (edisch --text export ...)"""
    return ctx.obj.get("root", {}) if ctx.obj else {}


def build_settings(
    ctx: click.Context,
    token: str | None,
    guild_id: int | None,
    channel_filter: ChannelFilter,
    yes: bool = False,
    editor: str | None = None,
    workers: int | None = None,
) -> Settings:
    """
    Merge subcommand options with root options and validate them.

    Raises:
        ConfigError: See Settings.from_options
    """
    root = root_options(ctx)
    root_filter = root.get("channel_filter")
    if root_filter is not None:
        channel_filter = channel_filter.union(root_filter)
    return Settings.from_options(
        token=token or root.get("token"),
        guild_id=guild_id or root.get("guild_id"),
        channel_filter=channel_filter,
        editor=editor or root.get("editor"),
        assume_yes=yes or root.get("yes", False),
        workers=workers or root.get("workers") or const.DEFAULT_WORKERS,
    )


def client_factory(ctx: click.Context) -> Callable[..., Any]:
    """discord.Client, unless a stand-in was placed in the context object"""
    return ctx.obj.get("client_factory", discord.Client) if ctx.obj else discord.Client
