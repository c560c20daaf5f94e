"""
Guild Channels

Reads a guild's channel list from the Discord REST API and renames channels.
Only REST calls are made (login, fetch guild, fetch channels, edit channel);
no gateway connection is opened.

Copyright (c) 2025 Steve Angelovich
Licensed under the MIT License - see LICENSE file for details.
"""

# Standard library imports
import logging
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from typing import Any

# Third-party imports
import aiohttp
import discord

# Local application imports
import constants as const
from channel import Channel, sort_channels
from config import ChannelFilter, Settings
from errors import DiscordApiError


# Get a logger instance
logger = logging.getLogger(__name__)


def _describe_http_error(e: Exception) -> str:
    if isinstance(e, discord.HTTPException):
        detail = e.text or e.response.reason
        return f"{e.status} {detail}".strip()
    return str(e) or type(e).__name__


class GuildChannels:
    """Channel list of one guild, backed by a logged-in discord.Client"""

    def __init__(self, client: Any, guild_id: int) -> None:
        self.client = client
        self.guild_id = guild_id
        # discord channel objects from the last fetch, by ID
        self._fetched: dict[int, Any] = {}

    async def fetch(self, channel_filter: ChannelFilter) -> list[Channel]:
        """
        Fetch the guild's channels of the selected kinds, in display order.

        Args:
            channel_filter: Channel kinds to keep

        Returns:
            Sorted list of Channel

        Raises:
            DiscordApiError: Guild missing, no access, or any HTTP/network failure
        """
        logger.info(f"Fetching channels of guild {self.guild_id} (kinds: {channel_filter.describe()})")
        try:
            guild = await self.client.fetch_guild(self.guild_id)
            discord_channels = await guild.fetch_channels()
        except discord.NotFound as e:
            raise DiscordApiError(f"Guild {self.guild_id} not found (is the bot a member?)") from e
        except discord.Forbidden as e:
            raise DiscordApiError(f"Bot has no access to guild {self.guild_id}: {_describe_http_error(e)}") from e
        except (discord.HTTPException, aiohttp.ClientError) as e:
            raise DiscordApiError(f"Failed to fetch channels of guild {self.guild_id}: {_describe_http_error(e)}") from e

        by_id = {dc.id: dc for dc in discord_channels}
        channels = []
        self._fetched = {}
        for dc in discord_channels:
            parent_id = getattr(dc, "category_id", None)
            parent = by_id.get(parent_id) if parent_id is not None else None
            channel = Channel.from_discord_channel(dc, parent)
            if channel is None:
                logger.debug(f"Skipping channel {dc.id} of unsupported type {dc.type}")
                continue
            if not channel_filter.matches(channel.kind):
                continue
            channels.append(channel)
            self._fetched[channel.channel_id] = dc

        logger.info(f"Fetched {len(discord_channels)} channels, {len(channels)} selected")
        return sort_channels(channels)

    async def rename(self, channel_id: int, name: str) -> None:
        """
        Rename one previously fetched channel.

        Raises:
            DiscordApiError: Channel was not part of the last fetch, or Discord rejected the edit
        """
        target = self._fetched.get(channel_id)
        if target is None:
            raise DiscordApiError(f"Channel {channel_id} was not part of the fetched channel list")

        logger.debug(f"PATCH channel {channel_id} name={name!r}")
        try:
            await target.edit(name=name, reason=const.AUDIT_LOG_REASON)
        except (discord.HTTPException, aiohttp.ClientError) as e:
            raise DiscordApiError(_describe_http_error(e)) from e


@asynccontextmanager
async def open_guild(settings: Settings, client_factory: Callable[..., Any] = discord.Client) -> AsyncIterator[GuildChannels]:
    """
    Log in with the bot token and yield the configured guild's channels.

    The discord.Client HTTP session is closed on every exit path.

    Args:
        settings: Run settings (token and guild ID)
        client_factory: discord.Client or a compatible stand-in

    Raises:
        DiscordApiError: Token rejected or Discord unreachable
    """
    async with client_factory(intents=discord.Intents.none()) as client:
        try:
            await client.login(settings.token)
        except discord.LoginFailure as e:
            raise DiscordApiError("Discord rejected the bot token") from e
        except (discord.HTTPException, aiohttp.ClientError) as e:
            raise DiscordApiError(f"Could not log in to Discord: {_describe_http_error(e)}") from e
        logger.info("Logged in to Discord")
        yield GuildChannels(client, settings.guild_id)
