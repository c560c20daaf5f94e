"""
Channel model

A guild channel as seen by the bulk editor: identity, display name, kind and
enough layout information to list channels in the order Discord shows them.

Copyright (c) 2025 Steve Angelovich
Licensed under the MIT License - see LICENSE file for details.
"""

from enum import Enum
from typing import Any, NamedTuple

import discord

import constants as const


class ChannelKind(Enum):
    """Channel types that can be bulk renamed"""
    TEXT = "text"
    VOICE = "voice"
    FORUM = "forum"
    STAGE = "stage"
    NEWS = "news"
    CATEGORY = "category"

    @classmethod
    def from_discord(cls, channel_type: discord.ChannelType) -> "ChannelKind | None":
        """Map a discord.ChannelType, or None for types this tool never lists (threads, directories...)"""
        return _DISCORD_KINDS.get(channel_type)

    @property
    def emoji(self) -> str:
        return const.KIND_EMOJI[self.value]

    @property
    def voice_like(self) -> bool:
        return self in (ChannelKind.VOICE, ChannelKind.STAGE)


_DISCORD_KINDS = {
    discord.ChannelType.text: ChannelKind.TEXT,
    discord.ChannelType.voice: ChannelKind.VOICE,
    discord.ChannelType.forum: ChannelKind.FORUM,
    discord.ChannelType.stage_voice: ChannelKind.STAGE,
    discord.ChannelType.news: ChannelKind.NEWS,
    discord.ChannelType.category: ChannelKind.CATEGORY,
}


class Channel:
    """Single guild channel"""

    def __init__(
        self,
        channel_id: int,
        name: str,
        kind: ChannelKind,
        position: int = 0,
        parent_id: int | None = None,
        parent_name: str | None = None,
        category_position: int | None = None,
    ):
        """
        Initialize a channel

        Args:
            channel_id: Discord channel ID
            name: Current display name
            kind: Channel kind
            position: Sorting position within its category
            parent_id: ID of the owning category, if any
            parent_name: Name of the owning category, if known
            category_position: Position of the owning category (own position for categories)
        """
        self.channel_id = channel_id
        self.name = name
        self.kind = kind
        self.position = position
        self.parent_id = parent_id
        self.parent_name = parent_name
        self.category_position = position if category_position is None else category_position

    @classmethod
    def from_discord_channel(cls, channel: Any, parent: Any | None = None) -> "Channel | None":
        """
        Create a Channel from a discord.py guild channel.

        Args:
            channel: discord.abc.GuildChannel
            parent: The owning discord.CategoryChannel, if it was fetched

        Returns:
            Channel, or None if the channel type is not supported
        """
        kind = ChannelKind.from_discord(channel.type)
        if kind is None:
            return None
        return cls(
            channel_id=channel.id,
            name=channel.name,
            kind=kind,
            position=channel.position,
            parent_id=getattr(channel, "category_id", None),
            parent_name=parent.name if parent is not None else None,
            category_position=parent.position if parent is not None else channel.position,
        )

    @property
    def uncategorized(self) -> bool:
        return self.kind != ChannelKind.CATEGORY and self.parent_id is None

    def sort_key(self) -> tuple:
        """
        Order channels the way the Discord client lists them.

        Uncategorized channels come first, then one block per category
        (ordered by category position) led by the category itself, with
        voice and stage channels after text-like ones.
        """
        if self.uncategorized:
            block = (0, 0, 0)
        elif self.kind == ChannelKind.CATEGORY:
            block = (1, self.category_position, self.channel_id)
        else:
            block = (1, self.category_position, self.parent_id)
        return (
            block,
            0 if self.kind == ChannelKind.CATEGORY else 1,
            1 if self.kind.voice_like else 0,
            self.position,
            self.channel_id,
        )

    @property
    def group_label(self) -> str:
        """Heading of the category block this channel is listed under"""
        if self.kind == ChannelKind.CATEGORY:
            return self.name
        if self.uncategorized:
            return const.UNCATEGORIZED_LABEL
        return self.parent_name or f"category {self.parent_id}"

    def __repr__(self) -> str:
        return f"Channel({self.channel_id}, {self.name!r}, {self.kind.value})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Channel):
            return NotImplemented
        return (self.channel_id, self.name, self.kind) == (other.channel_id, other.name, other.kind)

    def __hash__(self) -> int:
        return hash(self.channel_id)


def sort_channels(channels: list[Channel]) -> list[Channel]:
    """Return channels in stable display order"""
    return sorted(channels, key=Channel.sort_key)


class Change(NamedTuple):
    """A channel whose name differs between the live guild and the edited list"""
    channel_id: int
    old_name: str
    new_name: str


class RenameResult(NamedTuple):
    """Outcome of a single rename call; error is None on success"""
    change: Change
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None
