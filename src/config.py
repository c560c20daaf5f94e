"""
Run configuration

Settings are built once by the CLI from command-line options and the
environment, then handed to every component. Nothing here is global.

Copyright (c) 2025 Steve Angelovich
Licensed under the MIT License - see LICENSE file for details.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

import constants as const
from channel import ChannelKind
from errors import ConfigError


logger = logging.getLogger(__name__)


class ChannelFilter:
    """Set of channel kinds selected with --text, --voice, ... or --all"""

    def __init__(self, kinds: Iterable[ChannelKind] = (), all_kinds: bool = False):
        self.kinds = frozenset(kinds)
        self.all_kinds = all_kinds

    @classmethod
    def from_flags(cls, all_kinds: bool = False, **flags: bool) -> "ChannelFilter":
        """
        Build a filter from boolean CLI flags.

        Args:
            all_kinds: --all was given
            **flags: One keyword per ChannelKind value (text=True, voice=False, ...)
        """
        unknown = set(flags) - {kind.value for kind in ChannelKind}
        if unknown:
            raise ValueError(f"Unknown channel kind flag(s): {', '.join(sorted(unknown))}")
        return cls((ChannelKind(name) for name, selected in flags.items() if selected), all_kinds=all_kinds)

    def none(self) -> bool:
        """True when no kind is selected"""
        return not self.all_kinds and not self.kinds

    def matches(self, kind: ChannelKind) -> bool:
        return self.all_kinds or kind in self.kinds

    def union(self, other: "ChannelFilter") -> "ChannelFilter":
        return ChannelFilter(self.kinds | other.kinds, self.all_kinds or other.all_kinds)

    def describe(self) -> str:
        if self.all_kinds:
            return "all"
        if not self.kinds:
            return "none"
        return ", ".join(kind.value for kind in ChannelKind if kind in self.kinds)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ChannelFilter):
            return NotImplemented
        return self.all_kinds == other.all_kinds and (self.all_kinds or self.kinds == other.kinds)

    def __repr__(self) -> str:
        return f"ChannelFilter({self.describe()})"


@dataclass(frozen=True)
class Settings:
    """Everything a run needs to talk to Discord and decide what to rename"""
    token: str = field(repr=False)
    guild_id: int
    channel_filter: ChannelFilter
    editor: str | None = None
    assume_yes: bool = False
    workers: int = const.DEFAULT_WORKERS

    @classmethod
    def from_options(
        cls,
        token: str | None,
        guild_id: int | None,
        channel_filter: ChannelFilter,
        editor: str | None = None,
        assume_yes: bool = False,
        workers: int = const.DEFAULT_WORKERS,
    ) -> "Settings":
        """
        Validate raw option values and build Settings.

        Token and guild ID normally arrive through click's envvar support
        (DISCORD_TOKEN / GUILD_ID), so by this point None means neither the
        flag nor the environment provided them.

        Raises:
            ConfigError: Missing token or guild ID, empty filter, bad worker count
        """
        problems = []
        if not token or not token.strip():
            problems.append(f"missing bot token (pass --token or set ${const.TOKEN_ENV})")
        if guild_id is None:
            problems.append(f"missing guild ID (pass --guild-id or set ${const.GUILD_ID_ENV})")
        elif guild_id <= 0:
            problems.append(f"invalid guild ID: {guild_id}")
        if channel_filter.none():
            flags = " ".join(f"--{kind.value}" for kind in ChannelKind)
            problems.append(f"no channel types selected (pass one or more of {flags}, or --all)")
        if not 1 <= workers <= const.MAX_WORKERS:
            problems.append(f"--workers must be between 1 and {const.MAX_WORKERS}, got {workers}")

        if problems:
            raise ConfigError("; ".join(problems))

        settings = cls(
            token=token.strip(),  # type: ignore[union-attr]
            guild_id=guild_id,  # type: ignore[arg-type]
            channel_filter=channel_filter,
            editor=editor,
            assume_yes=assume_yes,
            workers=workers,
        )
        logger.debug(f"Settings: {settings}")
        return settings
