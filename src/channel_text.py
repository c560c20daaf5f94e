"""
Channel list text format

Converts channels to editable text and edited text back to a change set.

One channel per line:

    <channel-id> -> <name>

Whitespace around the ID and name is ignored. Blank lines and lines starting
with '#' are comments. Channels left out of a buffer are not touched.

Copyright (c) 2025 Steve Angelovich
Licensed under the MIT License - see LICENSE file for details.
"""

import logging
from typing import NamedTuple

import constants as const
from channel import Change, Channel
from errors import ExportError, ValidationError


logger = logging.getLogger(__name__)

HEADER = [
    f"{const.COMMENT_PREFIX} Edit the names after '{const.DELIMITER}' and save to apply. Do not change the IDs.",
    f"{const.COMMENT_PREFIX} Lines starting with '{const.COMMENT_PREFIX}' are ignored; removing a line leaves that channel unchanged.",
]


class LineRecord(NamedTuple):
    """One parsed line of a channel list"""
    line_number: int
    channel_id: int
    name: str


def format_line(channel_id: int, name: str) -> str:
    return f"{channel_id} {const.DELIMITER} {name}"


def export_channels(channels: list[Channel], comments: bool = True) -> str:
    """
    Render channels as an editable channel list.

    Args:
        channels: Channels in display order
        comments: Include the usage header and one '# <emoji> <category>' heading per category block

    Returns:
        Text ending with a newline (empty string for no channels)

    Raises:
        ExportError: A name contains a line break, is empty or has surrounding whitespace
    """
    lines = list(HEADER) if comments and channels else []
    current_group = None
    for channel in channels:
        if "\n" in channel.name or "\r" in channel.name:
            raise ExportError(f"Channel {channel.channel_id} has a line break in its name and cannot be exported")
        if not channel.name or channel.name != channel.name.strip():
            raise ExportError(f"Channel {channel.channel_id} name {channel.name!r} is empty or padded with whitespace and cannot be exported")
        if comments and channel.group_label != current_group:
            current_group = channel.group_label
            lines.append("")
            lines.append(f"{const.COMMENT_PREFIX} {const.KIND_EMOJI['category']} {current_group}")
        lines.append(format_line(channel.channel_id, channel.name))
    return "".join(line + "\n" for line in lines)


def _split_lines(text: str) -> list[str]:
    """Split on line feeds (and CRLF) only; other Unicode line separators may appear inside names"""
    return [line.removesuffix("\r") for line in text.split("\n")]


def _parse_lines(text: str) -> tuple[list[LineRecord], list[str]]:
    """Parse every line, collecting format problems instead of stopping at the first"""
    records = []
    problems = []
    for line_number, raw in enumerate(_split_lines(text), start=1):
        line = raw.strip()
        if not line or line.startswith(const.COMMENT_PREFIX):
            continue

        id_part, sep, name = line.partition(const.DELIMITER)
        if not sep:
            problems.append(f"line {line_number}: missing '{const.DELIMITER}' delimiter: {line!r}")
            continue

        id_part = id_part.strip()
        if not id_part.isdigit():
            problems.append(f"line {line_number}: channel ID {id_part!r} is not a number")
            continue

        name = name.strip()
        if not name:
            problems.append(f"line {line_number}: empty name for channel {id_part}")
            continue

        records.append(LineRecord(line_number, int(id_part), name))
    return records, problems


def _check_records(channels: list[Channel], records: list[LineRecord]) -> list[str]:
    known = {channel.channel_id for channel in channels}
    first_seen: dict[int, int] = {}
    problems = []
    for record in records:
        if record.channel_id not in known:
            problems.append(f"line {record.line_number}: unknown channel ID {record.channel_id}")
        elif record.channel_id in first_seen:
            problems.append(
                f"line {record.line_number}: duplicate channel ID {record.channel_id} "
                f"(already on line {first_seen[record.channel_id]})"
            )
        else:
            first_seen[record.channel_id] = record.line_number
    return problems


def parse_buffer(text: str) -> list[LineRecord]:
    """
    Parse a channel list.

    Raises:
        ValidationError: Listing every malformed line
    """
    records, problems = _parse_lines(text)
    if problems:
        raise ValidationError(problems)
    return records


def diff_channels(channels: list[Channel], records: list[LineRecord]) -> list[Change]:
    """
    Compare parsed lines against the fetched channels.

    Args:
        channels: Channels as fetched (defines which IDs may be renamed and the output order)
        records: Parsed lines

    Returns:
        Changes for channels whose name differs, in channel order

    Raises:
        ValidationError: Unknown or duplicate channel IDs
    """
    problems = _check_records(channels, records)
    if problems:
        raise ValidationError(problems)

    wanted = {record.channel_id: record.name for record in records}
    changes = [
        Change(channel.channel_id, channel.name, wanted[channel.channel_id])
        for channel in channels
        if channel.channel_id in wanted and wanted[channel.channel_id] != channel.name
    ]
    logger.info(f"{len(records)} lines parsed, {len(changes)} changed")
    return changes


def compute_changes(channels: list[Channel], text: str) -> list[Change]:
    """
    Parse an edited buffer and diff it against the fetched channels.

    Format problems and unknown/duplicate IDs are reported together in one
    ValidationError.
    """
    records, problems = _parse_lines(text)
    problems.extend(_check_records(channels, records))
    if problems:
        logger.warning(f"Rejected channel list with {len(problems)} problem(s)")
        raise ValidationError(problems)
    return diff_channels(channels, records)
