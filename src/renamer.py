"""
Renamer

Confirmation prompt and the apply step. Renames are independent, so they run
through a small pool of async workers; every change gets its own result and
a failed rename never stops the rest (there is no rollback).

Copyright (c) 2025 Steve Angelovich
Licensed under the MIT License - see LICENSE file for details.
"""

import asyncio
import logging

import click
from tabulate import tabulate

import constants as const
import util
from channel import Change, RenameResult
from errors import DiscordApiError
from guild_channels import GuildChannels


logger = logging.getLogger(__name__)


def render_changes(changes: list[Change]) -> str:
    """Aligned 'old -> new (id)' table"""
    rows = [(change.old_name, const.DELIMITER, change.new_name, f"({change.channel_id})") for change in changes]
    return tabulate(rows, tablefmt="plain", disable_numparse=True)


def confirm_changes(changes: list[Change]) -> bool:
    """
    Show the pending renames and ask the operator to confirm.

    Returns:
        True when confirmed. A closed stdin (EOF) counts as a rejection.
    """
    click.echo(err=True)
    click.secho(render_changes(changes), fg="green", err=True)
    click.echo(err=True)
    try:
        return click.confirm(const.CONFIRM_PROMPT, default=False, err=True)
    except click.Abort:
        click.echo(err=True)
        logger.warning("Confirmation prompt got no answer (stdin closed?); use --yes for non-interactive runs")
        return False


class ChannelRenamer:
    """Applies a change set with a bounded number of concurrent rename calls"""

    def __init__(self, guild: GuildChannels, worker_count: int = const.DEFAULT_WORKERS, echo: bool = True):
        """
        Args:
            guild: Guild whose channels were fetched
            worker_count: Maximum concurrent rename calls
            echo: Print an 'Applying:' line per change on stderr
        """
        self.guild = guild
        self.worker_count = max(1, worker_count)
        self.echo = echo

    async def apply(self, changes: list[Change]) -> list[RenameResult]:
        """
        Rename every changed channel.

        Returns:
            One RenameResult per change, in change-set order
        """
        if not changes:
            return []

        queue: asyncio.Queue = asyncio.Queue()
        for index, change in enumerate(changes):
            queue.put_nowait((index, change))

        results: list[RenameResult | None] = [None] * len(changes)
        worker_count = min(self.worker_count, len(changes))
        logger.info(f"Applying {len(changes)} rename(s) with {worker_count} worker(s)")

        workers = [asyncio.create_task(self._worker(worker_id, queue, results)) for worker_id in range(worker_count)]
        try:
            await asyncio.gather(*workers)
        finally:
            # Interrupted: stop issuing new calls; renames already sent stay applied
            for task in workers:
                task.cancel()

        return [result for result in results if result is not None]

    async def _worker(self, worker_id: int, queue: asyncio.Queue, results: list[RenameResult | None]) -> None:
        while True:
            try:
                index, change = queue.get_nowait()
            except asyncio.QueueEmpty:
                return
            results[index] = await self._rename(worker_id, change)

    async def _rename(self, worker_id: int, change: Change) -> RenameResult:
        if self.echo:
            click.echo(
                click.style("Applying:", fg="blue", bold=True)
                + f" {change.old_name} {const.DELIMITER} {change.new_name}  "
                + click.style(f"({change.channel_id})", dim=True),
                err=True,
            )
        try:
            await self.guild.rename(change.channel_id, change.new_name)
        except DiscordApiError as e:
            logger.error(f"Worker {worker_id}: rename of {change.channel_id} to {change.new_name!r} failed: {e}")
            return RenameResult(change, str(e))
        except Exception as e:
            # Timeouts and transport errors discord.py lets through; the rest of the batch still runs
            logger.error(f"Worker {worker_id}: rename of {change.channel_id} to {change.new_name!r} failed: {e!r}", exc_info=True)
            return RenameResult(change, str(e) or type(e).__name__)
        logger.info(f"Worker {worker_id}: renamed {change.channel_id} {change.old_name!r} -> {change.new_name!r}")
        return RenameResult(change)


def report_results(results: list[RenameResult]) -> bool:
    """
    Print the apply summary.

    Returns:
        True when every rename succeeded
    """
    failures = [result for result in results if not result.ok]
    succeeded = len(results) - len(failures)

    click.echo(err=True)
    if failures:
        click.secho("✗ Failed renames:", fg="red", bold=True, err=True)
        for result in failures:
            change = result.change
            click.echo(f"  {change.old_name} {const.DELIMITER} {change.new_name} ({change.channel_id}): {result.error}", err=True)
        click.echo(err=True)

    summary = f"{util.plural(succeeded, 'channel')} renamed, {len(failures)} failed"
    click.secho(f"{'✗' if failures else '✓'} {summary}", fg="red" if failures else "green", err=True)
    logger.info(summary)
    return not failures
