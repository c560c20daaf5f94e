"""
Shell Completion Command

Copyright (c) 2025 Steve Angelovich
Licensed under the MIT License - see LICENSE file for details.
"""

import logging

import click
from click.shell_completion import get_completion_class

import constants as const


logger = logging.getLogger(__name__)


@click.command("completion")
@click.argument("shell", type=click.Choice(const.COMPLETION_SHELLS))
@click.pass_context
def completion(ctx, shell):
    """
    Generate shell completion

    \b
    Examples:
      edisch completion bash > ~/.local/share/bash-completion/completions/edisch
      edisch completion zsh > "${fpath[1]}/_edisch"
      edisch completion fish > ~/.config/fish/completions/edisch.fish
    """
    root = ctx.find_root().command
    complete_var = f"_{const.PROG_NAME.upper()}_COMPLETE"
    completion_class = get_completion_class(shell)
    if completion_class is None:
        raise click.BadParameter(f"Unsupported shell: {shell}", param_hint="SHELL")
    logger.debug(f"Generating {shell} completion")
    click.echo(completion_class(root, {}, const.PROG_NAME, complete_var).source())
