"""
Editor bridge

Opens a text buffer in the operator's editor and returns what was saved.

Copyright (c) 2025 Steve Angelovich
Licensed under the MIT License - see LICENSE file for details.
"""

import logging
import os

import click

import constants as const
from errors import EditorError


logger = logging.getLogger(__name__)


def resolve_editor(editor: str | None = None) -> str:
    """Explicit editor, else $VISUAL, else $EDITOR, else vi"""
    return editor or os.environ.get("VISUAL") or os.environ.get("EDITOR") or const.DEFAULT_EDITOR


def edit_buffer(text: str, editor: str | None = None) -> str:
    """
    Edit text in an external editor and return the saved contents.

    The text is written to a temporary file, the editor runs with that file
    as its last argument and inherits the terminal, and the file is read back
    once the editor exits. click.edit removes the temporary file on every
    exit path, including editor failure and Ctrl-C.

    Args:
        text: Initial buffer contents
        editor: Editor command line (may include arguments)

    Raises:
        EditorError: The editor could not be started or exited non-zero
    """
    command = resolve_editor(editor)
    logger.info(f"Opening channel list in editor: {command}")
    try:
        edited = click.edit(text, editor=command, extension=const.BUFFER_EXTENSION, require_save=False)
    except click.ClickException as e:
        logger.error(f"Editor failed: {e.format_message()}")
        raise EditorError(f"{e.format_message()}; no changes were applied") from e
    return edited or ""
