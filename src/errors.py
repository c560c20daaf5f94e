"""
Error types

Every failure the CLI reports to the operator derives from EdischError.
Anything else escaping a command is a bug and is logged with a traceback.

Copyright (c) 2025 Steve Angelovich
Licensed under the MIT License - see LICENSE file for details.
"""


class EdischError(Exception):
    """Base class for errors reported to the operator"""


class ConfigError(EdischError):
    """Missing or unusable token, guild ID or channel filter"""


class ValidationError(EdischError):
    """
    One or more problems in an edited channel list.

    All problems found in a buffer are collected so the operator can fix
    them in one pass.
    """

    def __init__(self, problems: list[str]):
        self.problems = list(problems)
        count = len(self.problems)
        header = f"{count} problem{'s' if count != 1 else ''} in channel list"
        super().__init__("\n  ".join([header + ":"] + self.problems))


class DiscordApiError(EdischError):
    """Discord rejected a request or could not be reached"""


class EditorError(EdischError):
    """The external editor could not be started or exited with an error"""


class ExportError(EdischError):
    """A channel cannot be represented in the text format"""
