#!/usr/bin/env python3
"""
Copyright (c) 2025 Steve Angelovich
Licensed under the MIT License - see LICENSE file for details.
"""

from dotenv import load_dotenv


# App Version
VERSION = "0.3.0"
AUTHOR = "sangelovich"
PROG_NAME = "edisch"

# Logging
LOG_FILE = "edisch.log"
MAX_LOG_SIZE = 10 * 1024 * 1024  # 10 MB
BACKUP_COUNT = 5
# stdout carries exported channel lists, so the console stays quiet by default
DEFAULT_LOG_LEVEL = "WARNING"

# DISCORD
load_dotenv()
TOKEN_ENV = "DISCORD_TOKEN"
GUILD_ID_ENV = "GUILD_ID"
AUDIT_LOG_REASON = "Bulk channel rename (edisch)"

# Channel list text format
DELIMITER = "->"
COMMENT_PREFIX = "#"
UNCATEGORIZED_LABEL = "(no category)"
KIND_EMOJI = {
    "text": "📝",
    "voice": "🔊",
    "forum": "💬",
    "stage": "🎭",
    "news": "📣",
    "category": "📁",
}

# Editor
DEFAULT_EDITOR = "vi"
BUFFER_EXTENSION = ".txt"

# Apply
DEFAULT_WORKERS = 4
MAX_WORKERS = 16
CONFIRM_PROMPT = "Do you want to apply these changes?"

# Shell completion
COMPLETION_SHELLS = ["bash", "zsh", "fish"]
