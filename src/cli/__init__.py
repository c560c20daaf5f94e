"""
CLI Module

Command-line interface for edisch using Click.
Each command group is organized into its own module for maintainability.

Copyright (c) 2025 Steve Angelovich
Licensed under the MIT License - see LICENSE file for details.
"""

from cli.channels import apply, edit, export
from cli.completion import completion


__all__ = ["apply", "completion", "edit", "export"]
