#!/usr/bin/env python3
"""
magiccookie CLI Commands

Copyright (C) 2025 Marc Rivero López
Licensed under the GNU General Public License v3.0 (GPLv3)
"""

from .base import Command, CommandContext
from .describe_command import DescribeCommand
from .version_command import VersionCommand

__all__ = [
    "Command",
    "CommandContext",
    "DescribeCommand",
    "VersionCommand",
]
