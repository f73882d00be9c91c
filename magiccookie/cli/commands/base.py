#!/usr/bin/env python3
"""
magiccookie CLI Commands - Base Abstractions

Command Pattern implementation for magiccookie CLI commands.

Copyright (C) 2025 Marc Rivero López

This program is free software: you can redistribute it and/or modify
it under the terms of the GNU General Public License as published by
the Free Software Foundation, either version 3 of the License, or
(at your option) any later version.

This program is distributed in the hope that it will be useful,
but WITHOUT ANY WARRANTY; without even the implied warranty of
MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
GNU General Public License for more details.

You should have received a copy of the GNU General Public License
along with this program. If not, see <https://www.gnu.org/licenses/>.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from rich.console import Console

from ...config import Config
from ...utils.logger import configure_logging_levels, setup_logger
from ..display import console as default_console


@dataclass
class CommandContext:
    """
    Shared context for all commands.

    Attributes:
        console: Rich console for formatted output
        logger: Logger instance for command execution logging
        config: Application configuration object
        verbose: Flag for verbose output mode
        quiet: Flag for suppressing non-critical output
    """

    console: Console
    logger: logging.Logger
    config: Config | None = None
    verbose: bool = False
    quiet: bool = False

    @classmethod
    def create(
        cls,
        config: Config | None = None,
        verbose: bool = False,
        quiet: bool = False,
    ) -> "CommandContext":
        """Factory method to create a CommandContext with logging configured."""
        logger = setup_logger()
        configure_logging_levels(verbose, quiet)

        return cls(
            console=default_console,
            logger=logger,
            config=config,
            verbose=verbose,
            quiet=quiet,
        )


class Command(ABC):
    """
    Abstract base class for all CLI commands.

    Each command encapsulates one CLI operation and reports an exit code.
    """

    def __init__(self, context: CommandContext | None = None):
        self._context = context

    @abstractmethod
    def execute(self, args: dict[str, Any]) -> int:
        """
        Execute the command with provided arguments.

        Args:
            args: Dictionary of command arguments (from Click)

        Returns:
            Exit code (0 for success, non-zero for failure)
        """

    @property
    def context(self) -> CommandContext:
        """Get command context, creating a default if not set."""
        if self._context is None:
            self._context = CommandContext.create()
        return self._context

    def _get_config(self) -> Config:
        """Return the context configuration, loading the default file if unset."""
        if self.context.config is None:
            return Config()
        return self.context.config
