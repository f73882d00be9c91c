#!/usr/bin/env python3
"""
magiccookie CLI Commands - Version Command

Copyright (C) 2025 Marc Rivero López
Licensed under the GNU General Public License v3.0 (GPLv3)
"""

from typing import Any

from ...__version__ import __author__, __license__, __url__, __version__
from ...cookie import libmagic_version
from ...errors import LibraryUnavailableError
from .base import Command


def format_libmagic_version(version: int) -> str:
    """Render ``magic_version()`` (e.g. 545) as ``5.45``."""
    return f"{version // 100}.{version % 100:02d}"


class VersionCommand(Command):
    """Display magiccookie and libmagic version information."""

    def execute(self, _args: dict[str, Any]) -> int:
        console = self.context.console
        console.print(
            f"[bold cyan]magiccookie[/bold cyan] version [bold green]{__version__}[/bold green]"
        )
        try:
            console.print(f"libmagic version: {format_libmagic_version(libmagic_version())}")
        except LibraryUnavailableError as exc:
            console.print(f"libmagic version: [red]Not Available[/red] ({exc})")
        console.print(f"Author: {__author__}")
        console.print(f"License: {__license__}")
        console.print(f"Repository: {__url__}")
        return 0
