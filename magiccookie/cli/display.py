#!/usr/bin/env python3
"""
magiccookie CLI Display Module

Copyright (C) 2025 Marc Rivero López
Licensed under the GNU General Public License v3.0 (GPLv3)
"""

try:
    import pyfiglet
except ImportError:  # pragma: no cover - optional dependency
    pyfiglet = None
from rich.console import Console
from rich.markup import escape

console = Console()


def print_banner() -> None:
    """Print magiccookie banner"""
    if pyfiglet is not None:
        banner = pyfiglet.figlet_format("magiccookie", font="slant")
        console.print(f"[bold blue]{escape(banner)}[/bold blue]")
    else:
        console.print("[bold blue]magiccookie[/bold blue]")
    console.print("[bold]File type identification powered by libmagic[/bold]\n")


def display_description(path: str, description: str) -> None:
    """Print one ``path: description`` line, exactly as libmagic reported it."""
    console.print(f"{path}: {description}", markup=False, highlight=False, soft_wrap=True)


def display_error(message: str) -> None:
    console.print(f"[red]Error: {escape(message)}[/red]", soft_wrap=True)
