#!/usr/bin/env python3
"""
magiccookie CLI - Command Line Interface

Click-based entry point. Command execution lives in ``cli.commands``.

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

import sys
from dataclasses import dataclass
from typing import Any

import click

from .cli.commands import CommandContext, DescribeCommand, VersionCommand
from .cli.display import console, print_banner
from .config import Config


@dataclass
class CLIArgs:
    paths: tuple[str, ...]
    magic_files: tuple[str, ...]
    mime: bool
    flags: str | None
    config: str | None
    verbose: bool
    quiet: bool
    version: bool


def main(**kwargs: Any) -> None:
    """Run the CLI, translating interrupts into exit code 1."""
    try:
        run_cli(CLIArgs(**kwargs))
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        sys.exit(1)


@click.command()
@click.argument("paths", nargs=-1, type=click.Path())
@click.option(
    "-m",
    "--magic-file",
    "magic_files",
    multiple=True,
    type=click.Path(),
    help="Magic database file to load (repeatable). Default: compiled-in database",
)
@click.option("--mime", is_flag=True, help="Report MIME types instead of descriptions")
@click.option("--flags", help='libmagic flags, e.g. "MIME_TYPE | ERROR"')
@click.option("--config", help="Custom config file path")
@click.option("-v", "--verbose", is_flag=True, help="Verbose output")
@click.option("--quiet", is_flag=True, help="Suppress non-critical output")
@click.option("--version", is_flag=True, help="Show version information and exit")
def cli(**kwargs: Any) -> None:
    """Describe the type of each PATH using libmagic."""
    main(**kwargs)


def run_cli(args: CLIArgs) -> None:
    """Primary CLI workflow separated for clarity and testability."""
    context = CommandContext.create(verbose=args.verbose, quiet=args.quiet)

    if args.version:
        sys.exit(VersionCommand(context).execute({}))

    if not args.paths:
        raise click.UsageError("at least one PATH is required")

    config = Config(args.config) if args.config else Config()
    context.config = config
    if config.typed_config.output.show_banner and not args.quiet:
        print_banner()

    exit_code = DescribeCommand(context).execute(
        {
            "paths": args.paths,
            "magic_files": args.magic_files,
            "mime": args.mime or config.typed_config.output.mime,
            "flags": args.flags,
        }
    )
    sys.exit(exit_code)


if __name__ == "__main__":
    cli()
