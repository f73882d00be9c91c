#!/usr/bin/env python3
"""
magiccookie CLI Commands - Describe Command

Describes files, or every regular file below a directory, with one
libmagic cookie.

Copyright (C) 2025 Marc Rivero López
Licensed under the GNU General Public License v3.0 (GPLv3)
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Iterator
from typing import Any

from ...cookie import LoadedCookie, OpenCookie
from ...errors import (
    CookieOperationError,
    InvalidDatabasePathError,
    LibraryUnavailableError,
    LoadError,
    OpenError,
)
from ...flags import Flags
from ...interfaces import NativeLibrary
from ...paths import DatabasePaths
from ..display import display_description, display_error
from .base import Command


class DescribeCommand(Command):
    """
    Print ``path: description`` for every file reachable from the given paths.

    Per-file failures are reported and counted; they do not stop the run.
    The exit code is 1 if anything failed.
    """

    def __init__(self, context=None, library: NativeLibrary | None = None):
        super().__init__(context)
        self._library = library

    def execute(self, args: dict[str, Any]) -> int:
        config = self._get_config()

        try:
            config.apply_environment()
            flags = self._resolve_flags(config.flags(), args)
            databases = self._resolve_databases(config.typed_config.cookie.databases, args)
        except (ValueError, InvalidDatabasePathError) as exc:
            display_error(str(exc))
            return 2

        cookie = self._open_loaded(flags, databases)
        if cookie is None:
            return 1

        with cookie:
            failures = 0
            for path in self._iter_targets(args.get("paths") or ()):
                if not self._describe(cookie, path):
                    failures += 1

        if failures:
            self.context.logger.debug(f"{failures} file(s) could not be described")
        return 1 if failures else 0

    @staticmethod
    def _resolve_flags(configured: Flags, args: dict[str, Any]) -> Flags:
        flags = Flags.parse(args["flags"]) if args.get("flags") else configured
        if args.get("mime"):
            flags |= Flags.MIME_TYPE
        return flags

    @staticmethod
    def _resolve_databases(configured: Iterable[str], args: dict[str, Any]) -> DatabasePaths:
        magic_files = args.get("magic_files") or ()
        return DatabasePaths(magic_files or configured)

    def _open_loaded(self, flags: Flags, databases: DatabasePaths) -> LoadedCookie | None:
        try:
            cookie = OpenCookie.open(flags, library=self._library)
        except (OpenError, LibraryUnavailableError) as exc:
            display_error(str(exc))
            return None

        try:
            return cookie.load(databases)
        except LoadError as exc:
            display_error(f"{exc}: {exc.source}")
            exc.take_cookie().close()
            return None

    def _iter_targets(self, paths: Iterable[str]) -> Iterator[str | None]:
        """Yield files to describe; None marks a path that was reported as missing."""
        for path in paths:
            if os.path.isdir(path):
                for root, dirs, files in os.walk(path):
                    dirs.sort()
                    for name in sorted(files):
                        yield os.path.join(root, name)
            elif os.path.lexists(path):
                yield path
            else:
                display_error(f"path does not exist: {path}")
                yield None

    def _describe(self, cookie: LoadedCookie, path: str | None) -> bool:
        if path is None:
            return False
        try:
            description = cookie.file(path)
        except (CookieOperationError, ValueError) as exc:
            detail = getattr(exc, "explanation", None) or str(exc)
            display_error(f"{path}: {detail}")
            self.context.logger.debug(f"{path}: {exc!r}")
            return False
        display_description(path, description)
        return True
