#!/usr/bin/env python3
"""
magiccookie Database Paths - native encoding of magic database file lists

Copyright (C) 2025 Marc Rivero López
Licensed under the GNU General Public License v3.0 (GPLv3)

libmagic accepts several database files in one string, joined with the
platform path separator. An empty list is not an error: it selects the
compiled-in default database.
"""

from __future__ import annotations

import os
from collections.abc import Iterable
from typing import Union

from .errors import InvalidDatabasePathError

__all__ = ["DATABASE_FILENAME_SEPARATOR", "DatabasePaths", "PathInput"]

DATABASE_FILENAME_SEPARATOR = ";" if os.name == "nt" else ":"

PathInput = Union[str, bytes, "os.PathLike[str]", "os.PathLike[bytes]"]


class DatabasePaths:
    """
    Ordered list of magic database files, or the default database.

    Instances are read-only and may be reused across ``load``, ``check``,
    ``compile`` and ``list`` calls.

    Raises:
        InvalidDatabasePathError: If a path contains an embedded NUL byte
    """

    __slots__ = ("_filenames",)

    def __init__(self, paths: PathInput | Iterable[PathInput] = ()):
        if isinstance(paths, (str, bytes, os.PathLike)):
            paths = (paths,)

        separator = os.fsencode(DATABASE_FILENAME_SEPARATOR)
        joined = separator.join(os.fsencode(path) for path in paths)

        if b"\x00" in joined:
            raise InvalidDatabasePathError(joined)

        self._filenames: bytes | None = joined or None

    @classmethod
    def default(cls) -> "DatabasePaths":
        """Select the database compiled into libmagic."""
        return cls()

    @classmethod
    def of(cls, path: PathInput) -> "DatabasePaths":
        return cls((path,))

    @property
    def is_default(self) -> bool:
        return self._filenames is None

    @property
    def filenames(self) -> bytes | None:
        """The native argument: separator-joined paths, or None for the default."""
        return self._filenames

    def __iter__(self):
        if self._filenames is None:
            return iter(())
        separator = os.fsencode(DATABASE_FILENAME_SEPARATOR)
        return iter([os.fsdecode(part) for part in self._filenames.split(separator)])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DatabasePaths):
            return NotImplemented
        return self._filenames == other._filenames

    def __hash__(self) -> int:
        return hash(self._filenames)

    def __repr__(self) -> str:
        if self._filenames is None:
            return "DatabasePaths(<default>)"
        return f"DatabasePaths({os.fsdecode(self._filenames)!r})"
