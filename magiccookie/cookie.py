#!/usr/bin/env python3
"""
magiccookie Cookie - libmagic session lifecycle

Copyright (C) 2025 Marc Rivero López
Licensed under the GNU General Public License v3.0 (GPLv3)

A cookie is a libmagic session. It exists in one of two stages, each a
separate class so that the operations legal in a stage are exactly the
methods the class defines:

    OpenCookie     created by ``OpenCookie.open()``; can be configured,
                   can load databases and run database maintenance.
    LoadedCookie   produced by a successful ``load()``/``load_buffers()``;
                   additionally describes files and buffers.

A successful load moves the native handle out of the old cookie into a new
``LoadedCookie``. No native call is involved: libmagic loads into the same
``magic_t`` in place. The old cookie is left empty and any further use of it
raises ``StaleCookieError``. A failed load raises ``LoadError`` holding the
old cookie, untouched and still open.

The handle is closed exactly once: by ``close()``, by leaving a ``with``
block, or when the owning cookie is garbage collected.

Usage:
    >>> from magiccookie import DatabasePaths, Flags, OpenCookie
    >>> with OpenCookie.open(Flags.ERROR) as cookie:
    ...     with cookie.load(DatabasePaths.default()) as loaded:
    ...         loaded.buffer(b"%PDF-1.7")
    'PDF document, version 1.7'
"""

from __future__ import annotations

import errno
import os
from collections.abc import Iterable, Sequence
from types import TracebackType
from typing import Literal, Union

from .errors import (
    CookieError,
    CookieOperationError,
    LoadError,
    NativeSetFlagsError,
    OpenError,
    OpenErrorKind,
    SetFlagsError,
    StaleCookieError,
)
from .flags import Flags
from .interfaces import NativeLibrary
from .native import capability
from .native.capability import NativeHandle
from .native.library import get_library
from .paths import DatabasePaths, PathInput
from .utils.logger import get_logger

logger = get_logger(__name__)

__all__ = ["Cookie", "LoadedCookie", "OpenCookie", "libmagic_version", "open_loaded"]

DatabaseInput = Union[DatabasePaths, PathInput, Iterable[PathInput], None]


def _database_paths(paths: DatabaseInput) -> DatabasePaths:
    if paths is None:
        return DatabasePaths.default()
    if isinstance(paths, DatabasePaths):
        return paths
    return DatabasePaths(paths)


class Cookie:
    """
    Operations shared by every cookie stage.

    Not instantiated directly: use ``OpenCookie.open()``.
    """

    stage = "base"

    def __init__(self, handle: NativeHandle, flags: Flags = Flags.NONE):
        self._handle: NativeHandle | None = handle
        self._flags = flags

    def _live_handle(self) -> NativeHandle:
        if self._handle is None:
            raise StaleCookieError(
                f"{type(self).__name__} was consumed by a load and can no longer be used"
            )
        if self._handle.closed:
            raise StaleCookieError(f"{type(self).__name__} is closed")
        return self._handle

    def _into_loaded(self) -> LoadedCookie:
        """Move the handle into a new LoadedCookie, leaving this cookie empty."""
        handle, self._handle = self._live_handle(), None
        return LoadedCookie(handle, self._flags)

    @property
    def flags(self) -> Flags:
        """Flags passed to ``open()`` or the latest successful ``set_flags()``."""
        return self._flags

    @property
    def closed(self) -> bool:
        return self._handle is None or self._handle.closed

    @property
    def consumed(self) -> bool:
        """True once a load has moved the handle into another cookie."""
        return self._handle is None

    @property
    def version(self) -> int:
        return capability.version(self._live_handle().library)

    def load(self, paths: DatabaseInput = None) -> LoadedCookie:
        """
        Load magic databases from files with ``magic_load()``.

        Args:
            paths: Database files; None or an empty list selects the default database

        Returns:
            A LoadedCookie owning this cookie's handle

        Raises:
            InvalidDatabasePathError: If a path cannot be passed to libmagic
            LoadError: If libmagic failed; ``take_cookie()`` returns this cookie
        """
        database = _database_paths(paths)
        handle = self._live_handle()
        try:
            capability.load(handle, database.filenames)
        except CookieError as err:
            raise LoadError("magic_load", err, self) from err

        logger.debug(f"Loaded magic database {database!r}")
        return self._into_loaded()

    def load_buffers(self, buffers: Sequence[bytes | bytearray | memoryview]) -> LoadedCookie:
        """
        Load compiled magic databases from memory with ``magic_load_buffers()``.

        Raises:
            LoadError: If libmagic failed; ``take_cookie()`` returns this cookie
        """
        data = [bytes(item) for item in buffers]
        handle = self._live_handle()
        try:
            capability.load_buffers(handle, data)
        except CookieError as err:
            raise LoadError("magic_load_buffers", err, self) from err

        logger.debug(f"Loaded {len(data)} magic database buffer(s)")
        return self._into_loaded()

    def set_flags(self, flags: Flags) -> None:
        """
        Reconfigure the cookie with ``magic_setflags()``.

        Raises:
            SetFlagsError: If libmagic rejected the flags
        """
        flags = Flags(flags)
        try:
            capability.setflags(self._live_handle(), int(flags))
        except NativeSetFlagsError as err:
            raise SetFlagsError(flags) from err
        self._flags = flags

    def compile(self, paths: DatabaseInput = None) -> None:
        """Compile textual magic files into ``.mgc`` files with ``magic_compile()``."""
        database = _database_paths(paths)
        try:
            capability.compile_database(self._live_handle(), database.filenames)
        except CookieError as err:
            raise CookieOperationError("magic_compile", err) from err

    def check(self, paths: DatabaseInput = None) -> None:
        """Check the validity of magic files with ``magic_check()``."""
        database = _database_paths(paths)
        try:
            capability.check(self._live_handle(), database.filenames)
        except CookieError as err:
            raise CookieOperationError("magic_check", err) from err

    def list(self, paths: DatabaseInput = None) -> None:
        """Dump the magic entries to standard output with ``magic_list()``."""
        database = _database_paths(paths)
        try:
            capability.list_database(self._live_handle(), database.filenames)
        except CookieError as err:
            raise CookieOperationError("magic_list", err) from err

    def close(self) -> None:
        """Close the native handle. Safe to call more than once."""
        if self._handle is not None:
            self._handle.close()

    def __enter__(self):
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> Literal[False]:
        self.close()
        return False

    def __repr__(self) -> str:
        if self._handle is None:
            return f"{type(self).__name__}(<consumed>)"
        return f"{type(self).__name__}({self._handle!r}, flags={self._flags})"


class OpenCookie(Cookie):
    """A cookie with no database loaded yet."""

    stage = "open"

    @classmethod
    def open(cls, flags: Flags = Flags.NONE, library: NativeLibrary | None = None) -> OpenCookie:
        """
        Open a cookie with ``magic_open()``.

        Args:
            flags: Initial configuration
            library: Native library to use; defaults to the system libmagic

        Raises:
            OpenError: ``UNSUPPORTED_FLAGS`` when the OS reported invalid
                input, ``ERRNO`` for any other failure
            LibraryUnavailableError: If libmagic cannot be loaded
        """
        flags = Flags(flags)
        if library is None:
            library = get_library()
        try:
            handle = capability.open_handle(library, int(flags))
        except OSError as err:
            if err.errno == errno.EINVAL:
                kind = OpenErrorKind.UNSUPPORTED_FLAGS
            else:
                kind = OpenErrorKind.ERRNO
            raise OpenError(flags, kind, err) from err
        return cls(handle, flags)

    def __enter__(self) -> OpenCookie:
        return self


class LoadedCookie(Cookie):
    """A cookie with at least one database loaded. Loading again is allowed."""

    stage = "loaded"

    def file(self, filename: PathInput) -> str:
        """
        Describe the file at ``filename`` with ``magic_file()``.

        Raises:
            ValueError: If the path contains an embedded null byte
            CookieOperationError: If libmagic failed
        """
        encoded = os.fsencode(filename)
        if b"\x00" in encoded:
            raise ValueError("embedded null byte in file name")
        try:
            return capability.file(self._live_handle(), encoded)
        except CookieError as err:
            raise CookieOperationError("magic_file", err) from err

    def buffer(self, data: bytes | bytearray | memoryview) -> str:
        """
        Describe in-memory bytes with ``magic_buffer()``.

        Raises:
            CookieOperationError: If libmagic failed
        """
        try:
            return capability.buffer(self._live_handle(), bytes(data))
        except CookieError as err:
            raise CookieOperationError("magic_buffer", err) from err

    def __enter__(self) -> LoadedCookie:
        return self


def open_loaded(
    flags: Flags = Flags.NONE,
    paths: DatabaseInput = None,
    library: NativeLibrary | None = None,
) -> LoadedCookie:
    """
    Open a cookie and load databases into it.

    Raises:
        OpenError: If the cookie could not be opened
        LoadError: If loading failed; the error carries the open cookie
    """
    return OpenCookie.open(flags, library=library).load(paths)


def libmagic_version(library: NativeLibrary | None = None) -> int:
    """Return ``magic_version()``, e.g. 545 for libmagic 5.45."""
    return capability.version(library if library is not None else get_library())
