#!/usr/bin/env python3
"""
magiccookie Native Capability Layer

Copyright (C) 2025 Marc Rivero López
Licensed under the GNU General Public License v3.0 (GPLv3)

Typed calls over the raw libmagic primitives. Each call follows the native
failure convention of its primitive:

    ==================================  ===================  ==============
    Primitive                           Failure signal       Raises
    ==================================  ===================  ==============
    magic_open                          NULL                 OSError
    magic_file, magic_buffer            NULL                 CookieError
    magic_setflags                      -1                   NativeSetFlagsError
    magic_load, magic_load_buffers,     -1 (other != 0 is    CookieError
    magic_check, magic_compile,         undefined)
    magic_list
    ==================================  ===================  ==============

After a failure the cookie's last-error slot is read immediately. If
libmagic claims failure but leaves the slot empty, or returns a status it
does not document, ``ApiViolationError`` is raised: carrying on would mean
inventing a result.
"""

from __future__ import annotations

import os
from collections.abc import Sequence
from typing import NoReturn

from ..errors import ApiViolationError, CookieError, NativeSetFlagsError, StaleCookieError
from ..interfaces import MagicPointer, NativeLibrary
from ..utils.logger import get_logger

logger = get_logger(__name__)

__all__ = [
    "NativeHandle",
    "buffer",
    "check",
    "close_handle",
    "compile_database",
    "file",
    "last_error",
    "list_database",
    "load",
    "load_buffers",
    "open_handle",
    "setflags",
    "version",
]


class NativeHandle:
    """
    Exclusive owner of one ``magic_t`` pointer.

    ``close()`` calls ``magic_close()`` at most once; afterwards every
    access to ``pointer`` raises ``StaleCookieError``. The handle is also
    closed when it is garbage collected.
    """

    __slots__ = ("_library", "_pointer")

    def __init__(self, library: NativeLibrary, pointer: MagicPointer):
        self._library = library
        self._pointer: MagicPointer | None = pointer

    @property
    def library(self) -> NativeLibrary:
        return self._library

    @property
    def pointer(self) -> MagicPointer:
        if self._pointer is None:
            raise StaleCookieError("magic cookie handle is closed")
        return self._pointer

    @property
    def closed(self) -> bool:
        return self._pointer is None

    def close(self) -> None:
        pointer, self._pointer = self._pointer, None
        if pointer is not None:
            close_handle(self._library, pointer)

    def __del__(self) -> None:
        if getattr(self, "_pointer", None) is not None:
            self.close()

    def __repr__(self) -> str:
        if self._pointer is None:
            return "NativeHandle(<closed>)"
        return f"NativeHandle({self._pointer:#x})"


def _decode(raw: bytes) -> str:
    return raw.decode("utf-8", errors="replace")


def last_error(handle: NativeHandle) -> CookieError | None:
    """Read the cookie's last-error slot. Only meaningful right after a failure."""
    library = handle.library
    pointer = handle.pointer
    explanation = library.magic_error(pointer)
    errno = library.magic_errno(pointer)

    if explanation is None:
        return None
    return CookieError(_decode(explanation), errno or None)


def _api_violation(handle: NativeHandle, description: str) -> NoReturn:
    logger.critical(f"libmagic API violation for magic cookie {handle!r}: {description}")
    raise ApiViolationError(
        f"`libmagic` API violation for magic cookie {handle!r}: {description}"
    )


def _expect_error(handle: NativeHandle, function: str) -> CookieError:
    error = last_error(handle)
    if error is None:
        _api_violation(handle, f"`{function}()` did not set last error")
    logger.debug(f"{function}() failed: {error}")
    return error


def _expect_status(handle: NativeHandle, function: str, result: int) -> None:
    if result == 0:
        return
    if result == -1:
        raise _expect_error(handle, function)
    _api_violation(handle, f"expected 0 or -1 but `{function}()` returned {result}")


def open_handle(library: NativeLibrary, flags: int) -> NativeHandle:
    """
    Allocate a cookie with ``magic_open()``.

    There is no cookie yet to hold an error message, so a NULL result is
    diagnosed from the OS errno instead.

    Raises:
        OSError: With the errno ``magic_open()`` left behind
    """
    pointer = library.magic_open(flags)
    if pointer is None:
        errno = library.last_os_errno()
        logger.debug(f"magic_open({flags:#x}) failed with errno {errno}")
        raise OSError(errno, os.strerror(errno) if errno else "magic_open() failed")
    logger.debug(f"magic_open({flags:#x}) -> {pointer:#x}")
    return NativeHandle(library, pointer)


def close_handle(library: NativeLibrary, pointer: MagicPointer) -> None:
    logger.debug(f"magic_close({pointer:#x})")
    library.magic_close(pointer)


def file(handle: NativeHandle, filename: bytes) -> str:
    """Describe the file at ``filename``."""
    result = handle.library.magic_file(handle.pointer, filename)
    if result is None:
        raise _expect_error(handle, "magic_file")
    return _decode(result)


def buffer(handle: NativeHandle, data: bytes) -> str:
    """Describe the bytes in ``data``."""
    result = handle.library.magic_buffer(handle.pointer, data)
    if result is None:
        raise _expect_error(handle, "magic_buffer")
    return _decode(result)


def setflags(handle: NativeHandle, flags: int) -> None:
    if handle.library.magic_setflags(handle.pointer, flags) == -1:
        logger.debug(f"magic_setflags({flags:#x}) rejected")
        raise NativeSetFlagsError(flags)


def check(handle: NativeHandle, filenames: bytes | None) -> None:
    _expect_status(handle, "magic_check", handle.library.magic_check(handle.pointer, filenames))


def compile_database(handle: NativeHandle, filenames: bytes | None) -> None:
    _expect_status(
        handle, "magic_compile", handle.library.magic_compile(handle.pointer, filenames)
    )


def list_database(handle: NativeHandle, filenames: bytes | None) -> None:
    _expect_status(handle, "magic_list", handle.library.magic_list(handle.pointer, filenames))


def load(handle: NativeHandle, filenames: bytes | None) -> None:
    _expect_status(handle, "magic_load", handle.library.magic_load(handle.pointer, filenames))


def load_buffers(handle: NativeHandle, buffers: Sequence[bytes]) -> None:
    _expect_status(
        handle,
        "magic_load_buffers",
        handle.library.magic_load_buffers(handle.pointer, buffers),
    )


def version(library: NativeLibrary) -> int:
    return library.magic_version()
