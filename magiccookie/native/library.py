#!/usr/bin/env python3
"""
magiccookie Native Library - ctypes binding of libmagic

Copyright (C) 2025 Marc Rivero López
Licensed under the GNU General Public License v3.0 (GPLv3)

The shared library is located with python-magic's loader, which knows the
usual install locations on Linux, macOS and Windows. It is then reopened
with ``use_errno=True`` so that the OS error left by ``magic_open()`` can be
read back. ``MAGICCOOKIE_LIBMAGIC`` overrides the location.

Nothing in this module interprets results; see ``capability.py``.
"""

from __future__ import annotations

import ctypes
import os
import threading
from collections.abc import Sequence
from ctypes import POINTER, c_char_p, c_int, c_size_t, c_void_p

from ..errors import LibraryUnavailableError
from ..interfaces import MagicPointer
from ..utils.logger import get_logger

logger = get_logger(__name__)

LIBMAGIC_ENV_VAR = "MAGICCOOKIE_LIBMAGIC"

magic_t = c_void_p

_library: LibMagic | None = None
_library_lock = threading.Lock()


def _locate_library() -> str:
    """Return the file name of the libmagic shared library."""
    override = os.environ.get(LIBMAGIC_ENV_VAR, "").strip()
    if override:
        return override

    try:
        from magic import loader
    except ImportError as exc:
        raise LibraryUnavailableError(
            "python-magic is not installed or libmagic native library is missing. "
            "On macOS: brew install libmagic"
        ) from exc

    try:
        return loader.load_lib()._name
    except (ImportError, OSError) as exc:
        raise LibraryUnavailableError(f"failed to find libmagic: {exc}") from exc


def _load_cdll(name: str | None = None) -> ctypes.CDLL:
    name = name or _locate_library()
    logger.debug(f"Loading libmagic from {name}")
    try:
        return ctypes.CDLL(name, use_errno=True)
    except OSError as exc:
        raise LibraryUnavailableError(f"could not load libmagic from {name}: {exc}") from exc


class LibMagic:
    """
    libmagic primitives over a ``ctypes.CDLL``.

    ``magic_load_buffers()`` does not copy the database buffers, so they are
    pinned here until ``magic_close()`` is called on the cookie that loaded
    them.
    """

    def __init__(self, cdll: ctypes.CDLL | None = None):
        self._lib = cdll if cdll is not None else _load_cdll()
        self._pinned: dict[MagicPointer, list[ctypes.Array]] = {}
        self._declare_prototypes()

    def _declare_prototypes(self) -> None:
        lib = self._lib
        prototypes = {
            "magic_open": ([c_int], magic_t),
            "magic_close": ([magic_t], None),
            "magic_error": ([magic_t], c_char_p),
            "magic_errno": ([magic_t], c_int),
            "magic_file": ([magic_t, c_char_p], c_char_p),
            "magic_buffer": ([magic_t, c_void_p, c_size_t], c_char_p),
            "magic_setflags": ([magic_t, c_int], c_int),
            "magic_check": ([magic_t, c_char_p], c_int),
            "magic_compile": ([magic_t, c_char_p], c_int),
            "magic_list": ([magic_t, c_char_p], c_int),
            "magic_load": ([magic_t, c_char_p], c_int),
            "magic_load_buffers": (
                [magic_t, POINTER(c_void_p), POINTER(c_size_t), c_size_t],
                c_int,
            ),
            "magic_version": ([], c_int),
        }
        for name, (argtypes, restype) in prototypes.items():
            function = getattr(lib, name)
            function.argtypes = argtypes
            function.restype = restype

    def magic_open(self, flags: int) -> MagicPointer | None:
        return self._lib.magic_open(flags)

    def magic_close(self, cookie: MagicPointer) -> None:
        self._lib.magic_close(cookie)
        self._pinned.pop(cookie, None)

    def magic_error(self, cookie: MagicPointer) -> bytes | None:
        return self._lib.magic_error(cookie)

    def magic_errno(self, cookie: MagicPointer) -> int:
        return self._lib.magic_errno(cookie)

    def magic_file(self, cookie: MagicPointer, filename: bytes) -> bytes | None:
        return self._lib.magic_file(cookie, filename)

    def magic_buffer(self, cookie: MagicPointer, buffer: bytes) -> bytes | None:
        return self._lib.magic_buffer(cookie, buffer, len(buffer))

    def magic_setflags(self, cookie: MagicPointer, flags: int) -> int:
        return self._lib.magic_setflags(cookie, flags)

    def magic_check(self, cookie: MagicPointer, filenames: bytes | None) -> int:
        return self._lib.magic_check(cookie, filenames)

    def magic_compile(self, cookie: MagicPointer, filenames: bytes | None) -> int:
        return self._lib.magic_compile(cookie, filenames)

    def magic_list(self, cookie: MagicPointer, filenames: bytes | None) -> int:
        return self._lib.magic_list(cookie, filenames)

    def magic_load(self, cookie: MagicPointer, filenames: bytes | None) -> int:
        return self._lib.magic_load(cookie, filenames)

    def magic_load_buffers(self, cookie: MagicPointer, buffers: Sequence[bytes]) -> int:
        count = len(buffers)
        storage = [ctypes.create_string_buffer(bytes(buffer), len(buffer)) for buffer in buffers]
        pointers = (c_void_p * count)(*[ctypes.addressof(item) for item in storage])
        sizes = (c_size_t * count)(*[len(buffer) for buffer in buffers])

        result = self._lib.magic_load_buffers(cookie, pointers, sizes, count)
        if result == 0:
            self._pinned.setdefault(cookie, []).extend(storage)
        return result

    def magic_version(self) -> int:
        return self._lib.magic_version()

    def last_os_errno(self) -> int:
        return ctypes.get_errno()


def get_library() -> LibMagic:
    """Return the process-wide libmagic binding, loading it on first use."""
    global _library
    with _library_lock:
        if _library is None:
            _library = LibMagic()
        return _library
