#!/usr/bin/env python3
"""Protocol for the raw libmagic primitives."""

from collections.abc import Sequence
from typing import Protocol

# Opaque ``magic_t`` pointer value as returned by ``magic_open()``
MagicPointer = int


class NativeLibrary(Protocol):
    """
    Raw libmagic calls with Python-level arguments.

    Return values follow the C conventions unchanged: ``None`` for a NULL
    pointer, ``-1`` or another non-zero status for failure. Interpreting
    them is the job of :mod:`magiccookie.native.capability`.
    """

    def magic_open(self, flags: int) -> MagicPointer | None: ...

    def magic_close(self, cookie: MagicPointer) -> None: ...

    def magic_error(self, cookie: MagicPointer) -> bytes | None: ...

    def magic_errno(self, cookie: MagicPointer) -> int: ...

    def magic_file(self, cookie: MagicPointer, filename: bytes) -> bytes | None: ...

    def magic_buffer(self, cookie: MagicPointer, buffer: bytes) -> bytes | None: ...

    def magic_setflags(self, cookie: MagicPointer, flags: int) -> int: ...

    def magic_check(self, cookie: MagicPointer, filenames: bytes | None) -> int: ...

    def magic_compile(self, cookie: MagicPointer, filenames: bytes | None) -> int: ...

    def magic_list(self, cookie: MagicPointer, filenames: bytes | None) -> int: ...

    def magic_load(self, cookie: MagicPointer, filenames: bytes | None) -> int: ...

    def magic_load_buffers(self, cookie: MagicPointer, buffers: Sequence[bytes]) -> int: ...

    def magic_version(self) -> int: ...

    def last_os_errno(self) -> int:
        """OS ``errno`` left by the most recent foreign call on this thread."""
        ...
