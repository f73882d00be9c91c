#!/usr/bin/env python3
"""
magiccookie Error Taxonomy

Copyright (C) 2025 Marc Rivero López
Licensed under the GNU General Public License v3.0 (GPLv3)

libmagic reports failures through a single per-cookie "last error" slot.
This module turns that slot into typed exceptions:

    MagicError
    ├── CookieError               native detail (explanation + OS errno)
    ├── InvalidDatabasePathError  path list not representable natively
    ├── LibraryUnavailableError   libmagic shared library not found
    ├── OpenError                 magic_open() failed
    ├── SetFlagsError             magic_setflags() failed
    ├── CookieOperationError      magic_file/buffer/check/compile/list failed
    └── LoadError                 magic_load/load_buffers failed, carries the cookie

    ApiViolationError             libmagic broke its own API contract (fatal)
    StaleCookieError              a consumed or closed cookie was used

``ApiViolationError`` and ``StaleCookieError`` are programming errors and are
intentionally outside the ``MagicError`` hierarchy, so ``except MagicError``
never hides them.
"""

from __future__ import annotations

import os
from enum import Enum
from typing import TYPE_CHECKING, Any

from .flags import Flags

if TYPE_CHECKING:
    from .cookie import Cookie

__all__ = [
    "ApiViolationError",
    "CookieError",
    "CookieOperationError",
    "InvalidDatabasePathError",
    "LibraryUnavailableError",
    "LoadError",
    "MagicError",
    "NativeSetFlagsError",
    "OpenError",
    "OpenErrorKind",
    "SetFlagsError",
    "StaleCookieError",
]


class MagicError(Exception):
    """Base class for recoverable libmagic failures."""

    function: str | None = None

    @property
    def errno(self) -> int | None:
        return None

    @property
    def explanation(self) -> str | None:
        return None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging/serialization"""
        return {
            "exception_type": type(self).__name__,
            "exception_message": str(self),
            "function": self.function,
            "errno": self.errno,
            "explanation": self.explanation,
        }


class ApiViolationError(RuntimeError):
    """libmagic reported a failure without error detail, or an undocumented result."""


class StaleCookieError(RuntimeError):
    """A cookie was used after its handle was moved out or closed."""


class CookieError(MagicError):
    """Error detail read from a cookie's last-error slot."""

    def __init__(self, explanation: str, errno: int | None = None):
        self._explanation = explanation
        self._errno = errno or None
        super().__init__(str(self))

    @property
    def errno(self) -> int | None:
        return self._errno

    @property
    def explanation(self) -> str:
        return self._explanation

    @property
    def strerror(self) -> str | None:
        """OS description of ``errno``, if there is one."""
        if self._errno is None:
            return None
        return os.strerror(self._errno)

    def __str__(self) -> str:
        if self._errno is None:
            origin = "no OS errno"
        else:
            origin = f"OS errno: {self._errno}"
        return f"magic cookie error ({origin}): {self._explanation}"


class LibraryUnavailableError(MagicError):
    """The libmagic shared library could not be located or loaded."""


class InvalidDatabasePathError(MagicError, ValueError):
    """A database path cannot be passed to libmagic (embedded NUL)."""

    def __init__(self, filenames: bytes | None = None):
        self.filenames = filenames
        super().__init__("invalid database files path")


class NativeSetFlagsError(MagicError):
    """Raw ``magic_setflags()`` rejection, before it is attributed to a flag."""

    function = "magic_setflags"

    def __init__(self, flags: int):
        self.flags = flags
        super().__init__(f"could not set magic cookie flags {flags}")


class OpenErrorKind(Enum):
    """Why ``magic_open()`` failed."""

    UNSUPPORTED_FLAGS = "unsupported_flags"
    ERRNO = "errno"


class OpenError(MagicError):
    """
    ``magic_open()`` returned no cookie.

    Attributes:
        flags: The flag set that was rejected
        kind: ``UNSUPPORTED_FLAGS`` when the OS reported invalid input
        os_error: The underlying OS error
    """

    function = "magic_open"

    def __init__(self, flags: Flags, kind: OpenErrorKind, os_error: OSError):
        self.flags = flags
        self.kind = kind
        self.os_error = os_error
        if kind is OpenErrorKind.UNSUPPORTED_FLAGS:
            reason = f"unsupported flags {flags}"
        else:
            reason = "other error"
        super().__init__(f"could not open magic cookie: {reason}")

    @property
    def errno(self) -> int | None:
        return self.os_error.errno

    @property
    def explanation(self) -> str | None:
        return self.os_error.strerror


class SetFlagsError(MagicError):
    """
    ``magic_setflags()`` failed.

    libmagic only ever rejects ``PRESERVE_ATIME`` (on platforms without
    utime/utimes), so that is the flag reported.
    """

    function = "magic_setflags"

    def __init__(self, requested: Flags):
        self.flags = Flags.PRESERVE_ATIME
        self.requested = requested
        super().__init__(f"could not set magic cookie flags {self.flags}")


class _FunctionError(MagicError):
    """Failure of a named libmagic function, wrapping the cookie's error detail."""

    def __init__(self, function: str, source: CookieError):
        self.function = function
        self.source = source
        super().__init__(f"magic cookie error in `libmagic` function {function}")

    @property
    def errno(self) -> int | None:
        return self.source.errno

    @property
    def explanation(self) -> str | None:
        return self.source.explanation


class CookieOperationError(_FunctionError):
    """``magic_file``, ``magic_buffer``, ``magic_check``, ``magic_compile`` or ``magic_list`` failed."""


class LoadError(_FunctionError):
    """
    ``magic_load()`` or ``magic_load_buffers()`` failed.

    The cookie the load was attempted on is handed back unchanged, still open
    and in its original stage, so the caller can retry or inspect it.

    Example:
        >>> try:
        ...     loaded = cookie.load(DatabasePaths.of("missing.mgc"))
        ... except LoadError as exc:
        ...     cookie = exc.take_cookie()
        ...     loaded = cookie.load(DatabasePaths.default())
    """

    def __init__(self, function: str, source: CookieError, cookie: Cookie):
        super().__init__(function, source)
        self._cookie: Cookie | None = cookie

    @property
    def cookie(self) -> Cookie:
        if self._cookie is None:
            raise StaleCookieError("cookie was already taken from this LoadError")
        return self._cookie

    def take_cookie(self) -> Cookie:
        """Return the cookie and release this error's reference to it."""
        cookie = self.cookie
        self._cookie = None
        return cookie
