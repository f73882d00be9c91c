#!/usr/bin/env python3
"""
magiccookie - state-checked libmagic sessions

Open a cookie, load magic databases into it, then describe files and
buffers. Failures surface as typed exceptions that carry libmagic's own
error detail, and a cookie's native handle is closed exactly once.

Author: Marc Rivero (@seifreed)
License: GPL-3.0
"""

from .__version__ import __author__, __author_email__, __license__, __url__, __version__

__description__ = "State-checked libmagic sessions with typed errors"

from .cookie import Cookie, LoadedCookie, OpenCookie, libmagic_version, open_loaded
from .errors import (
    ApiViolationError,
    CookieError,
    CookieOperationError,
    InvalidDatabasePathError,
    LibraryUnavailableError,
    LoadError,
    MagicError,
    OpenError,
    OpenErrorKind,
    SetFlagsError,
    StaleCookieError,
)
from .flags import Flags
from .paths import DatabasePaths

__all__ = [
    "ApiViolationError",
    "Cookie",
    "CookieError",
    "CookieOperationError",
    "DatabasePaths",
    "Flags",
    "InvalidDatabasePathError",
    "LibraryUnavailableError",
    "LoadError",
    "LoadedCookie",
    "MagicError",
    "OpenCookie",
    "OpenError",
    "OpenErrorKind",
    "SetFlagsError",
    "StaleCookieError",
    "libmagic_version",
    "open_loaded",
    "__version__",
    "__author__",
    "__author_email__",
    "__license__",
    "__url__",
    "__description__",
]
