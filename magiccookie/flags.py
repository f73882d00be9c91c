#!/usr/bin/env python3
"""
magiccookie Flags - libmagic configuration bit-set

Copyright (C) 2025 Marc Rivero López
Licensed under the GNU General Public License v3.0 (GPLv3)

The values mirror ``magic.h``. Composite members (``MIME``, ``NODESC`` and
``NO_CHECK_BUILTIN``) are unions of primitive bits. Nothing here decides which
combinations are legal: libmagic rejects unsupported flags when a cookie is
opened or reconfigured.

Usage:
    >>> from magiccookie.flags import Flags
    >>> flags = Flags.MIME_TYPE | Flags.ERROR
    >>> str(flags)
    'MIME_TYPE | ERROR'
    >>> Flags.parse("mime_type | error") == flags
    True
"""

import enum

__all__ = ["Flags"]

FLAG_SEPARATOR = " | "


class Flags(enum.IntFlag):
    """Options recognised by ``magic_open()`` and ``magic_setflags()``."""

    NONE = 0x0000000
    DEBUG = 0x0000001
    SYMLINK = 0x0000002
    COMPRESS = 0x0000004
    DEVICES = 0x0000008
    MIME_TYPE = 0x0000010
    CONTINUE = 0x0000020
    CHECK = 0x0000040
    PRESERVE_ATIME = 0x0000080
    RAW = 0x0000100
    ERROR = 0x0000200
    MIME_ENCODING = 0x0000400
    MIME = MIME_TYPE | MIME_ENCODING
    APPLE = 0x0000800
    EXTENSION = 0x1000000
    NODESC = EXTENSION | MIME | APPLE
    NO_CHECK_COMPRESS = 0x0001000
    NO_CHECK_TAR = 0x0002000
    NO_CHECK_SOFT = 0x0004000
    NO_CHECK_APPTYPE = 0x0008000
    NO_CHECK_ELF = 0x0010000
    NO_CHECK_TEXT = 0x0020000
    NO_CHECK_CDF = 0x0040000
    NO_CHECK_CSV = 0x0080000
    NO_CHECK_TOKENS = 0x0100000
    NO_CHECK_ENCODING = 0x0200000
    NO_CHECK_JSON = 0x0400000
    # NO_CHECK_SOFT is deliberately absent, as in magic.h
    NO_CHECK_BUILTIN = (
        NO_CHECK_COMPRESS
        | NO_CHECK_TAR
        | NO_CHECK_APPTYPE
        | NO_CHECK_ELF
        | NO_CHECK_TEXT
        | NO_CHECK_CSV
        | NO_CHECK_CDF
        | NO_CHECK_TOKENS
        | NO_CHECK_ENCODING
        | NO_CHECK_JSON
    )

    @classmethod
    def from_bits(cls, bits: int) -> "Flags":
        """Build a flag set from a raw integer, keeping unknown bits."""
        if bits < 0:
            raise ValueError(f"flag bits must be non-negative, got {bits}")
        return cls(bits)

    @classmethod
    def parse(cls, text: str) -> "Flags":
        """
        Parse the textual form produced by ``str(flags)``.

        Names are case-insensitive and may be composites. Hexadecimal
        residues such as ``0x8000000`` are accepted as raw bits.

        Raises:
            ValueError: If a name is not a known flag
        """
        result = cls.NONE
        for token in text.split("|"):
            token = token.strip()
            if not token:
                continue
            if token.lower().startswith("0x"):
                try:
                    result |= cls.from_bits(int(token, 16))
                except ValueError as exc:
                    raise ValueError(f"invalid flag bits: {token!r}") from exc
                continue
            try:
                result |= cls.__members__[token.upper()]
            except KeyError:
                raise ValueError(f"unknown magic flag: {token!r}") from None
        return result

    @property
    def bits(self) -> int:
        return int(self)

    def contains(self, other: "Flags") -> bool:
        """Return True if every bit of ``other`` is set in this flag set."""
        return int(self) & int(other) == int(other)

    def union(self, other: "Flags") -> "Flags":
        return self.__class__(int(self) | int(other))

    def intersection(self, other: "Flags") -> "Flags":
        return self.__class__(int(self) & int(other))

    def difference(self, other: "Flags") -> "Flags":
        """Return the bits of this set that are not in ``other``."""
        return self.__class__(int(self) & ~int(other))

    def __sub__(self, other):
        if isinstance(other, int):
            return self.difference(other)
        return NotImplemented

    def __invert__(self) -> "Flags":
        # Complement within the named bits only
        return self.__class__(~int(self) & _KNOWN_BITS)

    def names(self) -> list[str]:
        """Return the active primitive flag names in declaration order."""
        value = int(self)
        return [flag.name for flag in _PRIMITIVE_FLAGS if value & int(flag)]

    def __str__(self) -> str:
        value = int(self)
        parts = self.names()
        residue = value & ~_KNOWN_BITS
        if residue:
            parts.append(hex(residue))
        if not parts:
            return "NONE"
        return FLAG_SEPARATOR.join(parts)

    def __format__(self, format_spec: str) -> str:
        if not format_spec:
            return str(self)
        return format(int(self), format_spec)


_PRIMITIVE_FLAGS = tuple(
    flag
    for flag in Flags.__members__.values()
    if int(flag) and int(flag) & (int(flag) - 1) == 0
)

_KNOWN_BITS = 0
for _flag in _PRIMITIVE_FLAGS:
    _KNOWN_BITS |= int(_flag)
del _flag
