#!/usr/bin/env python3
"""magiccookie configuration schemas."""

from .schemas import CookieConfig, MagicCookieConfig, OutputConfig

__all__ = [
    "MagicCookieConfig",
    "CookieConfig",
    "OutputConfig",
]
