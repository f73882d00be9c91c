#!/usr/bin/env python3
"""
magiccookie native layer

``library`` binds the libmagic shared library with ctypes; ``capability``
turns its C failure conventions into typed results.
"""

from .capability import NativeHandle
from .library import LibMagic, get_library

__all__ = ["LibMagic", "NativeHandle", "get_library"]
