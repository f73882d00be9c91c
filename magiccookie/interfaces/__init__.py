#!/usr/bin/env python3
"""Protocol interfaces for dependency inversion."""

from .native import MagicPointer, NativeLibrary

__all__ = ["MagicPointer", "NativeLibrary"]
