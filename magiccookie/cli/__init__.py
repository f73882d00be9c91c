#!/usr/bin/env python3
"""
magiccookie CLI package

Copyright (C) 2025 Marc Rivero López
Licensed under the GNU General Public License v3.0 (GPLv3)
"""

from .display import console, display_description, display_error, print_banner

__all__ = ["console", "display_description", "display_error", "print_banner"]
