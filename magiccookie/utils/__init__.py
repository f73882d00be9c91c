#!/usr/bin/env python3
"""
magiccookie Utilities
"""

from .logger import configure_logging_levels, get_logger, setup_logger

__all__ = [
    "configure_logging_levels",
    "get_logger",
    "setup_logger",
]
