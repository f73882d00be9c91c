#!/usr/bin/env python3
"""
Logging utilities for magiccookie

Library modules only call ``get_logger(__name__)``; handlers are attached
by ``setup_logger`` from the command line front-end.
"""

import logging
import sys
from pathlib import Path

LOG_DIR = Path.home() / ".magiccookie" / "logs"


def setup_logger(
    name: str = "magiccookie",
    level: int = logging.INFO,
    log_dir: Path | None = None,
) -> logging.Logger:
    """Setup logger with console and file handlers"""

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Avoid duplicate handlers
    if logger.handlers:
        return logger

    # Console handler on stderr; stdout carries the descriptions
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)

    # File handler (optional)
    try:
        log_dir = log_dir or LOG_DIR
        log_dir.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_dir / "magiccookie.log")
        file_handler.setLevel(logging.DEBUG)

        formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

        console_handler.setFormatter(formatter)
        file_handler.setFormatter(formatter)

        logger.addHandler(console_handler)
        logger.addHandler(file_handler)

    except OSError:
        # Fallback to console only
        formatter = logging.Formatter("%(levelname)s - %(message)s")
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    return logger


def get_logger(name: str = "magiccookie") -> logging.Logger:
    """Get logger instance"""
    return logging.getLogger(name)


def configure_logging_levels(verbose: bool, quiet: bool) -> None:
    """Configure logging levels based on verbosity settings."""
    if quiet:
        logging.getLogger("magiccookie").setLevel(logging.ERROR)
        return

    level = logging.DEBUG if verbose else logging.WARNING
    logging.getLogger("magiccookie").setLevel(level)
    for handler in logging.getLogger("magiccookie").handlers:
        if isinstance(handler, logging.StreamHandler) and not isinstance(
            handler, logging.FileHandler
        ):
            handler.setLevel(level)
