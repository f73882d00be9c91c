#!/usr/bin/env python3
"""
magiccookie Configuration Management

Settings live in ``~/.magiccookie/config.json`` unless another path is
given. ``MAGICCOOKIE_FLAGS`` and ``MAGICCOOKIE_DATABASES`` override the
cookie section from the environment.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import replace
from pathlib import Path
from typing import Any

from .config_schemas import MagicCookieConfig
from .config_store import ConfigStore
from .flags import Flags
from .paths import DATABASE_FILENAME_SEPARATOR, DatabasePaths
from .utils.logger import get_logger

logger = get_logger(__name__)

FLAGS_ENV_VAR = "MAGICCOOKIE_FLAGS"
DATABASES_ENV_VAR = "MAGICCOOKIE_DATABASES"


class Config:
    """Configuration manager for magiccookie"""

    def __init__(self, config_path: str | None = None):
        self.config_path = config_path or self._get_default_config_path()
        self.typed_config = MagicCookieConfig()

        # Load configuration if exists
        if os.path.exists(self.config_path):
            self.load_config()
        else:
            self.save_config()  # Create default config

    @staticmethod
    def _get_default_config_path() -> str:
        """Get default configuration file path"""
        return str(Path.home() / ".magiccookie" / "config.json")

    def load_config(self) -> None:
        """Load configuration from file"""
        user_config = ConfigStore.load(self.config_path)
        if user_config is None:
            return
        self._apply(self._merge(self.to_dict(), user_config))

    def save_config(self) -> None:
        """Save configuration to file"""
        ConfigStore.save(self.config_path, self.to_dict())

    @staticmethod
    def _merge(base: dict[str, Any], overrides: Mapping[str, Any]) -> dict[str, Any]:
        merged = {section: dict(values) for section, values in base.items()}
        for section, settings in overrides.items():
            if isinstance(settings, Mapping) and section in merged:
                merged[section].update(settings)
            else:
                merged[section] = settings
        return merged

    def _apply(self, data: dict[str, Any]) -> None:
        try:
            self.typed_config = MagicCookieConfig.from_dict(data)
        except (TypeError, ValueError) as exc:
            logger.warning(f"Invalid configuration in {self.config_path}, using defaults: {exc}")
            self.typed_config = MagicCookieConfig()

    def apply_overrides(self, overrides: Mapping[str, Any]) -> None:
        """Apply section overrides on top of the current configuration."""
        self._apply(self._merge(self.to_dict(), overrides))

    def apply_environment(self, environ: Mapping[str, str] | None = None) -> None:
        """
        Apply ``MAGICCOOKIE_FLAGS`` and ``MAGICCOOKIE_DATABASES`` if set.

        Unlike the config file, a bad environment value is not replaced by
        defaults.

        Raises:
            ValueError: If either variable holds an invalid value
        """
        environ = os.environ if environ is None else environ
        cookie: dict[str, Any] = {}

        flags = environ.get(FLAGS_ENV_VAR, "").strip()
        if flags:
            cookie["flags"] = flags

        databases = environ.get(DATABASES_ENV_VAR, "").strip()
        if databases:
            cookie["databases"] = [
                path for path in databases.split(DATABASE_FILENAME_SEPARATOR) if path
            ]

        if not cookie:
            return
        try:
            updated = replace(self.typed_config.cookie, **cookie)
        except ValueError as exc:
            raise ValueError(f"invalid magiccookie environment setting: {exc}") from exc
        self.typed_config = replace(self.typed_config, cookie=updated)

    def flags(self) -> Flags:
        return self.typed_config.cookie.parsed_flags

    def database_paths(self) -> DatabasePaths:
        return DatabasePaths(self.typed_config.cookie.databases)

    def to_dict(self) -> dict[str, Any]:
        return self.typed_config.to_dict()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], config_path: str | None = None) -> "Config":
        """Build a Config from a mapping without touching the filesystem."""
        config = cls.__new__(cls)
        config.config_path = config_path or cls._get_default_config_path()
        config.typed_config = MagicCookieConfig()
        config._apply(cls._merge(config.to_dict(), data))
        return config
