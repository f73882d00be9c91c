#!/usr/bin/env python3
"""
magiccookie Configuration Schemas - Typed Dataclasses
Copyright (C) 2025 Marc Rivero López

This program is free software: you can redistribute it and/or modify
it under the terms of the GNU General Public License as published by
the Free Software Foundation, either version 3 of the License, or
(at your option) any later version.

This program is distributed in the hope that it will be useful,
but WITHOUT ANY WARRANTY; without even the implied warranty of
MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
GNU General Public License for more details.

You should have received a copy of the GNU General Public License
along with this program. If not, see <https://www.gnu.org/licenses/>.
"""

from dataclasses import asdict, dataclass, field
from typing import Any

from ..flags import Flags


@dataclass(frozen=True)
class CookieConfig:
    """Cookie defaults used by the command line front-end"""

    flags: str = "NONE"
    databases: tuple[str, ...] = ()

    def __post_init__(self):
        """Validate configuration values"""
        if isinstance(self.databases, str):
            raise ValueError("databases must be a list of paths")
        object.__setattr__(self, "databases", tuple(str(path) for path in self.databases))
        if any("\x00" in path for path in self.databases):
            raise ValueError("database paths must not contain NUL bytes")
        Flags.parse(self.flags)

    @property
    def parsed_flags(self) -> Flags:
        return Flags.parse(self.flags)


@dataclass(frozen=True)
class OutputConfig:
    """Output formatting configuration"""

    show_banner: bool = True
    mime: bool = False


@dataclass(frozen=True)
class MagicCookieConfig:
    """Main magiccookie configuration container"""

    cookie: CookieConfig = field(default_factory=CookieConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary"""
        result = asdict(self)
        result["cookie"]["databases"] = list(self.cookie.databases)
        return result

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> "MagicCookieConfig":
        """Create configuration from dictionary"""
        if not isinstance(config_dict, dict):
            raise TypeError("config_dict must be a dictionary")

        kwargs: dict[str, Any] = {}

        if "cookie" in config_dict:
            kwargs["cookie"] = CookieConfig(**config_dict["cookie"])

        if "output" in config_dict:
            kwargs["output"] = OutputConfig(**config_dict["output"])

        return cls(**kwargs)
