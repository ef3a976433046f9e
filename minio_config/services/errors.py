"""Exception hierarchy for the config store."""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class ConfigError(RuntimeError):
    """Base error that carries the config path involved, when known."""

    def __init__(self, message: str, *, path: Optional[Path] = None) -> None:
        super().__init__(message)
        self.path = path


class ConfigIOError(ConfigError):
    pass


class ConfigDecodeError(ConfigError):
    pass


class ConfigEncodeError(ConfigError):
    pass
