"""Machine-specific helpers used to locate the config directory."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

CONFIG_DIR_NAME = ".minio"
HOME_ENV = "MINIO_CONFIG_HOME"


class Machine:
    def __init__(self, home: Optional[str] = None) -> None:
        self._home = home

    def home_directory(self) -> str:
        if self._home:
            return self._home
        return os.getenv(HOME_ENV) or str(Path.home())

    def config_path(self, *parts: str) -> Path:
        base = Path(self.home_directory()) / CONFIG_DIR_NAME
        for part in parts:
            base /= part
        return base
