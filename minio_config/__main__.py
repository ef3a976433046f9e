"""Run the config API with ``python -m minio_config``."""
from __future__ import annotations

import os

from .factory import create_app
from .logging_config import setup_logging


def main() -> None:
    setup_logging()
    app = create_app()
    app.run(
        host=os.getenv("MINIO_CONFIG_BIND", "127.0.0.1"),
        port=int(os.getenv("MINIO_CONFIG_PORT", "9001")),
    )


if __name__ == "__main__":
    main()
