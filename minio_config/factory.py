"""Flask application factory."""
from __future__ import annotations

import threading
from typing import Optional

from flask import Flask

from .routes.api import api_bp
from .services import Machine, open_store


def create_app(machine: Optional[Machine] = None) -> Flask:
    app = Flask(__name__)
    app.config["CREDENTIAL_STORE"] = open_store(machine or Machine())
    # Requests are served on several threads; the store's in-memory users are not locked.
    app.config["CREDENTIAL_STORE_LOCK"] = threading.Lock()
    app.register_blueprint(api_bp)
    return app
