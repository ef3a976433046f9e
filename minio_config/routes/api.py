"""REST API routes for the Flask application."""
from __future__ import annotations

from contextlib import contextmanager
from http import HTTPStatus
from typing import Any, Dict, Iterator

from flask import Blueprint, current_app, jsonify, request

from ..services.config_store import CredentialStore
from ..services.errors import ConfigError
from ..services.models import User

api_bp = Blueprint("api", __name__, url_prefix="/api")


@contextmanager
def _locked_store() -> Iterator[CredentialStore]:
    with current_app.config["CREDENTIAL_STORE_LOCK"]:
        yield current_app.config["CREDENTIAL_STORE"]


@api_bp.errorhandler(ConfigError)
def _handle_config_error(exc: ConfigError):
    payload = {"error": str(exc)}
    if exc.path is not None:
        payload["path"] = str(exc.path)
    return jsonify(payload), HTTPStatus.INTERNAL_SERVER_ERROR


@api_bp.get("/users")
def list_users():
    with _locked_store() as store:
        users = dict(store.users)
    return jsonify({"users": {key: _public(user) for key, user in users.items()}})


@api_bp.get("/users/<access_key>")
def get_user(access_key: str):
    with _locked_store() as store:
        user = store.find_by_access_key(access_key)
    if user is None:
        return jsonify({"user": None}), HTTPStatus.NOT_FOUND
    return jsonify({"user": _public(user)})


@api_bp.get("/users/by-name/<name>")
def get_user_by_name(name: str):
    with _locked_store() as store:
        user = store.find_by_name(name)
    if user is None:
        return jsonify({"user": None}), HTTPStatus.NOT_FOUND
    return jsonify({"user": _public(user)})


@api_bp.post("/users")
def add_user():
    data = request.get_json(force=True, silent=True)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        return jsonify({"error": "request body must be a JSON object"}), HTTPStatus.BAD_REQUEST
    fields = {key: data.get(key) for key in ("name", "accessKey", "secretKey")}
    if any(value is not None and not isinstance(value, str) for value in fields.values()):
        return jsonify({"error": "name, accessKey and secretKey must be strings"}), HTTPStatus.BAD_REQUEST
    if not fields["accessKey"]:
        return jsonify({"error": "accessKey is required"}), HTTPStatus.BAD_REQUEST

    user = User(
        name=fields["name"] or "",
        access_key=fields["accessKey"],
        secret_key=fields["secretKey"] or "",
    )
    with _locked_store() as store:
        store.add_user(user)
        store.save()
    return jsonify({"user": _public(user)}), HTTPStatus.CREATED


def _public(user: User) -> Dict[str, Any]:
    return {"name": user.name, "accessKey": user.access_key}
