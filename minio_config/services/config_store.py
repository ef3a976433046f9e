"""User credentials persisted as JSON under ``~/.minio/config.json``."""
from __future__ import annotations

import dataclasses
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from .errors import ConfigDecodeError, ConfigEncodeError, ConfigError, ConfigIOError
from .locks import ReadWriteLock
from .machine import Machine
from .models import User

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "config.json"


class CredentialStore:
    """In-memory users keyed by access key, backed by a single config file.

    ``save`` and ``load`` serialize against each other through a per-store
    reader/writer lock. The lookup helpers and ``add_user`` are not locked.
    """

    def __init__(self, machine: Optional[Machine] = None) -> None:
        self._machine = machine or Machine()
        self._lock = ReadWriteLock()
        self.config_directory: Optional[Path] = None
        self.config_file: Optional[Path] = None
        self.users: Dict[str, User] = {}

    # ------------------------------------------------------------------
    # Setup
    # ------------------------------------------------------------------

    def initialize(self) -> None:
        """Create the config directory and an empty config file if missing."""
        try:
            directory = self._machine.config_path()
        except (RuntimeError, KeyError) as exc:
            raise ConfigIOError(f"cannot resolve home directory: {exc}") from exc
        try:
            directory.mkdir(mode=0o700, parents=True, exist_ok=True)
        except OSError as exc:
            raise ConfigIOError(f"cannot create config directory: {exc}", path=directory) from exc

        self.config_directory = directory
        self.config_file = directory / CONFIG_FILE_NAME
        if not self.config_file.exists():
            try:
                self.config_file.touch(mode=0o600)
            except OSError as exc:
                raise ConfigIOError(
                    f"cannot create config file: {exc}", path=self.config_file
                ) from exc
            logger.debug("Created empty config file %s", self.config_file)

    def config_dir(self) -> Optional[Path]:
        """Directory holding the config file; ``None`` until ``initialize`` ran."""
        return self.config_directory

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def has_user(self, name: str) -> bool:
        return any(user.name == name for user in self.users.values())

    def lookup_by_access_key(self, access_key: str) -> User:
        return self.find_by_access_key(access_key) or User()

    def lookup_by_name(self, name: str) -> User:
        return self.find_by_name(name) or User()

    def find_by_access_key(self, access_key: str) -> Optional[User]:
        user = self.users.get(access_key)
        return dataclasses.replace(user) if user is not None else None

    def find_by_name(self, name: str) -> Optional[User]:
        for user in self.users.values():
            if user.name == name:
                return dataclasses.replace(user)
        return None

    def add_user(self, user: User) -> None:
        self.users[user.access_key] = dataclasses.replace(user)

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save(self) -> None:
        """Overwrite the config file with the in-memory users.

        The write is not atomic: a crash halfway through leaves a truncated file.
        """
        config_file = self._require_config_file()
        with self._lock.write_locked():
            users = dict(self.users)
            try:
                payload = json.dumps(
                    {access_key: user.to_dict() for access_key, user in users.items()}
                )
            except (TypeError, ValueError) as exc:
                raise ConfigEncodeError(f"cannot encode users: {exc}", path=config_file) from exc

            try:
                # Never creates the file; initialize() owns that.
                fd = os.open(config_file, os.O_WRONLY | os.O_TRUNC)
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(payload + "\n")
            except OSError as exc:
                raise ConfigIOError(f"cannot write config file: {exc}", path=config_file) from exc

            logger.debug("Saved %d user(s) to %s", len(users), config_file)

    def load(self) -> None:
        """Replace the in-memory users with the config file contents.

        An empty file leaves the current users untouched.
        """
        config_file = self._require_config_file()
        with self._lock.read_locked():
            try:
                raw = config_file.read_text(encoding="utf-8")
            except UnicodeDecodeError as exc:
                raise ConfigDecodeError(f"config file is not UTF-8: {exc}", path=config_file) from exc
            except OSError as exc:
                raise ConfigIOError(f"cannot read config file: {exc}", path=config_file) from exc

            users = _decode_users(raw, config_file)
            if users is None:
                logger.debug("Config file %s is empty", config_file)
                return
            self.users = users
            logger.debug("Loaded %d user(s) from %s", len(users), config_file)

    def _require_config_file(self) -> Path:
        if self.config_file is None:
            raise ConfigError("config store is not initialized")
        return self.config_file


def _decode_users(raw: str, path: Path) -> Optional[Dict[str, User]]:
    text = raw.lstrip()
    if not text:
        return None

    # Only the first JSON value counts; files written without truncation may
    # carry stale bytes after it.
    try:
        payload, _ = json.JSONDecoder().raw_decode(text)
    except json.JSONDecodeError as exc:
        raise ConfigDecodeError(f"malformed config file: {exc}", path=path) from exc

    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ConfigDecodeError("config file must hold a JSON object", path=path)

    users: Dict[str, User] = {}
    for access_key, entry in payload.items():
        users[access_key] = _decode_user(entry, path)
    return users


def _decode_user(entry: Any, path: Path) -> User:
    if entry is None:
        return User()
    if not isinstance(entry, dict):
        raise ConfigDecodeError("user entries must be JSON objects", path=path)
    try:
        return User.from_dict(entry)
    except ValueError as exc:
        raise ConfigDecodeError(f"invalid user entry: {exc}", path=path) from exc


# ----------------------------------------------------------------------
# Convenience helpers
# ----------------------------------------------------------------------


def open_store(machine: Optional[Machine] = None) -> CredentialStore:
    """Return an initialized and loaded store, raising on any failure."""
    store = CredentialStore(machine)
    store.initialize()
    store.load()
    return store


def _lenient_store(machine: Optional[Machine]) -> CredentialStore:
    store = CredentialStore(machine)
    try:
        store.initialize()
        store.load()
    except ConfigError as exc:
        logger.warning("Ignoring config error, continuing with %d user(s): %s", len(store.users), exc)
    return store


def load_users(machine: Optional[Machine] = None) -> Dict[str, User]:
    """All users keyed by access key. Errors are logged and swallowed."""
    return _lenient_store(machine).users


def load_key(access_key: str, machine: Optional[Machine] = None) -> User:
    return _lenient_store(machine).lookup_by_access_key(access_key)


def load_user(name: str, machine: Optional[Machine] = None) -> User:
    return _lenient_store(machine).lookup_by_name(name)
