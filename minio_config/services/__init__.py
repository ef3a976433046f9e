"""Service-layer exports."""
from .config_store import CredentialStore, load_key, load_user, load_users, open_store
from .errors import ConfigDecodeError, ConfigEncodeError, ConfigError, ConfigIOError
from .locks import ReadWriteLock
from .machine import Machine
from .models import User

__all__ = [
    "ConfigDecodeError",
    "ConfigEncodeError",
    "ConfigError",
    "ConfigIOError",
    "CredentialStore",
    "Machine",
    "ReadWriteLock",
    "User",
    "load_key",
    "load_user",
    "load_users",
    "open_store",
]
