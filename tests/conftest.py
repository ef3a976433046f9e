from __future__ import annotations

from pathlib import Path
import pytest

from minio_config.services import CredentialStore, Machine


@pytest.fixture()
def home(tmp_path: Path) -> Path:
    """
    a throwaway home directory. the config lands in home/.minio/config.json.
    """
    path = tmp_path / "home"
    path.mkdir()
    return path


@pytest.fixture()
def machine(home: Path) -> Machine:
    return Machine(home=str(home))


@pytest.fixture()
def store(machine: Machine) -> CredentialStore:
    store = CredentialStore(machine)
    store.initialize()
    return store
