"""Domain models for the credential store."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict


@dataclass(slots=True)
class User:
    name: str = ""
    access_key: str = ""
    secret_key: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "User":
        # Field names in existing config files are not always capitalized the same way.
        lowered = {str(key).lower(): value for key, value in data.items()}
        return cls(
            name=_string_field(lowered, "name"),
            access_key=_string_field(lowered, "accesskey"),
            secret_key=_string_field(lowered, "secretkey"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "Name": self.name,
            "AccessKey": self.access_key,
            "SecretKey": self.secret_key,
        }

    def is_empty(self) -> bool:
        return not (self.name or self.access_key or self.secret_key)


def _string_field(data: Dict[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"field {key!r} must be a string, got {type(value).__name__}")
    return value
