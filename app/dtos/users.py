from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from app.dtos.coerce import as_str, as_str_list


@dataclass(frozen=True, slots=True)
class RegisterUserDTO:
    email: str
    password: str
    name: str
    roles: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RegisterUserDTO:
        return cls(
            email=as_str(data.get("email"), ""),
            password=as_str(data.get("password"), ""),
            name=as_str(data.get("name"), ""),
            roles=tuple(as_str_list(data.get("roles"), [])),
        )


@dataclass(frozen=True, slots=True)
class UpdateUserDTO:
    """Partial update. ``None`` means "leave unchanged"."""

    email: str | None = None
    password: str | None = None
    name: str | None = None
    roles: tuple[str, ...] | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> UpdateUserDTO:
        roles = as_str_list(data.get("roles"), None)
        return cls(
            email=as_str(data.get("email"), None),
            password=as_str(data.get("password"), None),
            name=as_str(data.get("name"), None),
            roles=tuple(roles) if roles is not None else None,
        )
