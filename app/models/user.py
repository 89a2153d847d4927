from __future__ import annotations

import re
from datetime import UTC, datetime

from app.models.errors import ValidationError
from app.models.product import TIMESTAMP_FORMAT

ROLE_USER = "ROLE_USER"
ROLE_ADMIN = "ROLE_ADMIN"

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _now() -> datetime:
    return datetime.now(UTC)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def _check_email(email: str) -> str:
    email = normalize_email(email)
    if not _EMAIL_RE.match(email):
        raise ValidationError("Invalid email address")
    return email


def _check_name(name: str) -> str:
    name = name.strip()
    if not name:
        raise ValidationError("Name cannot be empty")
    return name


class User:
    """Account that can log in; ``password`` always holds a hash.

    ``stored_roles`` is what gets persisted. ``roles`` is the effective
    view and always includes ROLE_USER.
    """

    def __init__(
        self,
        email: str,
        name: str,
        roles: list[str] | None = None,
        *,
        password: str = "",
    ) -> None:
        email = _check_email(email)
        name = _check_name(name)

        self._id: int | None = None
        self._email = email
        self._name = name
        self._stored_roles: list[str] = list(roles) if roles else [ROLE_USER]
        self._password = password
        self._enabled = True
        self._created_at = _now()

    @classmethod
    def restore(
        cls,
        *,
        id: int,
        email: str,
        name: str,
        roles: list[str],
        password: str,
        enabled: bool,
        created_at: datetime,
    ) -> User:
        user = cls.__new__(cls)
        user._id = id
        user._email = email
        user._name = name
        user._stored_roles = list(roles)
        user._password = password
        user._enabled = enabled
        user._created_at = created_at
        return user

    @property
    def id(self) -> int | None:
        return self._id

    def assign_id(self, user_id: int) -> None:
        if self._id is not None and self._id != user_id:
            raise ValueError(f"user already has id {self._id}")
        self._id = user_id

    @property
    def email(self) -> str:
        return self._email

    @email.setter
    def email(self, value: str) -> None:
        self._email = _check_email(value)

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, value: str) -> None:
        self._name = _check_name(value)

    @property
    def password(self) -> str:
        return self._password

    @password.setter
    def password(self, password_hash: str) -> None:
        self._password = password_hash

    @property
    def stored_roles(self) -> list[str]:
        return list(self._stored_roles)

    @property
    def roles(self) -> list[str]:
        # dict.fromkeys keeps first-seen order while dropping duplicates
        return list(dict.fromkeys([*self._stored_roles, ROLE_USER]))

    @roles.setter
    def roles(self, value: list[str]) -> None:
        self._stored_roles = list(value)

    def has_role(self, role: str) -> bool:
        return role in self.roles

    @property
    def enabled(self) -> bool:
        return self._enabled

    @enabled.setter
    def enabled(self, value: bool) -> None:
        self._enabled = value

    @property
    def created_at(self) -> datetime:
        return self._created_at

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self._id,
            "email": self._email,
            "name": self._name,
            "roles": self.roles,
            "enabled": self._enabled,
            "createdAt": self._created_at.strftime(TIMESTAMP_FORMAT),
        }

    def __repr__(self) -> str:
        return f"User(id={self._id!r}, email={self._email!r})"
