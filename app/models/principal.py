from __future__ import annotations

from dataclasses import dataclass

from app.models.user import ROLE_ADMIN


@dataclass(frozen=True, slots=True)
class Principal:
    """Caller identity taken from a validated access token.

    user_id: token subject (stringified user id)
    email:   login email at the time the token was issued
    roles:   effective roles carried in the token
    """

    user_id: str
    email: str
    roles: frozenset[str]

    def has_role(self, role: str) -> bool:
        return role in self.roles

    def is_admin(self) -> bool:
        return ROLE_ADMIN in self.roles
