from __future__ import annotations

import copy
from typing import Protocol

from app.models.errors import EmailAlreadyExistsError
from app.models.user import User


class UserRepo(Protocol):
    def save(self, user: User) -> None: ...
    def get_by_id(self, user_id: int) -> User | None: ...
    def get_by_email(self, email: str) -> User | None: ...
    def list_all(self) -> list[User]: ...
    def delete(self, user: User) -> None: ...


class InMemoryUserRepo:
    def __init__(self) -> None:
        self._by_id: dict[int, User] = {}
        self._id_by_email: dict[str, int] = {}
        self._next_id = 1

    def save(self, user: User) -> None:
        # Storage-level uniqueness, the same guarantee a unique index gives.
        owner = self._id_by_email.get(user.email)
        if owner is not None and owner != user.id:
            raise EmailAlreadyExistsError(user.email)

        if user.id is None:
            user.assign_id(self._next_id)
        self._next_id = max(self._next_id, user.id + 1)  # type: ignore[operator]

        previous = self._by_id.get(user.id)  # type: ignore[arg-type]
        if previous is not None and previous.email != user.email:
            self._id_by_email.pop(previous.email, None)

        self._by_id[user.id] = copy.deepcopy(user)  # type: ignore[index]
        self._id_by_email[user.email] = user.id  # type: ignore[assignment]

    def get_by_id(self, user_id: int) -> User | None:
        user = self._by_id.get(user_id)
        return copy.deepcopy(user) if user is not None else None

    def get_by_email(self, email: str) -> User | None:
        user_id = self._id_by_email.get(email)
        if user_id is None:
            return None
        return self.get_by_id(user_id)

    def list_all(self) -> list[User]:
        return [copy.deepcopy(u) for u in self._by_id.values()]

    def delete(self, user: User) -> None:
        if user.id is None:
            return
        stored = self._by_id.pop(user.id, None)
        if stored is not None:
            self._id_by_email.pop(stored.email, None)

    def clear(self) -> None:
        self._by_id.clear()
        self._id_by_email.clear()
        self._next_id = 1
