"""SQLAlchemy implementation of UserRepo."""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.db.tables import UserRow
from app.models.errors import EmailAlreadyExistsError
from app.models.user import User
from app.repos.sql_product_repo import as_utc

logger = logging.getLogger(__name__)


class SqlUserRepo:
    """Satisfies the UserRepo Protocol using a SQLAlchemy session.

    Email uniqueness is the ``users.email`` unique constraint; a violation
    rolls the session back and surfaces as EmailAlreadyExistsError.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def save(self, user: User) -> None:
        row = None
        if user.id is not None:
            row = self._session.get(UserRow, user.id)
        if row is None:
            row = UserRow(id=user.id)
            self._session.add(row)

        row.email = user.email
        row.name = user.name
        row.password = user.password
        row.roles = user.stored_roles
        row.enabled = user.enabled
        row.created_at = user.created_at

        try:
            self._session.flush()
        except IntegrityError:
            self._session.rollback()
            logger.warning("Unique constraint rejected email=%s", user.email)
            raise EmailAlreadyExistsError(user.email) from None

        if user.id is None:
            user.assign_id(row.id)

    def get_by_id(self, user_id: int) -> User | None:
        row = self._session.get(UserRow, user_id)
        if row is None:
            return None
        return _row_to_user(row)

    def get_by_email(self, email: str) -> User | None:
        stmt = select(UserRow).where(UserRow.email == email)
        row = self._session.scalars(stmt).one_or_none()
        if row is None:
            return None
        return _row_to_user(row)

    def list_all(self) -> list[User]:
        stmt = select(UserRow).order_by(UserRow.id)
        return [_row_to_user(row) for row in self._session.scalars(stmt)]

    def delete(self, user: User) -> None:
        if user.id is None:
            return
        row = self._session.get(UserRow, user.id)
        if row is not None:
            self._session.delete(row)
            self._session.flush()


def _row_to_user(row: UserRow) -> User:
    return User.restore(
        id=row.id,
        email=row.email,
        name=row.name,
        roles=list(row.roles) if row.roles else [],
        password=row.password,
        enabled=row.enabled,
        created_at=as_utc(row.created_at),
    )
