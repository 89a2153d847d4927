from __future__ import annotations

import logging
from typing import Protocol

from argon2 import PasswordHasher as _Argon2Hasher
from argon2.exceptions import InvalidHash, VerificationError, VerifyMismatchError

from app.models.user import User, normalize_email
from app.repos.user_repo import UserRepo

logger = logging.getLogger(__name__)

# Argon2 hash strings carry their own salt and parameters.
_ph = _Argon2Hasher()


class PasswordHasher(Protocol):
    def hash(self, plain_password: str) -> str: ...


class Argon2PasswordHasher:
    """PasswordHasher backed by argon2-cffi."""

    def hash(self, plain_password: str) -> str:
        return hash_password(plain_password)


def hash_password(plain_password: str) -> str:
    if not plain_password:
        raise ValueError("password must be non-empty")
    return _ph.hash(plain_password)


def verify_password(plain_password: str, password_hash: str) -> bool:
    if not plain_password or not password_hash:
        return False
    try:
        return _ph.verify(password_hash, plain_password)
    except (VerifyMismatchError, VerificationError, InvalidHash):
        return False


def authenticate_user(repo: UserRepo, email: str, password: str) -> User | None:
    """Return the user for valid credentials, else None.

    Disabled accounts never authenticate. A hash made with older argon2
    parameters is upgraded in place.
    """
    user = repo.get_by_email(normalize_email(email))
    if user is None:
        return None
    if not user.enabled:
        logger.info("Login refused for disabled user=%s", user.id)
        return None
    if not verify_password(password, user.password):
        return None

    try:
        if _ph.check_needs_rehash(user.password):
            user.password = _ph.hash(password)
            repo.save(user)
            logger.info("Rehashed password for user=%s", user.id)
    except InvalidHash:
        return None

    return user
