"""User use cases.

Registration and updates check email availability up front so the caller
gets a clear error. That check races with concurrent writes; the
repository's uniqueness enforcement is what actually holds.
"""

from __future__ import annotations

import logging

from app.dtos.users import RegisterUserDTO, UpdateUserDTO
from app.models.errors import EmailAlreadyExistsError, ValidationError
from app.models.user import User, normalize_email
from app.repos.user_repo import UserRepo
from app.services.auth_service import PasswordHasher

logger = logging.getLogger(__name__)


def _hash_checked(hasher: PasswordHasher, plain_password: str) -> str:
    if not plain_password:
        raise ValidationError("Password cannot be empty")
    return hasher.hash(plain_password)


class RegisterUserUseCase:
    def __init__(self, repository: UserRepo, hasher: PasswordHasher):
        self.repository = repository
        self.hasher = hasher

    def execute(self, dto: RegisterUserDTO) -> User:
        email = normalize_email(dto.email)
        if self.repository.get_by_email(email) is not None:
            logger.warning("Registration rejected, email taken email=%s", email)
            raise EmailAlreadyExistsError(email)

        user = User(dto.email, dto.name, list(dto.roles))
        user.password = _hash_checked(self.hasher, dto.password)

        self.repository.save(user)
        logger.info("Registered user id=%s email=%s", user.id, user.email)
        return user


class UpdateUserUseCase:
    def __init__(self, repository: UserRepo, hasher: PasswordHasher):
        self.repository = repository
        self.hasher = hasher

    def execute(self, user_id: int, dto: UpdateUserDTO) -> User | None:
        user = self.repository.get_by_id(user_id)
        if user is None:
            return None

        if dto.name is not None:
            user.name = dto.name

        if dto.email is not None:
            email = normalize_email(dto.email)
            existing = self.repository.get_by_email(email)
            if existing is not None and existing.id != user_id:
                logger.warning(
                    "Update rejected, email taken user=%s email=%s", user_id, email
                )
                raise EmailAlreadyExistsError(email)
            user.email = dto.email

        if dto.password is not None:
            user.password = _hash_checked(self.hasher, dto.password)

        if dto.roles is not None:
            user.roles = list(dto.roles)

        self.repository.save(user)
        logger.info("Updated user id=%s", user_id)
        return user


class DeleteUserUseCase:
    def __init__(self, repository: UserRepo):
        self.repository = repository

    def execute(self, user_id: int) -> bool:
        user = self.repository.get_by_id(user_id)
        if user is None:
            return False
        self.repository.delete(user)
        logger.info("Deleted user id=%s", user_id)
        return True


class ToggleUserStatusUseCase:
    def __init__(self, repository: UserRepo):
        self.repository = repository

    def execute(self, user_id: int, enabled: bool) -> User | None:
        user = self.repository.get_by_id(user_id)
        if user is None:
            return None
        user.enabled = enabled
        self.repository.save(user)
        logger.info("Set enabled=%s for user id=%s", enabled, user_id)
        return user


class GetUserUseCase:
    def __init__(self, repository: UserRepo):
        self.repository = repository

    def execute(self, user_id: int) -> User | None:
        return self.repository.get_by_id(user_id)


class GetAllUsersUseCase:
    def __init__(self, repository: UserRepo):
        self.repository = repository

    def execute(self) -> list[User]:
        return self.repository.list_all()
