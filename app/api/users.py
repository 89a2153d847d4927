"""User management endpoints under /api/users. Every route requires ROLE_ADMIN."""

from __future__ import annotations

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, Response, status
from pydantic import BaseModel

from app.api.dependencies import (
    get_user_repo,
    json_object_body,
    json_payload,
    require_role,
)
from app.dtos.users import UpdateUserDTO
from app.models.errors import EmailAlreadyExistsError, ValidationError
from app.models.user import ROLE_ADMIN, User
from app.repos.user_repo import UserRepo
from app.services.auth_service import Argon2PasswordHasher
from app.use_cases.users import (
    DeleteUserUseCase,
    GetAllUsersUseCase,
    GetUserUseCase,
    ToggleUserStatusUseCase,
    UpdateUserUseCase,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/users",
    tags=["users"],
    dependencies=[Depends(require_role(ROLE_ADMIN))],
)

Repo = Annotated[UserRepo, Depends(get_user_repo)]


class UserOut(BaseModel):
    id: int
    email: str
    name: str
    roles: list[str]
    enabled: bool
    createdAt: str


class UserStatusOut(BaseModel):
    id: int
    enabled: bool
    message: str


def _out(user: User) -> UserOut:
    return UserOut.model_validate(user.to_dict())


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")


@router.get("", response_model=list[UserOut])
def list_users(repo: Repo) -> list[UserOut]:
    return [_out(u) for u in GetAllUsersUseCase(repo).execute()]


@router.get("/{user_id}", response_model=UserOut)
def get_user(user_id: int, repo: Repo) -> UserOut:
    user = GetUserUseCase(repo).execute(user_id)
    if user is None:
        raise _not_found()
    return _out(user)


@router.put("/{user_id}", response_model=UserOut)
def update_user(
    user_id: int,
    payload: Annotated[dict[str, Any], Depends(json_object_body)],
    repo: Repo,
) -> UserOut:
    dto = UpdateUserDTO.from_dict(payload)
    try:
        user = UpdateUserUseCase(repo, Argon2PasswordHasher()).execute(user_id, dto)
    except (ValidationError, EmailAlreadyExistsError) as e:
        logger.warning("Update rejected for user id=%s: %s", user_id, e)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from None
    if user is None:
        raise _not_found()
    return _out(user)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
def delete_user(user_id: int, repo: Repo) -> Response:
    if not DeleteUserUseCase(repo).execute(user_id):
        raise _not_found()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/{user_id}/toggle-status", response_model=UserStatusOut)
def toggle_user_status(
    user_id: int,
    payload: Annotated[Any, Depends(json_payload)],
    repo: Repo,
) -> UserStatusOut:
    enabled = payload.get("enabled") if isinstance(payload, dict) else None
    if not isinstance(enabled, bool):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail='Field "enabled" is required and must be a boolean',
        )

    user = ToggleUserStatusUseCase(repo).execute(user_id, enabled)
    if user is None:
        raise _not_found()

    return UserStatusOut(
        id=user.id,  # type: ignore[arg-type]
        enabled=user.enabled,
        message="User enabled successfully" if user.enabled else "User disabled successfully",
    )
