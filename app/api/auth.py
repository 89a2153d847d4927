"""Registration and login (/api/register, /api/login).

Login returns ``{"token": "<jwt>"}``; the admin frontend sends it back as
``Authorization: Bearer <jwt>``.
"""

from __future__ import annotations

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from app.api.dependencies import get_user_repo, json_object_body
from app.core.metrics import LOGIN_ATTEMPTS
from app.dtos.coerce import as_str
from app.dtos.users import RegisterUserDTO
from app.models.errors import EmailAlreadyExistsError, ValidationError
from app.repos.user_repo import UserRepo
from app.services import auth_service, token_service
from app.use_cases.users import RegisterUserUseCase

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["auth"])

Repo = Annotated[UserRepo, Depends(get_user_repo)]
JsonBody = Annotated[dict[str, Any], Depends(json_object_body)]


class RegisteredUserOut(BaseModel):
    id: int
    email: str
    name: str
    roles: list[str]


class RegisterOut(BaseModel):
    message: str
    user: RegisteredUserOut


class TokenOut(BaseModel):
    token: str


@router.post(
    "/register",
    response_model=RegisterOut,
    status_code=status.HTTP_201_CREATED,
)
def register(payload: JsonBody, repo: Repo) -> RegisterOut:
    dto = RegisterUserDTO.from_dict(payload)
    try:
        user = RegisterUserUseCase(repo, auth_service.Argon2PasswordHasher()).execute(dto)
    except (ValidationError, EmailAlreadyExistsError) as e:
        logger.warning("Registration rejected: %s", e)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from None

    return RegisterOut(
        message="User registered successfully",
        user=RegisteredUserOut(
            id=user.id,  # type: ignore[arg-type]
            email=user.email,
            name=user.name,
            roles=user.roles,
        ),
    )


@router.post("/login", response_model=TokenOut)
def login(payload: JsonBody, repo: Repo) -> TokenOut:
    email = as_str(payload.get("email"), "")
    password = as_str(payload.get("password"), "")

    user = auth_service.authenticate_user(repo, email, password)
    if user is None:
        LOGIN_ATTEMPTS.labels(result="failure").inc()
        logger.warning("Login failed  email=%s", email)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )

    LOGIN_ATTEMPTS.labels(result="success").inc()
    logger.info("Login succeeded  user_id=%s email=%s", user.id, user.email)
    token = token_service.create_access_token(
        sub=str(user.id),
        email=user.email,
        roles=user.roles,
    )
    return TokenOut(token=token)
