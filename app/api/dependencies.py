from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Annotated, Any

import jwt
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer

from app.db.engine import session_factory, session_scope
from app.models.principal import Principal
from app.repos.product_repo import InMemoryProductRepo, ProductRepo
from app.repos.sql_product_repo import SqlProductRepo
from app.repos.sql_user_repo import SqlUserRepo
from app.repos.user_repo import InMemoryUserRepo, UserRepo
from app.services import token_service

logger = logging.getLogger(__name__)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/login")

# ---------------------------------------------------------------------------
# Repositories: in-memory singletons unless DATABASE_URL is configured
# ---------------------------------------------------------------------------

product_repo = InMemoryProductRepo()
user_repo = InMemoryUserRepo()


def get_product_repo() -> Iterator[ProductRepo]:
    if session_factory is None:
        yield product_repo
        return
    with session_scope() as session:
        yield SqlProductRepo(session)


def get_user_repo() -> Iterator[UserRepo]:
    if session_factory is None:
        yield user_repo
        return
    with session_scope() as session:
        yield SqlUserRepo(session)


# ---------------------------------------------------------------------------
# Request bodies
# ---------------------------------------------------------------------------

_MISSING = object()


async def json_payload(request: Request) -> Any:
    """Parsed JSON body, or a sentinel when the body is not valid JSON."""
    try:
        return await request.json()
    except ValueError:
        return _MISSING


async def json_object_body(
    payload: Annotated[Any, Depends(json_payload)],
) -> dict[str, Any]:
    """A non-empty JSON object body; anything else is a 400."""
    if payload is _MISSING or not isinstance(payload, dict) or not payload:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid JSON",
        )
    return payload


# ---------------------------------------------------------------------------
# Authentication / authorization
# ---------------------------------------------------------------------------


def require_user(
    raw_token: Annotated[str, Depends(oauth2_scheme)],
) -> Principal:
    """Validate the bearer token and return the caller's Principal."""
    try:
        claims = token_service.decode_access_token(raw_token)
    except jwt.ExpiredSignatureError:
        logger.warning("Expired token rejected")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token expired",
            headers={"WWW-Authenticate": "Bearer"},
        ) from None
    except jwt.InvalidTokenError as e:
        logger.warning("Invalid token rejected: %s", e)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        ) from None

    return Principal(
        user_id=claims["sub"],
        email=claims.get("email", ""),
        roles=frozenset(claims.get("roles", [])),
    )


def require_role(role: str):
    """Dependency factory: 403 unless the caller holds *role*.

    Usage: Depends(require_role(ROLE_ADMIN))
    """

    def _guard(
        principal: Annotated[Principal, Depends(require_user)],
    ) -> Principal:
        if not principal.has_role(role):
            logger.warning(
                "Access denied: user=%s missing role=%s",
                principal.user_id,
                role,
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Access denied",
            )
        return principal

    return _guard
