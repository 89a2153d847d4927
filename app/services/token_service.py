"""JWT access tokens (ES256).

Issued by POST /api/login and verified by the require_user dependency.
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime, timedelta

import jwt
from cryptography.hazmat.primitives.asymmetric import ec

from app.core.config import SETTINGS
from app.models.user import ROLE_USER

# Ephemeral key pair: tokens do not survive a restart.
# TODO: load the signing key from a file or secret store for multi-instance deploys.
_private_key = ec.generate_private_key(ec.SECP256R1())
_public_key = _private_key.public_key()

ALGORITHM = "ES256"
ISSUER = "catalog-admin"
AUDIENCE = "catalog-admin"


def create_access_token(
    *,
    sub: str,
    email: str = "",
    roles: list[str] | None = None,
    ttl_min: int | None = None,
) -> str:
    now = datetime.now(UTC)
    ttl = ttl_min if ttl_min is not None else SETTINGS.jwt_ttl_min
    payload = {
        "sub": sub,
        "email": email,
        "roles": roles or [ROLE_USER],
        "iss": ISSUER,
        "aud": AUDIENCE,
        "exp": now + timedelta(minutes=ttl),
        "iat": now,
        "jti": str(uuid.uuid4()),
    }
    return jwt.encode(payload, _private_key, algorithm=ALGORITHM)


def decode_access_token(token: str) -> dict:
    """Verify signature and claims and return the payload.

    The algorithm is pinned to ES256. Raises jwt.ExpiredSignatureError or
    jwt.InvalidTokenError.
    """
    return jwt.decode(
        token,
        _public_key,
        algorithms=[ALGORITHM],
        issuer=ISSUER,
        audience=AUDIENCE,
        options={"require": ["sub", "exp", "iat", "jti"]},
    )
