"""Liveness (/health) and readiness (/ready) probes.

/health only answers whether the process is up. /ready also checks that
the database, when one is configured, accepts a query.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Response, status
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from app.db import engine as db

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
def health() -> dict:
    return {"status": "ok"}


@router.get("/ready")
def ready(response: Response) -> dict:
    if db.engine is None:
        return {"status": "ok", "checks": {"database": "not_configured"}}

    try:
        with db.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.warning("Readiness check failed: %s", e)
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return {"status": "degraded", "checks": {"database": "error"}}

    return {"status": "ok", "checks": {"database": "ok"}}
