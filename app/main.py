from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.auth import router as auth_router
from app.api.dependencies import user_repo
from app.api.errors import install_error_handlers
from app.api.health import router as health_router
from app.api.metrics_endpoint import router as metrics_router
from app.api.products import router as products_router
from app.api.users import router as users_router
from app.core.config import SETTINGS
from app.core.logging import setup_logging
from app.db.engine import engine, lifespan_db
from app.middleware.metrics import MetricsMiddleware
from app.middleware.request_context import RequestContextMiddleware
from app.models.user import ROLE_ADMIN, User
from app.services import auth_service

setup_logging(SETTINGS.log_level, json_format=SETTINGS.log_json)

logger = logging.getLogger(__name__)

DEV_ADMIN_EMAIL = "admin@example.com"
DEV_ADMIN_PASSWORD = "admin-password"


def _seed_dev_admin() -> None:
    """Give a fresh in-memory dev instance an admin to log in with."""
    if user_repo.get_by_email(DEV_ADMIN_EMAIL) is not None:
        return
    admin = User(DEV_ADMIN_EMAIL, "Admin", [ROLE_ADMIN])
    admin.password = auth_service.hash_password(DEV_ADMIN_PASSWORD)
    user_repo.save(admin)
    logger.info("Seeded dev admin email=%s", DEV_ADMIN_EMAIL)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    async with lifespan_db():
        yield


if SETTINGS.is_dev and engine is None:
    _seed_dev_admin()

app = FastAPI(
    title="catalog-admin",
    lifespan=lifespan,
    docs_url="/docs" if SETTINGS.is_dev else None,
    redoc_url="/redoc" if SETTINGS.is_dev else None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(SETTINGS.cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Last added runs first: RequestContext -> Metrics -> CORS -> route
app.add_middleware(MetricsMiddleware)
app.add_middleware(RequestContextMiddleware)

install_error_handlers(app)

app.include_router(metrics_router)
app.include_router(health_router)
app.include_router(auth_router)
app.include_router(products_router)
app.include_router(users_router)

logger.info(
    "catalog-admin started  env=%s log_level=%s port=%d storage=%s",
    SETTINGS.app_env,
    SETTINGS.log_level,
    SETTINGS.port,
    "sql" if engine is not None else "memory",
)
