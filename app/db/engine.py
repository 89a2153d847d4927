"""SQLAlchemy engine and session factory.

When DATABASE_URL is set this module provides the engine, a session
factory and ``session_scope()``. When it is not set, ``engine`` and
``session_factory`` are None and the app uses in-memory repositories.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator, Iterator
from contextlib import asynccontextmanager, contextmanager

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from app.core.config import SETTINGS

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Declarative base for all table models."""


def build_engine(url: str, *, echo: bool = False) -> Engine:
    if url.startswith("sqlite"):
        return create_engine(url, echo=echo)
    return create_engine(url, echo=echo, pool_size=5, max_overflow=10)


def build_session_factory(bind: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=bind, expire_on_commit=False)


if SETTINGS.database_url:
    engine: Engine | None = build_engine(SETTINGS.database_url, echo=SETTINGS.is_dev)
    session_factory: sessionmaker[Session] | None = build_session_factory(engine)
else:
    engine = None
    session_factory = None


@contextmanager
def session_scope() -> Iterator[Session]:
    """Yield a request-scoped session; commit on success, roll back on error."""
    if session_factory is None:
        raise RuntimeError(
            "DATABASE_URL is not configured, cannot create a database session"
        )
    with session_factory() as session:
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise


@asynccontextmanager
async def lifespan_db() -> AsyncGenerator[None, None]:
    if engine is None:
        logger.info("No DATABASE_URL configured, using in-memory repositories")
        yield
        return

    logger.info("Database engine created: %s", engine.url.render_as_string())
    yield
    engine.dispose()
    logger.info("Database engine disposed")
