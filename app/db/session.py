"""Async database engine, session factory and audit hooks."""

import logging
from typing import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase, Session

from app.core.config import get_settings
from app.core.security import utcnow

logger = logging.getLogger(__name__)
settings = get_settings()

ACTOR_KEY = "actor"


class Base(DeclarativeBase):
    """Declarative base for all models."""


engine = create_async_engine(
    settings.database_url,
    echo=settings.debug,
    future=True,
)

AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    """SQLite ignores ON DELETE CASCADE / SET NULL unless asked."""
    module = type(dbapi_connection).__module__
    if "sqlite" not in module:
        return
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@event.listens_for(Session, "before_flush")
def _touch_audit_fields(session: Session, flush_context, instances) -> None:
    """Stamp created/updated audit columns on every flushed entity."""
    from app.models.base import AuditMixin

    now = utcnow()
    actor = session.info.get(ACTOR_KEY)

    for obj in session.new:
        if isinstance(obj, AuditMixin):
            obj.created_at = now
            if actor and not obj.created_by:
                obj.created_by = actor

    for obj in session.dirty:
        if isinstance(obj, AuditMixin) and session.is_modified(obj, include_collections=False):
            obj.updated_at = now
            if actor:
                obj.updated_by = actor


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Yield a session per request.

    Commits when the handler returns, rolls back on any exception.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_db() -> None:
    """Create tables that do not exist yet."""
    from app import models  # noqa: F401  (populate metadata)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db() -> None:
    await engine.dispose()
