# app/infrastructure/db/database.py
from __future__ import annotations

from typing import AsyncGenerator, Optional

from sqlalchemy import MetaData, text
from sqlalchemy.pool import NullPool
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from app.core.settings import get_settings

settings = get_settings()


# --- Base with naming convention (удобно для Alembic) -----------------
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    metadata = MetaData(naming_convention=NAMING_CONVENTION)


DATABASE_URL: str = settings.DATABASE_URL or ""


# --- Engine & session factory -----------------------------------------
def _engine() -> AsyncEngine:
    kwargs = {
        "echo": bool(settings.DB_ECHO),
        "pool_pre_ping": True,
    }
    if DATABASE_URL.startswith("sqlite"):
        # sqlite (тесты): без пула, соединение не должно пережить event loop теста
        kwargs["poolclass"] = NullPool
    else:
        pool_opts: dict[str, Optional[int]] = {
            "pool_size": settings.DB_POOL_SIZE,
            "max_overflow": settings.DB_MAX_OVERFLOW,
            "pool_recycle": settings.DB_POOL_RECYCLE,
            "pool_timeout": settings.DB_POOL_TIMEOUT,
        }
        kwargs.update({k: int(v) for k, v in pool_opts.items() if v is not None})

    return create_async_engine(DATABASE_URL, **kwargs)


engine: AsyncEngine = _engine()

SessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


# --- FastAPI dependency ------------------------------------------------
async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Выдаёт AsyncSession на время запроса.
    """
    async with SessionLocal() as session:
        yield session


async def db_ping(session: AsyncSession) -> bool:
    """
    Быстрый пинг БД для health/ready.
    """
    try:
        await session.execute(text("SELECT 1"))
        return True
    except Exception:
        return False
