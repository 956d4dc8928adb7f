import logging
from pathlib import Path
from typing import AsyncGenerator, Optional

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from bepo.core.settings import get_settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


# Global engine/session factory
_async_engine: Optional[AsyncEngine] = None
_async_session_factory: Optional[async_sessionmaker[AsyncSession]] = None


def init_db() -> AsyncEngine:
    global _async_engine, _async_session_factory

    settings = get_settings()
    url = make_url(settings.database_url)

    connect_args = {}
    if url.drivername.startswith("sqlite"):
        if url.database and url.database != ":memory:":
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)
    elif url.drivername == "postgresql+asyncpg":
        # asyncpg does not understand libpq query options
        query = dict(url.query)
        mode = query.pop("sslmode", None)
        if mode in ("require", "verify-full"):
            connect_args["ssl"] = "require"
        elif mode == "disable":
            connect_args["ssl"] = False
        query.pop("channel_binding", None)
        url = url.set(query=query)

    logger.info("Connecting to database: %s", url.render_as_string(hide_password=True))
    _async_engine = create_async_engine(url, connect_args=connect_args, echo=False, pool_pre_ping=True)
    _async_session_factory = async_sessionmaker(_async_engine, expire_on_commit=False)
    return _async_engine


async def create_tables() -> None:
    if _async_engine is None:
        init_db()
    async with _async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine() -> None:
    global _async_engine, _async_session_factory
    if _async_engine is not None:
        await _async_engine.dispose()
    _async_engine = None
    _async_session_factory = None


async def check_db_health() -> dict:
    """Simple connectivity check: SELECT 1."""
    if _async_engine is None:
        return {"ok": False, "error": "Database not initialized"}

    try:
        async with _async_engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return {"ok": True, "driver": _async_engine.driver}
    except Exception as exc:
        logger.error("DB health check failed: %s", exc)
        return {"ok": False, "error": str(exc)}


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    if _async_session_factory is None:
        init_db()
    async with _async_session_factory() as session:
        yield session
