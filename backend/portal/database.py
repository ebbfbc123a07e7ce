"""
Campus Portal Backend: Database Connection Management
======================================================

What:  Async SQLAlchemy engine, session factory, startup connect and the
       per-request session dependency.
How:   The engine is created at import from `settings.database_url`.
       `connect()` is fired once when the server starts; route groups that
       need persistence depend on `get_db_session()`.
When:  Engine at import; sessions per request; disposal at shutdown.
"""

import logging
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from portal.config import settings
from portal.exceptions import DatabaseError

logger = logging.getLogger(__name__)


# ── Engine Configuration ──────────────────────────────────────────────────
engine = create_async_engine(
    settings.database_url,
    pool_pre_ping=True,   # Validate connections before use
    pool_recycle=3600,    # Recycle after 1 hour
    echo=settings.log_level == "DEBUG",
)

# ── Session Factory ───────────────────────────────────────────────────────
# expire_on_commit=False: attributes stay readable after commit
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """Base class for the ORM models of the route groups."""
    pass


# ── Startup Connect ───────────────────────────────────────────────────────
async def connect() -> bool:
    """
    Open a connection to the database and run a trivial query.

    Called once, fire-and-forget, when the server starts. Failures are
    logged and reported through the return value; nothing is retried and
    nothing is raised, so a missing database never stops the HTTP server.

    Returns:
        True if the database answered, False otherwise.
    """
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        logger.error("Database connection failed: %s", str(e))
        return False

    logger.info("Database connected (%s)", engine.url.render_as_string(hide_password=True))
    return True


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the route handler
        3. On success: commits the transaction
        4. On error: rolls back; SQLAlchemy errors surface as DatabaseError,
           anything else is re-raised unchanged
        5. Always: closes the session

    Example usage in a route group:
        @router.get("/students")
        async def list_students(db: AsyncSession = Depends(get_db_session)):
            ...
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except SQLAlchemyError as e:
            await session.rollback()
            raise DatabaseError(context={"reason": str(e)}) from e
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def dispose_engine() -> None:
    """Closes all pooled connections. Called during application shutdown."""
    await engine.dispose()
