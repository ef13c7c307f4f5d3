# db.py
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    create_async_engine,
    async_sessionmaker,
)

from config import settings
from core.errors import StorageUnavailable
from db_base import Base

logger = logging.getLogger(__name__)


# ---------- Engine & Session (async) ----------

engine = create_async_engine(
    settings.DATABASE_URL,  # e.g. postgresql+asyncpg://...
    echo=settings.DEBUG,
    future=True,
)

AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
    autocommit=False,
)


# ---------- Optional init helper (for dev only) ----------

async def init_db() -> None:
    """
    Create tables from ORM metadata.

    In production, prefer Alembic migrations.
    """
    # Import models so they are registered on Base.metadata
    import db_models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


# ---------- Unit of work ----------

@asynccontextmanager
async def transaction(db: AsyncSession) -> AsyncGenerator[AsyncSession, None]:
    """
    Run one public operation as a single commit.

    Commits when the block exits cleanly. Any exception, cancellation
    included, rolls back everything flushed inside the block. Driver and
    ORM failures surface as StorageUnavailable.
    """
    try:
        yield db
        await db.commit()
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.exception("Storage failure, transaction rolled back")
        raise StorageUnavailable("The operation could not be completed, please retry") from exc
    except BaseException:
        await db.rollback()
        raise


# ---------- FastAPI dependency ----------

async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Provide an async DB session."""
    async with AsyncSessionLocal() as session:
        yield session
