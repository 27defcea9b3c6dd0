"""Database engine and session management for the local reference store."""
from typing import AsyncGenerator, Optional

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from pharmref.config import get_settings

settings = get_settings()

engine = create_async_engine(settings.DATABASE_URL, echo=settings.DEBUG)
async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

Base = declarative_base()


async def init_db(db_engine: Optional[AsyncEngine] = None) -> None:
    """Create all tables."""
    # Models must be imported so their tables are registered on Base.metadata
    from pharmref import models  # noqa: F401

    async with (db_engine or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield a session that is closed afterwards."""
    async with async_session() as session:
        yield session
