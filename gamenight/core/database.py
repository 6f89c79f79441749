"""Database engine and session management."""
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import NullPool

from gamenight.core.config import settings


def build_engine(url: str):
    """Create an async engine for the given database URL."""
    # aiosqlite connections are bound to the loop that opened them
    if url.startswith("sqlite"):
        return create_async_engine(url, poolclass=NullPool)
    return create_async_engine(url, pool_pre_ping=True)


def build_session_factory(bind) -> async_sessionmaker:
    """Create a session factory bound to an engine."""
    return async_sessionmaker(bind, class_=AsyncSession, expire_on_commit=False)


engine = build_engine(settings.DATABASE_URL)
AsyncSessionLocal = build_session_factory(engine)

Base = declarative_base()


async def init_db(bind=None):
    """Create all tables if they don't exist."""
    # Import models so they register on the metadata
    import gamenight.models  # noqa: F401

    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
