# neurostep/utils/db.py
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker
from neurostep.utils.config import settings

# Async engine for the profile store (aiosqlite by default)
engine = create_async_engine(settings.database_url, echo=False)

# expire_on_commit=False keeps stats readable after the profile store commits
AsyncSessionLocal = sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)

async def init_models(base) -> None:
    """Creates any missing tables declared on the given declarative base."""
    async with engine.begin() as conn:
        await conn.run_sync(base.metadata.create_all)

async def get_db() -> AsyncSession:
    """FastAPI dependency yielding one session per request."""
    async with AsyncSessionLocal() as session:
        yield session
