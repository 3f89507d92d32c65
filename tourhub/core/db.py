from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base
from typing import AsyncGenerator

from tourhub.config.settings import settings

engine = create_async_engine(
    settings.database.url,
    echo=settings.database.echo,
    pool_pre_ping=settings.database.pool_pre_ping,
)
SessionLocal = async_sessionmaker(
    bind=engine, autoflush=False, expire_on_commit=False, class_=AsyncSession
)

# SQLAlchemy declarative base for models
Base = declarative_base()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions."""
    async with SessionLocal() as session:
        yield session


async def create_tables() -> None:
    # Import models so they register on Base.metadata
    from tourhub import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
