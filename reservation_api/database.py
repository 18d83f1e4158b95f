"""Database engine, session factory and declarative base"""

from typing import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from reservation_api.config import settings

engine = create_async_engine(settings.database_url, echo=settings.database_echo)

# Entities stay readable after commit; lazy reloads are not possible under asyncio
SessionLocal = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

Base = declarative_base()


async def get_db() -> AsyncIterator[AsyncSession]:
    """Yield one session per request"""
    async with SessionLocal() as session:
        yield session
