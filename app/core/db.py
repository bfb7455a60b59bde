import asyncio
import logging

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from app.core.config import settings
from app.db.base import Base

logger = logging.getLogger(__name__)

# Асинхронный движок с ограниченным пулом соединений
engine = create_async_engine(
    settings.database_url,
    echo=settings.DB_ECHO,
    pool_size=settings.DB_POOL_SIZE,
    max_overflow=settings.DB_MAX_OVERFLOW,
    pool_timeout=settings.DB_POOL_TIMEOUT,
    pool_pre_ping=True,
)

# Сессии
SessionLocal = sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)

__all__ = ["Base", "engine", "SessionLocal", "get_db", "ping_database", "dispose_engine"]


# Функция для dependency injection в FastAPI
async def get_db():
    async with SessionLocal() as session:
        yield session


async def ping_database(timeout: float = settings.DB_CONNECT_TIMEOUT) -> None:
    """Проверка доступности БД при старте приложения"""
    async def _ping():
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    try:
        await asyncio.wait_for(_ping(), timeout=timeout)
    except Exception:
        logger.exception("Database ping failed")
        raise
    logger.info("Database connection established successfully")


async def dispose_engine() -> None:
    """Закрытие всех соединений пула"""
    await engine.dispose()
