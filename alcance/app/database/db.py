"""Conexión a la base de datos"""
from __future__ import annotations

from typing import AsyncGenerator
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from alcance.app.core.config import settings
from alcance.app.common.log import logger


class Base(DeclarativeBase):
    """Clase base de los modelos"""
    pass


def _engine_options(url: str) -> dict:
    options = {"echo": settings.debug, "pool_pre_ping": True}
    # SQLite no admite el tamaño de pool
    if not url.startswith("sqlite"):
        options.update(pool_recycle=3600, pool_size=10, max_overflow=20)
    return options


# Motor asíncrono
engine = create_async_engine(settings.database_url, **_engine_options(settings.database_url))

# Fábrica de sesiones
AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Sesión de base de datos por petición"""
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception as e:
            await session.rollback()
            logger.error(f"Error en la sesión de base de datos: {str(e)}")
            raise
        finally:
            await session.close()


async def init_db():
    """Crea las tablas"""
    # registra los modelos en Base.metadata
    import alcance.app.admin.model  # noqa: F401

    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
            logger.info("Tablas creadas")
    except Exception as e:
        logger.error(f"Falló la inicialización de la base de datos: {str(e)}")
        raise


async def drop_db():
    """Elimina todas las tablas (solo pruebas)"""
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
            logger.info("Tablas eliminadas")
    except Exception as e:
        logger.error(f"Falló la eliminación de tablas: {str(e)}")
        raise


__all__ = ["Base", "engine", "AsyncSessionLocal", "get_db", "init_db", "drop_db"]
