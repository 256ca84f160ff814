"""Crea las tablas y el administrador inicial.

Uso: python -m alcance.scripts.init_db
"""
import asyncio

from alcance.app.common.log import logger
from alcance.app.database import AsyncSessionLocal, engine, init_db
from alcance.app.admin.service import auth_service


async def main():
    logger.info("Inicializando base de datos...")
    await init_db()
    async with AsyncSessionLocal() as db:
        await auth_service.ensure_default_admin(db)
    await engine.dispose()
    logger.info("Base de datos inicializada")


if __name__ == "__main__":
    asyncio.run(main())
