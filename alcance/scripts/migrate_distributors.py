"""Convierte los dispositivos con varios distribuidores a uno solo (se conserva el primero).

Uso:
    python -m alcance.scripts.migrate_distributors           # migración
    python -m alcance.scripts.migrate_distributors --resync  # solo resincroniza las listas inversas
"""
import argparse
import asyncio

from alcance.app.common.log import logger
from alcance.app.database import AsyncSessionLocal, engine
from alcance.app.admin.service import migration_service


async def main(resync_only: bool = False):
    async with AsyncSessionLocal() as db:
        if not resync_only:
            report = await migration_service.collapse_to_single(db)
            logger.info(f"Total: {report['total']}")
            logger.info(f"Sin distribuidor: {report['withoutDistributor']}")
            logger.info(f"Con varios distribuidores (se conservó el primero): {report['withMultiple']}")
        await migration_service.resync_back_references(db)
    await engine.dispose()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Migración de la relación dispositivo-distribuidor")
    parser.add_argument("--resync", action="store_true", help="solo resincronizar las listas inversas")
    args = parser.parse_args()
    asyncio.run(main(resync_only=args.resync))
