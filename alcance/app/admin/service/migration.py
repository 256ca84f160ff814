"""Tareas de mantenimiento de la relación dispositivo-distribuidor"""
from __future__ import annotations

from typing import Any
from sqlalchemy.ext.asyncio import AsyncSession

from alcance.app.admin.crud import device_crud, distributor_crud
from alcance.app.admin.service.relationship import sync_back_references
from alcance.app.common.log import log_decorator, logger


class MigrationService:
    """Migraciones por lotes; se ejecutan fuera de las peticiones HTTP"""

    @log_decorator("migración de distribuidores múltiples a uno solo")
    async def collapse_to_single(self, db: AsyncSession) -> dict[str, Any]:
        """Conserva solo el primer distribuidor de cada dispositivo"""
        devices = await device_crud.get_multi(db)
        without_distributor = 0
        with_multiple = 0
        pulled = 0

        for device in devices:
            refs = device.distributor_ids
            if not refs:
                without_distributor += 1
                continue
            if len(refs) == 1:
                continue

            with_multiple += 1
            logger.warning(
                f"Dispositivo {device.model} ({device.id}) tenía {len(refs)} distribuidores; "
                f"se conserva {refs[0]}"
            )
            await device_crud.update(db, device, {}, [refs[0]])
            removed, _ = await sync_back_references(db, device.id, refs, [refs[0]])
            pulled += len(removed)

        await db.commit()

        report = {
            "total": len(devices),
            "withoutDistributor": without_distributor,
            "withMultiple": with_multiple,
            "pulled": pulled,
        }
        logger.info(f"Migración completada: {report}")
        return report

    @log_decorator("resincronización de referencias inversas")
    async def resync_back_references(self, db: AsyncSession) -> dict[str, Any]:
        """Reconstruye la lista de dispositivos de cada distribuidor a partir de los vínculos"""
        expected: dict[str, list[str]] = {}
        for device in reversed(await device_crud.get_multi(db)):
            for distributor_id in device.distributor_ids:
                expected.setdefault(distributor_id, []).append(device.id)

        fixed = 0
        distributors = await distributor_crud.get_multi(db)
        for distributor in distributors:
            wanted = expected.get(distributor.id, [])
            current = list(distributor.device_ids or [])
            # se mantiene el orden existente y se agregan los faltantes al final
            refs = [ref for ref in current if ref in wanted]
            refs += [ref for ref in wanted if ref not in refs]
            if refs != current:
                await distributor_crud.set_device_refs(db, distributor, refs)
                fixed += 1

        await db.commit()

        report = {"distributors": len(distributors), "fixed": fixed}
        logger.info(f"Resincronización completada: {report}")
        return report


migration_service = MigrationService()
