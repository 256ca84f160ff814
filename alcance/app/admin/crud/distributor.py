"""CRUD de distribuidores"""
from __future__ import annotations

from typing import Iterable, Optional, List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import and_, delete, func, select
from alcance.app.admin.model import DeviceDistributor, Distributor
from alcance.app.admin.model.distributor import normalize_name


class CRUDDistributor:
    """Operaciones sobre distribuidores"""

    async def get(self, db: AsyncSession, id: str) -> Optional[Distributor]:
        """Distribuidor por ID"""
        result = await db.execute(select(Distributor).where(Distributor.id == id))
        return result.scalar_one_or_none()

    async def get_many(self, db: AsyncSession, ids: Iterable[str]) -> List[Distributor]:
        """Distribuidores existentes entre los IDs dados"""
        ids = list(ids)
        if not ids:
            return []
        result = await db.execute(select(Distributor).where(Distributor.id.in_(ids)))
        return list(result.scalars().all())

    async def get_by_representative_name(
        self,
        db: AsyncSession,
        name: str,
        exclude_id: Optional[str] = None
    ) -> Optional[Distributor]:
        """Coincidencia exacta sin distinguir mayúsculas"""
        query = select(Distributor).where(Distributor.representative_key == normalize_name(name))
        if exclude_id:
            query = query.where(Distributor.id != exclude_id)
        result = await db.execute(query)
        return result.scalars().first()

    async def find_by_name_fragment(self, db: AsyncSession, fragment: str) -> Optional[Distributor]:
        """Primer distribuidor cuyo nombre contiene el fragmento"""
        key = normalize_name(fragment)
        if not key:
            return None
        result = await db.execute(
            select(Distributor)
            .where(Distributor.representative_key.contains(key, autoescape=True))
            .order_by(Distributor.representative_key, Distributor.id)
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def get_multi(self, db: AsyncSession, id: Optional[str] = None) -> List[Distributor]:
        """Listado ordenado por nombre; ``id`` restringe a un solo registro"""
        query = select(Distributor)
        if id is not None:
            query = query.where(Distributor.id == id)
        query = query.order_by(Distributor.representative_name)

        result = await db.execute(query)
        return list(result.scalars().all())

    async def list_names(self, db: AsyncSession) -> List[tuple[str, str, str]]:
        """Solo ID y nombres"""
        result = await db.execute(
            select(
                Distributor.id,
                Distributor.representative_name,
                Distributor.full_representative_name
            ).order_by(Distributor.representative_name)
        )
        return [tuple(row) for row in result.all()]

    async def create(self, db: AsyncSession, obj_in: dict) -> Distributor:
        """Crea un distribuidor"""
        obj_in = dict(obj_in)
        name = obj_in.pop("representative_name")
        db_obj = Distributor(**obj_in)
        db_obj.set_representative_name(name)
        db.add(db_obj)
        await db.flush()
        await db.refresh(db_obj)
        return db_obj

    async def update(self, db: AsyncSession, db_obj: Distributor, obj_in: dict) -> Distributor:
        """Actualiza un distribuidor"""
        for field, value in obj_in.items():
            if field == "representative_name":
                db_obj.set_representative_name(value)
            elif hasattr(db_obj, field):
                setattr(db_obj, field, value)

        await db.flush()
        await db.refresh(db_obj)
        return db_obj

    async def count_sole_devices(self, db: AsyncSession, id: str) -> int:
        """Dispositivos cuyo único distribuidor es este"""
        sole = (
            select(DeviceDistributor.device_id)
            .group_by(DeviceDistributor.device_id)
            .having(and_(
                func.count(DeviceDistributor.distributor_id) == 1,
                func.max(DeviceDistributor.distributor_id) == id
            ))
            .subquery()
        )
        result = await db.execute(select(func.count()).select_from(sole))
        return result.scalar_one()

    async def delete(self, db: AsyncSession, db_obj: Distributor) -> None:
        """Elimina el distribuidor y sus vínculos con dispositivos"""
        await db.execute(
            delete(DeviceDistributor).where(DeviceDistributor.distributor_id == db_obj.id)
        )
        await db.delete(db_obj)
        await db.flush()

    async def _get_for_update(self, db: AsyncSession, id: str) -> Optional[Distributor]:
        result = await db.execute(
            select(Distributor)
            .where(Distributor.id == id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def add_device_ref(self, db: AsyncSession, id: str, device_id: str) -> bool:
        """Agrega el dispositivo a la lista si no estaba"""
        db_obj = await self._get_for_update(db, id)
        if db_obj is None or device_id in (db_obj.device_ids or []):
            return False
        db_obj.device_ids = [*(db_obj.device_ids or []), device_id]
        await db.flush()
        return True

    async def pull_device_ref(self, db: AsyncSession, id: str, device_id: str) -> bool:
        """Quita el dispositivo de la lista si estaba"""
        db_obj = await self._get_for_update(db, id)
        if db_obj is None or device_id not in (db_obj.device_ids or []):
            return False
        db_obj.device_ids = [ref for ref in db_obj.device_ids if ref != device_id]
        await db.flush()
        return True

    async def set_device_refs(self, db: AsyncSession, db_obj: Distributor, device_ids: List[str]) -> None:
        """Reescribe la lista completa (resincronización)"""
        db_obj.device_ids = list(device_ids)
        await db.flush()


distributor_crud = CRUDDistributor()
