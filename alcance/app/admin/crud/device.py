"""CRUD de dispositivos"""
from __future__ import annotations

from typing import Optional, List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import and_, or_, select
from alcance.app.admin.model import Brand, Device, DeviceDistributor


class CRUDDevice:
    """Operaciones sobre dispositivos"""

    async def get(self, db: AsyncSession, id: str) -> Optional[Device]:
        """Dispositivo por ID, con marca y distribuidores recargados"""
        result = await db.execute(
            select(Device)
            .where(Device.id == id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_many(self, db: AsyncSession, ids: List[str]) -> List[Device]:
        """Dispositivos en el orden de los IDs dados; omite los inexistentes"""
        if not ids:
            return []
        result = await db.execute(select(Device).where(Device.id.in_(ids)))
        by_id = {device.id: device for device in result.scalars().all()}
        return [by_id[id] for id in ids if id in by_id]

    async def get_by_model(
        self,
        db: AsyncSession,
        model: str,
        exclude_id: Optional[str] = None
    ) -> Optional[Device]:
        """Dispositivo por modelo exacto"""
        query = select(Device).where(Device.model == model)
        if exclude_id:
            query = query.where(Device.id != exclude_id)
        result = await db.execute(query)
        return result.scalars().first()

    async def get_multi(
        self,
        db: AsyncSession,
        distributor_id: Optional[str] = None,
        brand_id: Optional[str] = None,
        type: Optional[str] = None
    ) -> List[Device]:
        """Listado de dispositivos, más recientes primero"""
        query = select(Device)

        conditions = []
        if distributor_id:
            conditions.append(
                Device.distributor_links.any(DeviceDistributor.distributor_id == distributor_id)
            )
        if brand_id:
            conditions.append(Device.brand_id == brand_id)
        if type:
            conditions.append(Device.type == type)

        if conditions:
            query = query.where(and_(*conditions))

        query = query.order_by(Device.created_at.desc(), Device.id.desc())

        result = await db.execute(query.execution_options(populate_existing=True))
        return list(result.scalars().all())

    async def get_public(
        self,
        db: AsyncSession,
        brand: Optional[str] = None,
        type: Optional[str] = None
    ) -> List[Device]:
        """Catálogo público ordenado por nombre de marca"""
        query = select(Device).join(Brand, Device.brand_id == Brand.id)

        conditions = []
        if brand:
            # ID de la marca o parte de su nombre
            conditions.append(
                or_(Brand.id == brand, Brand.name.icontains(brand, autoescape=True))
            )
        if type:
            conditions.append(Device.type == type)

        if conditions:
            query = query.where(and_(*conditions))

        query = query.order_by(Brand.name, Device.model)

        result = await db.execute(query)
        return list(result.scalars().all())

    async def get_by_distributor(self, db: AsyncSession, distributor_id: str) -> List[Device]:
        """Dispositivos vinculados a un distribuidor"""
        return await self.get_multi(db, distributor_id=distributor_id)

    async def get_with_distributors(self, db: AsyncSession) -> List[Device]:
        """Dispositivos con al menos un distribuidor vinculado"""
        result = await db.execute(
            select(Device)
            .where(Device.distributor_links.any())
            .order_by(Device.created_at, Device.id)
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def create(self, db: AsyncSession, obj_in: dict, distributor_ids: List[str]) -> Device:
        """Crea un dispositivo con sus vínculos"""
        db_obj = Device(**obj_in)
        db_obj.set_distributor_ids(distributor_ids)
        db.add(db_obj)
        await db.flush()
        return db_obj

    async def update(
        self,
        db: AsyncSession,
        db_obj: Device,
        obj_in: dict,
        distributor_ids: Optional[List[str]] = None
    ) -> Device:
        """Actualiza campos y, si se indica, la lista de distribuidores"""
        for field, value in obj_in.items():
            if hasattr(db_obj, field):
                setattr(db_obj, field, value)
        if distributor_ids is not None:
            db_obj.set_distributor_ids(distributor_ids)

        await db.flush()
        return db_obj

    async def delete(self, db: AsyncSession, db_obj: Device) -> None:
        """Elimina un dispositivo"""
        await db.delete(db_obj)
        await db.flush()


device_crud = CRUDDevice()
