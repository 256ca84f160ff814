"""CRUD de marcas"""
from __future__ import annotations

from typing import Optional, List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import and_, func, select
from alcance.app.admin.model import Brand, Device


class CRUDBrand:
    """Operaciones sobre marcas"""

    async def get(self, db: AsyncSession, id: str) -> Optional[Brand]:
        """Marca por ID"""
        result = await db.execute(select(Brand).where(Brand.id == id))
        return result.scalar_one_or_none()

    async def get_multi(
        self,
        db: AsyncSession,
        manufacturer: Optional[str] = None,
        name: Optional[str] = None
    ) -> List[Brand]:
        """Listado de marcas con filtros por subcadena"""
        query = select(Brand)

        conditions = []
        if manufacturer:
            conditions.append(Brand.manufacturer.icontains(manufacturer, autoescape=True))
        if name:
            conditions.append(Brand.name.icontains(name, autoescape=True))

        if conditions:
            query = query.where(and_(*conditions))

        query = query.order_by(Brand.name, Brand.id)

        result = await db.execute(query)
        return list(result.scalars().all())

    async def count_devices(self, db: AsyncSession, id: str) -> int:
        """Dispositivos que referencian la marca"""
        result = await db.execute(
            select(func.count()).select_from(Device).where(Device.brand_id == id)
        )
        return result.scalar_one()

    async def create(self, db: AsyncSession, obj_in: dict) -> Brand:
        """Crea una marca"""
        db_obj = Brand(**obj_in)
        db.add(db_obj)
        await db.flush()
        await db.refresh(db_obj)
        return db_obj

    async def update(self, db: AsyncSession, db_obj: Brand, obj_in: dict) -> Brand:
        """Actualiza una marca"""
        for field, value in obj_in.items():
            if hasattr(db_obj, field):
                setattr(db_obj, field, value)

        await db.flush()
        await db.refresh(db_obj)
        return db_obj

    async def delete(self, db: AsyncSession, db_obj: Brand) -> None:
        """Elimina una marca"""
        await db.delete(db_obj)
        await db.flush()


brand_crud = CRUDBrand()
