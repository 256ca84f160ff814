"""Lógica de marcas"""
from __future__ import annotations

from typing import Any, List, Optional
from sqlalchemy.ext.asyncio import AsyncSession

from alcance.app.admin.crud import brand_crud
from alcance.app.admin.model import Brand
from alcance.app.common.auth.crypto import is_object_id
from alcance.app.common.exception.errors import NotFoundException, ValidationException
from alcance.app.common.log import logger


class BrandService:
    """Marcas"""

    async def get_brand(self, db: AsyncSession, id: str) -> Brand:
        if not is_object_id(id):
            raise ValidationException("ID de marca inválido")
        brand = await brand_crud.get(db, id)
        if not brand:
            raise NotFoundException("Marca no encontrada")
        return brand

    async def get_brand_list(
        self,
        db: AsyncSession,
        manufacturer: Optional[str] = None,
        name: Optional[str] = None
    ) -> List[Brand]:
        return await brand_crud.get_multi(db, manufacturer=manufacturer, name=name)

    async def create_brand(self, db: AsyncSession, data: dict[str, Any]) -> Brand:
        brand = await brand_crud.create(db, data)
        await db.commit()

        logger.info(f"Marca creada: ID={brand.id}, nombre={brand.name}")
        return brand

    async def update_brand(self, db: AsyncSession, id: str, data: dict[str, Any]) -> Brand:
        brand = await self.get_brand(db, id)
        # null en campos obligatorios no borra el valor
        data = {k: v for k, v in data.items() if v is not None}
        brand = await brand_crud.update(db, brand, data)
        await db.commit()

        logger.info(f"Marca actualizada: ID={brand.id}")
        return brand

    async def delete_brand(self, db: AsyncSession, id: str) -> None:
        brand = await self.get_brand(db, id)

        # no se puede eliminar una marca en uso
        device_count = await brand_crud.count_devices(db, brand.id)
        if device_count > 0:
            raise ValidationException(f"La marca tiene {device_count} dispositivos asociados")

        await brand_crud.delete(db, brand)
        await db.commit()

        logger.info(f"Marca eliminada: ID={id}")


brand_service = BrandService()
