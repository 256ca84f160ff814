"""Lógica de distribuidores"""
from __future__ import annotations

from typing import Any, List, Optional
from sqlalchemy.ext.asyncio import AsyncSession

from alcance.app.admin.crud import device_crud, distributor_crud, user_crud
from alcance.app.admin.model import Distributor, User
from alcance.app.admin.schema import DistributorResponse
from alcance.app.admin.service.device import serialize_device_fields
from alcance.app.admin.service.qr import build_distributor_qr
from alcance.app.common.auth.crypto import is_object_id
from alcance.app.common.deps import distributor_scope
from alcance.app.common.exception.errors import (
    DuplicateException,
    ForbiddenException,
    NotFoundException,
    ValidationException
)
from alcance.app.common.log import logger
from alcance.app.core.config import settings


async def serialize_distributor(db: AsyncSession, distributor: Distributor) -> dict[str, Any]:
    """Distribuidor con sus dispositivos poblados desde la lista inversa"""
    data = DistributorResponse.model_validate(distributor).model_dump(by_alias=True, mode="json")
    devices = await device_crud.get_many(db, list(distributor.device_ids or []))
    data["devices"] = [serialize_device_fields(device) for device in devices]
    return data


class DistributorService:
    """Distribuidores"""

    async def _check_name(self, db: AsyncSession, name: str, exclude_id: Optional[str] = None) -> None:
        if await distributor_crud.get_by_representative_name(db, name, exclude_id=exclude_id):
            raise DuplicateException("Ya existe un distribuidor con este representante")

    async def get_distributor(self, db: AsyncSession, id: str) -> Distributor:
        if not is_object_id(id):
            raise ValidationException("ID de distribuidor inválido")
        distributor = await distributor_crud.get(db, id)
        if not distributor:
            raise NotFoundException("Distribuidor no encontrado")
        return distributor

    async def get_scoped_distributor(self, db: AsyncSession, id: str, user: User) -> Distributor:
        """Un distribuidor solo puede ver el suyo"""
        scope = distributor_scope(user)
        if scope is not None:
            if not is_object_id(id):
                raise ValidationException("ID de distribuidor inválido")
            if id != scope:
                raise ForbiddenException("Solo puede ver su propio distribuidor")
            distributor = await distributor_crud.get(db, id)
            if not distributor:
                raise ForbiddenException("Solo puede ver su propio distribuidor")
            return distributor
        return await self.get_distributor(db, id)

    async def get_scoped_distributors(self, db: AsyncSession, user: User) -> List[Distributor]:
        scope = distributor_scope(user)
        if scope is not None:
            distributors = await distributor_crud.get_multi(db, id=scope)
            if not distributors:
                raise NotFoundException("Distribuidor no encontrado")
            return distributors
        return await distributor_crud.get_multi(db)

    async def get_names(self, db: AsyncSession) -> List[dict[str, str]]:
        """Nombres para los selectores públicos"""
        return [
            {"id": id, "representativeName": name, "fullRepresentativeName": full_name}
            for id, name, full_name in await distributor_crud.list_names(db)
        ]

    async def create_distributor(self, db: AsyncSession, data: dict[str, Any]) -> Distributor:
        await self._check_name(db, data["representative_name"])

        distributor = await distributor_crud.create(db, data)
        await db.commit()

        logger.info(f"Distribuidor creado: ID={distributor.id}, representante={distributor.representative_name}")
        return distributor

    async def update_distributor(self, db: AsyncSession, id: str, data: dict[str, Any]) -> Distributor:
        distributor = await self.get_distributor(db, id)

        if data.get("representative_name") is None:
            data.pop("representative_name", None)
        else:
            await self._check_name(db, data["representative_name"], exclude_id=distributor.id)

        distributor = await distributor_crud.update(db, distributor, data)
        await db.commit()

        logger.info(f"Distribuidor actualizado: ID={distributor.id}")
        return distributor

    async def delete_distributor(self, db: AsyncSession, id: str) -> None:
        """Elimina el distribuidor y lo quita de los dispositivos vinculados"""
        distributor = await self.get_distributor(db, id)

        user_count = await user_crud.count_by_distributor(db, distributor.id)
        if user_count > 0:
            raise ValidationException(f"El distribuidor tiene {user_count} usuarios asociados")

        # en la generación múltiple ningún dispositivo puede quedar sin distribuidor
        if settings.distributor_relationship == "multi":
            sole_count = await distributor_crud.count_sole_devices(db, distributor.id)
            if sole_count > 0:
                raise ValidationException(
                    f"El distribuidor es el único de {sole_count} dispositivos; reasígnelos antes de eliminarlo"
                )

        await distributor_crud.delete(db, distributor)
        await db.commit()

        logger.info(f"Distribuidor eliminado: ID={id}")

    async def get_qr(self, db: AsyncSession, id: str, user: User) -> dict[str, Any]:
        distributor = await self.get_scoped_distributor(db, id, user)
        return build_distributor_qr(distributor)


distributor_service = DistributorService()
