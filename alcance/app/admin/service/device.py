"""Lógica de dispositivos"""
from __future__ import annotations

from typing import Any, List, Optional
from sqlalchemy.ext.asyncio import AsyncSession

from alcance.app.admin.crud import brand_crud, device_crud
from alcance.app.admin.model import Device, User
from alcance.app.admin.schema import DeviceResponse, DeviceWithBrand
from alcance.app.admin.service.relationship import (
    ensure_distributors_exist,
    get_relationship_strategy,
    sync_back_references
)
from alcance.app.common.auth.crypto import is_object_id
from alcance.app.common.deps import distributor_scope
from alcance.app.common.exception.errors import (
    DuplicateException,
    ForbiddenException,
    NotFoundException,
    ValidationException
)
from alcance.app.common.log import logger

# campos de entrada que no son columnas
REFERENCE_FIELDS = ("brand", "distributors", "distributor")
# un null en estos campos deja el valor como estaba
KEEP_ON_NULL = ("model", "publication_date", "resolution_version")


def serialize_device(device: Device) -> dict[str, Any]:
    """Dispositivo con su marca y sus distribuidores"""
    data = DeviceWithBrand.model_validate(device).model_dump(by_alias=True, mode="json")
    data.update(get_relationship_strategy().dump_refs(device))
    return data


def serialize_device_fields(device: Device) -> dict[str, Any]:
    """Solo los campos propios, sin marca ni distribuidores"""
    return DeviceResponse.model_validate(device).model_dump(by_alias=True, mode="json")


class DeviceService:
    """Mantiene los dispositivos y su relación con distribuidores"""

    async def _check_model(self, db: AsyncSession, model: Optional[str], exclude_id: Optional[str] = None) -> None:
        if not model:
            raise ValidationException("El modelo es obligatorio")
        if await device_crud.get_by_model(db, model, exclude_id=exclude_id):
            raise DuplicateException(f"Ya existe un dispositivo con el modelo {model}")

    async def _check_brand(self, db: AsyncSession, brand_id: str) -> None:
        if not is_object_id(brand_id) or not await brand_crud.get(db, brand_id):
            raise NotFoundException("Marca no encontrada")

    def _columns(self, data: dict[str, Any]) -> dict[str, Any]:
        fields = {k: v for k, v in data.items() if k not in REFERENCE_FIELDS}
        for name in KEEP_ON_NULL:
            if name in fields and fields[name] is None:
                fields.pop(name)
        if data.get("brand"):
            fields["brand_id"] = data["brand"]
        return fields

    async def create_device(self, db: AsyncSession, data: dict[str, Any]) -> Device:
        """Alta de dispositivo; valida todas las referencias antes de escribir"""
        if not data.get("model") or not data.get("brand"):
            raise ValidationException("El modelo y la marca son obligatorios")

        await self._check_model(db, data["model"])
        await self._check_brand(db, data["brand"])

        strategy = get_relationship_strategy()
        refs = strategy.requested(data, creating=True)
        await ensure_distributors_exist(db, refs)

        device = await device_crud.create(db, self._columns(data), refs)
        await sync_back_references(db, device.id, [], refs)
        await db.commit()

        logger.info(f"Dispositivo creado: ID={device.id}, modelo={device.model}")
        return await device_crud.get(db, device.id)

    async def update_device(self, db: AsyncSession, id: str, data: dict[str, Any]) -> Device:
        """Actualización parcial; solo se tocan los distribuidores que cambian"""
        device = await self.get_device(db, id)

        if "model" in data and data["model"] is not None:
            await self._check_model(db, data["model"], exclude_id=device.id)
        if "brand" in data:
            if not data["brand"]:
                raise ValidationException("La marca es obligatoria")
            await self._check_brand(db, data["brand"])

        strategy = get_relationship_strategy()
        refs = strategy.requested(data, creating=False)
        if refs is not None:
            await ensure_distributors_exist(db, refs)

        before = device.distributor_ids
        device = await device_crud.update(db, device, self._columns(data), refs)
        if refs is not None:
            await sync_back_references(db, device.id, before, refs)
        await db.commit()

        logger.info(f"Dispositivo actualizado: ID={device.id}")
        return await device_crud.get(db, device.id)

    async def delete_device(self, db: AsyncSession, id: str) -> None:
        """Baja de dispositivo y limpieza de las listas inversas"""
        device = await self.get_device(db, id)

        await sync_back_references(db, device.id, device.distributor_ids, [])
        await device_crud.delete(db, device)
        await db.commit()

        logger.info(f"Dispositivo eliminado: ID={id}")

    async def get_device(self, db: AsyncSession, id: str) -> Device:
        """Dispositivo por ID sin restricción de alcance"""
        if not is_object_id(id):
            raise ValidationException("ID de dispositivo inválido")
        device = await device_crud.get(db, id)
        if not device:
            raise NotFoundException("Dispositivo no encontrado")
        return device

    async def get_scoped_device(self, db: AsyncSession, id: str, user: User) -> Device:
        """Detalle visible para el usuario; un distribuidor solo ve los suyos"""
        scope = distributor_scope(user)
        if scope is None:
            return await self.get_device(db, id)

        if not is_object_id(id):
            raise ValidationException("ID de dispositivo inválido")
        device = await device_crud.get(db, id)
        # ausente o ajeno: la misma respuesta
        if not device or scope not in device.distributor_ids:
            raise ForbiddenException("No tiene acceso a este dispositivo")
        return device

    async def get_scoped_devices(
        self,
        db: AsyncSession,
        user: User,
        distributor_id: Optional[str] = None
    ) -> List[Device]:
        """Listado; el filtro de distribuidor se fuerza para los distribuidores"""
        scope = distributor_scope(user)
        if scope is not None:
            distributor_id = scope
        return await device_crud.get_multi(db, distributor_id=distributor_id)

    async def get_public_devices(
        self,
        db: AsyncSession,
        brand: Optional[str] = None,
        type: Optional[str] = None
    ) -> List[Device]:
        """Catálogo público"""
        return await device_crud.get_public(db, brand=brand, type=type)

    async def get_public_device(self, db: AsyncSession, id: str) -> Device:
        """Detalle público"""
        return await self.get_device(db, id)


device_service = DeviceService()
