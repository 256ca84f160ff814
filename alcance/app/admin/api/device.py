"""API de dispositivos (administradores y distribuidores)"""
from __future__ import annotations

from typing import Optional
from fastapi import APIRouter, Body, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from alcance.app.database import get_db
from alcance.app.admin.model import User
from alcance.app.admin.service import device_service
from alcance.app.admin.service.device import serialize_device
from alcance.app.admin.schema import DeviceIn
from alcance.app.common.response.response_schema import response_list, response_message
from alcance.app.common.log import logger
from alcance.app.common.deps import require_admin, require_admin_or_distributor

router = APIRouter()


@router.get("", summary="Listado de dispositivos")
async def get_devices(
    distribuidor: Optional[str] = Query(None, description="Filtro por distribuidor (solo administradores)"),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin_or_distributor)
) -> dict:
    """Un distribuidor solo recibe sus propios dispositivos"""
    try:
        devices = await device_service.get_scoped_devices(db, current_user, distributor_id=distribuidor)
        return response_list("devices", [serialize_device(device) for device in devices])

    except Exception as e:
        logger.error(f"Falló el listado de dispositivos: {str(e)}")
        raise


@router.get("/{device_id}", summary="Detalle de dispositivo")
async def get_device(
    device_id: str = Path(..., description="ID del dispositivo"),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin_or_distributor)
) -> dict:
    try:
        device = await device_service.get_scoped_device(db, device_id, current_user)
        return {"device": serialize_device(device)}

    except Exception as e:
        logger.error(f"Falló la consulta del dispositivo: {str(e)}")
        raise


@router.post("", summary="Crear dispositivo", status_code=status.HTTP_201_CREATED)
async def create_device(
    device_data: DeviceIn = Body(..., description="Datos del dispositivo"),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin)
) -> dict:
    try:
        device = await device_service.create_device(db, device_data.model_dump(exclude_unset=True))
        return response_message("Dispositivo creado exitosamente", device=serialize_device(device))

    except Exception as e:
        logger.error(f"Falló la creación del dispositivo: {str(e)}")
        raise


@router.put("/{device_id}", summary="Actualizar dispositivo")
async def update_device(
    device_id: str = Path(..., description="ID del dispositivo"),
    device_data: DeviceIn = Body(..., description="Campos a actualizar"),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin)
) -> dict:
    try:
        device = await device_service.update_device(db, device_id, device_data.model_dump(exclude_unset=True))
        return response_message("Dispositivo actualizado exitosamente", device=serialize_device(device))

    except Exception as e:
        logger.error(f"Falló la actualización del dispositivo: {str(e)}")
        raise


@router.delete("/{device_id}", summary="Eliminar dispositivo")
async def delete_device(
    device_id: str = Path(..., description="ID del dispositivo"),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin)
) -> dict:
    try:
        await device_service.delete_device(db, device_id)
        return response_message("Dispositivo eliminado exitosamente")

    except Exception as e:
        logger.error(f"Falló la eliminación del dispositivo: {str(e)}")
        raise
