"""Catálogo público de dispositivos"""
from __future__ import annotations

from typing import Optional
from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.ext.asyncio import AsyncSession

from alcance.app.database import get_db
from alcance.app.admin.service import device_service
from alcance.app.admin.service.device import serialize_device
from alcance.app.common.response.response_schema import response_list
from alcance.app.common.log import logger

router = APIRouter()


@router.get("/public", summary="Catálogo público")
async def get_public_devices(
    marca: Optional[str] = Query(None, description="ID de la marca o parte de su nombre"),
    tipo: Optional[str] = Query(None, description="Tipo de dispositivo"),
    db: AsyncSession = Depends(get_db)
) -> dict:
    """Ordenado por nombre de marca"""
    try:
        devices = await device_service.get_public_devices(db, brand=marca, type=tipo)
        return response_list("devices", [serialize_device(device) for device in devices])

    except Exception as e:
        logger.error(f"Falló el catálogo público: {str(e)}")
        raise


@router.get("/public/{device_id}", summary="Detalle público de dispositivo")
async def get_public_device(
    device_id: str = Path(..., description="ID del dispositivo"),
    db: AsyncSession = Depends(get_db)
) -> dict:
    try:
        device = await device_service.get_public_device(db, device_id)
        return {"device": serialize_device(device)}

    except Exception as e:
        logger.error(f"Falló el detalle público: {str(e)}")
        raise
