"""API de distribuidores (administradores y distribuidores)"""
from __future__ import annotations

from fastapi import APIRouter, Body, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from alcance.app.database import get_db
from alcance.app.admin.model import User
from alcance.app.admin.service import distributor_service
from alcance.app.admin.service.distributor import serialize_distributor
from alcance.app.admin.service.qr import build_distributor_qr
from alcance.app.admin.schema import DistributorCreate, DistributorUpdate
from alcance.app.common.response.response_schema import response_list, response_message
from alcance.app.common.log import logger
from alcance.app.common.deps import require_admin, require_admin_or_distributor

router = APIRouter()


@router.get("", summary="Listado de distribuidores")
async def get_distributors(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin_or_distributor)
) -> dict:
    """Un distribuidor solo recibe el suyo"""
    try:
        distributors = await distributor_service.get_scoped_distributors(db, current_user)
        return response_list(
            "distributors",
            [await serialize_distributor(db, distributor) for distributor in distributors]
        )

    except Exception as e:
        logger.error(f"Falló el listado de distribuidores: {str(e)}")
        raise


@router.get("/{distributor_id}", summary="Detalle de distribuidor")
async def get_distributor(
    distributor_id: str = Path(..., description="ID del distribuidor"),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin_or_distributor)
) -> dict:
    try:
        distributor = await distributor_service.get_scoped_distributor(db, distributor_id, current_user)
        return {"distributor": await serialize_distributor(db, distributor)}

    except Exception as e:
        logger.error(f"Falló la consulta del distribuidor: {str(e)}")
        raise


@router.get("/{distributor_id}/qr", summary="Código QR del distribuidor")
async def get_distributor_qr(
    distributor_id: str = Path(..., description="ID del distribuidor"),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin_or_distributor)
) -> dict:
    try:
        return await distributor_service.get_qr(db, distributor_id, current_user)

    except Exception as e:
        logger.error(f"Falló la generación del QR: {str(e)}")
        raise


@router.post("", summary="Crear distribuidor", status_code=status.HTTP_201_CREATED)
async def create_distributor(
    distributor_data: DistributorCreate = Body(..., description="Datos del distribuidor"),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin)
) -> dict:
    """Devuelve también el QR del nuevo distribuidor"""
    try:
        distributor = await distributor_service.create_distributor(db, distributor_data.model_dump())
        return response_message(
            "Distribuidor creado exitosamente",
            distributor=await serialize_distributor(db, distributor),
            qr=build_distributor_qr(distributor)
        )

    except Exception as e:
        logger.error(f"Falló la creación del distribuidor: {str(e)}")
        raise


@router.put("/{distributor_id}", summary="Actualizar distribuidor")
async def update_distributor(
    distributor_id: str = Path(..., description="ID del distribuidor"),
    distributor_data: DistributorUpdate = Body(..., description="Campos a actualizar"),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin)
) -> dict:
    try:
        distributor = await distributor_service.update_distributor(
            db, distributor_id, distributor_data.model_dump(exclude_unset=True)
        )
        return response_message(
            "Distribuidor actualizado exitosamente",
            distributor=await serialize_distributor(db, distributor)
        )

    except Exception as e:
        logger.error(f"Falló la actualización del distribuidor: {str(e)}")
        raise


@router.delete("/{distributor_id}", summary="Eliminar distribuidor")
async def delete_distributor(
    distributor_id: str = Path(..., description="ID del distribuidor"),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin)
) -> dict:
    try:
        await distributor_service.delete_distributor(db, distributor_id)
        return response_message("Distribuidor eliminado exitosamente")

    except Exception as e:
        logger.error(f"Falló la eliminación del distribuidor: {str(e)}")
        raise
