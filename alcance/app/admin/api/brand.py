"""API de marcas"""
from __future__ import annotations

from typing import Optional
from fastapi import APIRouter, Body, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from alcance.app.database import get_db
from alcance.app.admin.model import Brand, User
from alcance.app.admin.service import brand_service
from alcance.app.admin.schema import BrandCreate, BrandResponse, BrandUpdate
from alcance.app.common.response.response_schema import response_list, response_message
from alcance.app.common.log import logger
from alcance.app.common.deps import get_current_user, require_admin

router = APIRouter()


def _dump(brand: Brand) -> dict:
    return BrandResponse.model_validate(brand).model_dump(by_alias=True, mode="json")


@router.get("", summary="Listado de marcas")
async def get_brands(
    fabricante: Optional[str] = Query(None, description="Filtro por fabricante (subcadena)"),
    marca: Optional[str] = Query(None, description="Filtro por nombre (subcadena)"),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
) -> dict:
    try:
        brands = await brand_service.get_brand_list(db, manufacturer=fabricante, name=marca)
        return response_list("brands", [_dump(brand) for brand in brands])

    except Exception as e:
        logger.error(f"Falló el listado de marcas: {str(e)}")
        raise


@router.get("/{brand_id}", summary="Detalle de marca")
async def get_brand(
    brand_id: str = Path(..., description="ID de la marca"),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
) -> dict:
    try:
        brand = await brand_service.get_brand(db, brand_id)
        return {"brand": _dump(brand)}

    except Exception as e:
        logger.error(f"Falló la consulta de la marca: {str(e)}")
        raise


@router.post("", summary="Crear marca", status_code=status.HTTP_201_CREATED)
async def create_brand(
    brand_data: BrandCreate = Body(..., description="Datos de la marca"),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin)
) -> dict:
    try:
        brand = await brand_service.create_brand(db, brand_data.model_dump())
        return response_message("Marca creada exitosamente", brand=_dump(brand))

    except Exception as e:
        logger.error(f"Falló la creación de la marca: {str(e)}")
        raise


@router.put("/{brand_id}", summary="Actualizar marca")
async def update_brand(
    brand_id: str = Path(..., description="ID de la marca"),
    brand_data: BrandUpdate = Body(..., description="Campos a actualizar"),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin)
) -> dict:
    try:
        brand = await brand_service.update_brand(db, brand_id, brand_data.model_dump(exclude_unset=True))
        return response_message("Marca actualizada exitosamente", brand=_dump(brand))

    except Exception as e:
        logger.error(f"Falló la actualización de la marca: {str(e)}")
        raise


@router.delete("/{brand_id}", summary="Eliminar marca")
async def delete_brand(
    brand_id: str = Path(..., description="ID de la marca"),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin)
) -> dict:
    try:
        await brand_service.delete_brand(db, brand_id)
        return response_message("Marca eliminada exitosamente")

    except Exception as e:
        logger.error(f"Falló la eliminación de la marca: {str(e)}")
        raise
