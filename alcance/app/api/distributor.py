"""Consultas públicas de distribuidores (destino de los QR)"""
from __future__ import annotations

from fastapi import APIRouter, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from alcance.app.database import get_db
from alcance.app.admin.schema import DistributorResponse
from alcance.app.admin.service import distributor_service, lookup_service
from alcance.app.common.response.response_schema import response_list
from alcance.app.common.log import logger

router = APIRouter()


@router.get("/nombres", summary="Nombres de distribuidores")
async def get_distributor_names(
    db: AsyncSession = Depends(get_db)
) -> dict:
    try:
        names = await distributor_service.get_names(db)
        return response_list("distributors", names)

    except Exception as e:
        logger.error(f"Falló el listado de nombres: {str(e)}")
        raise


@router.get("/representante/{representante}", summary="Distribuidor con su catálogo por marca")
async def get_by_representative(
    representante: str = Path(..., description="Nombre del representante"),
    db: AsyncSession = Depends(get_db)
) -> dict:
    try:
        distributor = await lookup_service.resolve_by_representative_name(db, representante)
        return {"distributor": distributor}

    except Exception as e:
        logger.error(f"Falló la consulta por representante: {str(e)}")
        raise


@router.get("/{slug}/info", summary="Ficha pública del distribuidor")
async def get_distributor_info(
    slug: str = Path(..., description="ID o nombre con guiones"),
    db: AsyncSession = Depends(get_db)
) -> dict:
    try:
        distributor = await lookup_service.resolve(db, slug)
        return {"distributor": DistributorResponse.model_validate(distributor).model_dump(by_alias=True, mode="json")}

    except Exception as e:
        logger.error(f"Falló la ficha pública: {str(e)}")
        raise
