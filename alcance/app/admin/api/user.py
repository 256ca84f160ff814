"""API de usuarios (solo administradores)"""
from __future__ import annotations

from fastapi import APIRouter, Body, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from alcance.app.database import get_db
from alcance.app.admin.model import User
from alcance.app.admin.service import user_service
from alcance.app.admin.schema import UserCreate, UserResponse, UserUpdate
from alcance.app.common.response.response_schema import response_list, response_message
from alcance.app.common.log import logger
from alcance.app.common.deps import require_admin

router = APIRouter()


def _dump(user: User) -> dict:
    return UserResponse.model_validate(user).model_dump(by_alias=True, mode="json")


@router.get("", summary="Listado de usuarios")
async def get_users(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin)
) -> dict:
    try:
        users = await user_service.get_user_list(db)
        return response_list("users", [_dump(user) for user in users])

    except Exception as e:
        logger.error(f"Falló el listado de usuarios: {str(e)}")
        raise


@router.get("/{user_id}", summary="Detalle de usuario")
async def get_user(
    user_id: str = Path(..., description="ID del usuario"),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin)
) -> dict:
    try:
        user = await user_service.get_user(db, user_id)
        return {"user": _dump(user)}

    except Exception as e:
        logger.error(f"Falló la consulta del usuario: {str(e)}")
        raise


@router.post("", summary="Crear usuario", status_code=status.HTTP_201_CREATED)
async def create_user(
    user_data: UserCreate = Body(..., description="Datos del usuario"),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin)
) -> dict:
    try:
        user = await user_service.create_user(db, user_data.model_dump())
        return response_message("Usuario creado exitosamente", user=_dump(user))

    except Exception as e:
        logger.error(f"Falló la creación del usuario: {str(e)}")
        raise


@router.put("/{user_id}", summary="Actualizar usuario")
async def update_user(
    user_id: str = Path(..., description="ID del usuario"),
    user_data: UserUpdate = Body(..., description="Campos a actualizar"),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin)
) -> dict:
    try:
        user = await user_service.update_user(db, user_id, user_data.model_dump(exclude_unset=True))
        return response_message("Usuario actualizado exitosamente", user=_dump(user))

    except Exception as e:
        logger.error(f"Falló la actualización del usuario: {str(e)}")
        raise


@router.delete("/{user_id}", summary="Eliminar usuario")
async def delete_user(
    user_id: str = Path(..., description="ID del usuario"),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin)
) -> dict:
    try:
        await user_service.delete_user(db, user_id, current_user)
        return response_message("Usuario eliminado exitosamente")

    except Exception as e:
        logger.error(f"Falló la eliminación del usuario: {str(e)}")
        raise
