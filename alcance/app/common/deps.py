"""Dependencias de autenticación y alcance por rol"""
from __future__ import annotations

from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from alcance.app.database import get_db
from alcance.app.admin.model import User
from alcance.app.admin.crud import user_crud
from alcance.app.common.auth.jwt import get_token_subject
from alcance.app.common.exception.errors import (
    ForbiddenException,
    UnauthenticatedException,
    ValidationException
)

security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db)
) -> User:
    """Usuario del token Bearer, leído de nuevo en cada petición"""
    if credentials is None or not credentials.credentials:
        raise UnauthenticatedException("Token de acceso requerido")

    user_id = get_token_subject(credentials.credentials)
    if not user_id:
        raise UnauthenticatedException("Token inválido o expirado")

    user = await user_crud.get(db, user_id)
    if not user:
        raise UnauthenticatedException("Usuario no encontrado")

    return user


async def require_admin(
    current_user: User = Depends(get_current_user)
) -> User:
    """Solo administradores"""
    if current_user.role != "admin":
        raise ForbiddenException("Se requieren permisos de administrador")
    return current_user


async def require_distributor(
    current_user: User = Depends(get_current_user)
) -> User:
    """Solo distribuidores con un distribuidor asociado"""
    if current_user.role != "distributor":
        raise ForbiddenException("Se requieren permisos de distribuidor")
    distributor_scope(current_user)
    return current_user


async def require_admin_or_distributor(
    current_user: User = Depends(get_current_user)
) -> User:
    """Administradores o distribuidores"""
    if current_user.role not in ("admin", "distributor"):
        raise ForbiddenException("Se requieren permisos de administrador o distribuidor")
    return current_user


def distributor_scope(user: User) -> Optional[str]:
    """Distribuidor al que queda restringido el usuario; None si no hay restricción"""
    if user.role != "distributor":
        return None
    if not user.distributor_id:
        raise ValidationException("El usuario distribuidor no tiene un distribuidor asociado")
    return user.distributor_id


__all__ = [
    "security",
    "get_current_user",
    "require_admin",
    "require_distributor",
    "require_admin_or_distributor",
    "distributor_scope",
]
