"""API de autenticación"""
from __future__ import annotations

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from alcance.app.database import get_db
from alcance.app.admin.model import User
from alcance.app.admin.service import auth_service
from alcance.app.admin.schema import LoginRequest, LoginResponse, RegisterRequest, UserResponse
from alcance.app.common.log import logger
from alcance.app.common.deps import get_current_user

router = APIRouter()


def _session_body(message: str, user: User, token: str) -> dict:
    return LoginResponse(
        message=message,
        user=UserResponse.model_validate(user),
        token=token
    ).model_dump(by_alias=True, mode="json")


@router.post("/register", summary="Registro de usuario", status_code=status.HTTP_201_CREATED)
async def register(
    register_data: RegisterRequest = Body(..., description="Datos de registro"),
    db: AsyncSession = Depends(get_db)
) -> dict:
    """Registro público; el rol siempre es user"""
    try:
        user, token = await auth_service.register(db, register_data.model_dump())
        return _session_body("Usuario registrado exitosamente", user, token)

    except Exception as e:
        logger.error(f"Falló el registro: {str(e)}")
        raise


@router.post("/login", summary="Inicio de sesión")
async def login(
    login_data: LoginRequest = Body(..., description="Credenciales"),
    db: AsyncSession = Depends(get_db)
) -> dict:
    try:
        user, token = await auth_service.login(db, login_data.email, login_data.password)
        return _session_body("Inicio de sesión exitoso", user, token)

    except Exception as e:
        logger.error(f"Falló el inicio de sesión: {str(e)}")
        raise


@router.get("/profile", summary="Perfil del usuario actual")
async def profile(
    current_user: User = Depends(get_current_user)
) -> dict:
    return {"user": UserResponse.model_validate(current_user).model_dump(by_alias=True, mode="json")}
