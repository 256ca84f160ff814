"""Registro, inicio de sesión y administrador inicial"""
from __future__ import annotations

from typing import Any
from sqlalchemy.ext.asyncio import AsyncSession

from alcance.app.admin.crud import user_crud
from alcance.app.admin.model import User
from alcance.app.common.auth.crypto import hash_password, verify_password
from alcance.app.common.auth.jwt import create_user_token
from alcance.app.common.exception.errors import DuplicateException, UnauthenticatedException
from alcance.app.common.log import logger
from alcance.app.core.config import settings


class AuthService:
    """Autenticación"""

    async def register(self, db: AsyncSession, data: dict[str, Any]) -> tuple[User, str]:
        """Registro público; siempre crea un usuario con rol user"""
        if await user_crud.get_by_email(db, data["email"]):
            raise DuplicateException("El correo ya está registrado")

        user = await user_crud.create(db, {
            "name": data["name"],
            "email": data["email"],
            "password_hash": hash_password(data["password"]),
            "role": "user",
        })
        await db.commit()

        logger.info(f"Usuario registrado: ID={user.id}, correo={user.email}")
        return user, create_user_token(user.id)

    async def login(self, db: AsyncSession, email: str, password: str) -> tuple[User, str]:
        user = await user_crud.get_by_email(db, email)
        if not user or not verify_password(password, user.password_hash):
            logger.warning(f"Inicio de sesión fallido: {email}")
            raise UnauthenticatedException("Credenciales inválidas")

        logger.info(f"Inicio de sesión: ID={user.id}")
        return user, create_user_token(user.id)

    async def ensure_default_admin(self, db: AsyncSession) -> None:
        """Crea el administrador inicial si está configurado y no existe"""
        email = (settings.default_admin_email or "").strip().lower()
        if not email or not settings.default_admin_password:
            logger.warning("Administrador inicial no configurado")
            return

        if await user_crud.get_by_email(db, email):
            logger.info(f"Administrador inicial ya existe: {email}")
            return

        await user_crud.create(db, {
            "name": settings.default_admin_name,
            "email": email,
            "password_hash": hash_password(settings.default_admin_password),
            "role": "admin",
        })
        await db.commit()
        logger.info(f"Administrador inicial creado: {email}")


auth_service = AuthService()
