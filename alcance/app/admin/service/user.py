"""Lógica de usuarios"""
from __future__ import annotations

from typing import Any, List
from sqlalchemy.ext.asyncio import AsyncSession

from alcance.app.admin.crud import distributor_crud, user_crud
from alcance.app.admin.model import User
from alcance.app.common.auth.crypto import hash_password, is_object_id
from alcance.app.common.exception.errors import (
    DuplicateException,
    NotFoundException,
    ValidationException
)
from alcance.app.common.log import logger


class UserService:
    """Usuarios administrados"""

    async def _check_distributor(self, db: AsyncSession, distributor_id: str) -> None:
        if not is_object_id(distributor_id) or not await distributor_crud.get(db, distributor_id):
            raise ValidationException("Distribuidor asociado inválido")

    async def get_user(self, db: AsyncSession, id: str) -> User:
        if not is_object_id(id):
            raise ValidationException("ID de usuario inválido")
        user = await user_crud.get(db, id)
        if not user:
            raise NotFoundException("Usuario no encontrado")
        return user

    async def get_user_list(self, db: AsyncSession) -> List[User]:
        return await user_crud.get_multi(db)

    async def create_user(self, db: AsyncSession, data: dict[str, Any]) -> User:
        """Alta con rol y afiliación coherentes"""
        if await user_crud.get_by_email(db, data["email"]):
            raise DuplicateException("El correo ya está registrado")

        data = dict(data)
        if data.get("role") == "distributor" and data.get("distributor_id"):
            await self._check_distributor(db, data["distributor_id"])
        data["password_hash"] = hash_password(data.pop("password"))

        user = await user_crud.create(db, data)
        await db.commit()

        logger.info(f"Usuario creado: ID={user.id}, correo={user.email}, rol={user.role}")
        return user

    async def update_user(self, db: AsyncSession, id: str, data: dict[str, Any]) -> User:
        user = await self.get_user(db, id)

        # null solo tiene sentido para la afiliación
        data = {k: v for k, v in data.items() if v is not None or k == "distributor_id"}

        if data.get("email") and data["email"] != user.email:
            if await user_crud.get_by_email(db, data["email"]):
                raise DuplicateException("El correo ya está registrado")

        role = data.get("role", user.role)
        distributor_id = data.get("distributor_id", user.distributor_id)
        if role == "distributor" and distributor_id and "distributor_id" in data:
            await self._check_distributor(db, distributor_id)

        if "password" in data:
            data["password_hash"] = hash_password(data.pop("password"))

        user = await user_crud.update(db, user, data)
        await db.commit()

        logger.info(f"Usuario actualizado: ID={user.id}")
        return user

    async def delete_user(self, db: AsyncSession, id: str, current_user: User) -> None:
        user = await self.get_user(db, id)
        if user.id == current_user.id:
            raise ValidationException("No puede eliminar su propio usuario")

        await user_crud.delete(db, user)
        await db.commit()

        logger.info(f"Usuario eliminado: ID={id}")


user_service = UserService()
