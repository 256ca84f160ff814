"""CRUD de usuarios"""
from __future__ import annotations

from typing import Optional, List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import func, select
from alcance.app.admin.model import User


class CRUDUser:
    """Operaciones sobre usuarios"""

    async def get(self, db: AsyncSession, id: str) -> Optional[User]:
        """Usuario por ID"""
        result = await db.execute(select(User).where(User.id == id))
        return result.scalar_one_or_none()

    async def get_by_email(self, db: AsyncSession, email: str) -> Optional[User]:
        """Usuario por correo (ya normalizado)"""
        result = await db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def get_multi(self, db: AsyncSession) -> List[User]:
        """Listado de usuarios, más recientes primero"""
        result = await db.execute(select(User).order_by(User.created_at.desc()))
        return list(result.scalars().all())

    async def count_by_distributor(self, db: AsyncSession, distributor_id: str) -> int:
        """Usuarios afiliados a un distribuidor"""
        result = await db.execute(
            select(func.count()).select_from(User).where(User.distributor_id == distributor_id)
        )
        return result.scalar_one()

    async def create(self, db: AsyncSession, obj_in: dict) -> User:
        """Crea un usuario"""
        db_obj = User(**obj_in)
        db_obj.enforce_role_invariant()
        db.add(db_obj)
        await db.flush()
        await db.refresh(db_obj)
        return db_obj

    async def update(self, db: AsyncSession, db_obj: User, obj_in: dict) -> User:
        """Actualiza un usuario"""
        for field, value in obj_in.items():
            if hasattr(db_obj, field):
                setattr(db_obj, field, value)

        db_obj.enforce_role_invariant()
        await db.flush()
        await db.refresh(db_obj)
        return db_obj

    async def delete(self, db: AsyncSession, db_obj: User) -> None:
        """Elimina un usuario"""
        await db.delete(db_obj)
        await db.flush()


user_crud = CRUDUser()
