"""Modelo de usuario"""
from __future__ import annotations

from sqlalchemy import Column, DateTime, ForeignKey, String
from sqlalchemy.sql import func
from alcance.app.common.auth.crypto import generate_object_id
from alcance.app.common.exception.errors import ValidationException
from alcance.app.database.db import Base

ROLES = ("user", "admin", "distributor")


class User(Base):
    """Tabla de usuarios"""
    __tablename__ = "app_user"

    id = Column(String(24), primary_key=True, default=generate_object_id, comment="ID del usuario")
    name = Column(String(256), nullable=False, comment="Nombre")
    email = Column(String(256), unique=True, nullable=False, comment="Correo")
    password_hash = Column(String(256), nullable=False, comment="Hash de la contraseña")
    role = Column(String(32), nullable=False, default="user", comment="Rol")
    distributor_id = Column(String(24), ForeignKey("distributor.id"), nullable=True, comment="Distribuidor afiliado")
    created_at = Column(DateTime, default=func.now(), comment="Fecha de creación")
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), comment="Fecha de actualización")

    def enforce_role_invariant(self) -> None:
        """Un distribuidor necesita afiliación; los demás roles no la llevan"""
        if self.role not in ROLES:
            raise ValidationException(f"Rol inválido: {self.role}")
        if self.role == "distributor":
            if not self.distributor_id:
                raise ValidationException("Un usuario distribuidor requiere un distribuidor asociado")
        else:
            self.distributor_id = None

    def __repr__(self) -> str:
        return f"<User(email='{self.email}', role='{self.role}')>"
