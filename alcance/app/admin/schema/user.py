"""Esquemas de usuario"""
from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional
from pydantic import EmailStr, Field, field_validator

from alcance.app.admin.schema.base import CamelModel, blank_to_none

Role = Literal["user", "admin", "distributor"]


class UserCreate(CamelModel):
    """Alta de usuario por un administrador"""
    name: str = Field(..., description="Nombre", min_length=1, max_length=256)
    email: EmailStr = Field(..., description="Correo")
    password: str = Field(..., description="Contraseña", min_length=6, max_length=128)
    role: Role = Field("user", description="Rol: user, admin, distributor")
    distributor_id: Optional[str] = Field(None, description="Distribuidor afiliado")

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: str) -> str:
        return v.strip().lower()

    @field_validator("distributor_id", mode="before")
    @classmethod
    def empty_distributor(cls, v):
        return blank_to_none(v)


class UserUpdate(CamelModel):
    """Actualización parcial de usuario"""
    name: Optional[str] = Field(None, description="Nombre", min_length=1, max_length=256)
    email: Optional[EmailStr] = Field(None, description="Correo")
    password: Optional[str] = Field(None, description="Contraseña", min_length=6, max_length=128)
    role: Optional[Role] = Field(None, description="Rol")
    distributor_id: Optional[str] = Field(None, description="Distribuidor afiliado")

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: Optional[str]) -> Optional[str]:
        return v.strip().lower() if v else v

    @field_validator("distributor_id", mode="before")
    @classmethod
    def empty_distributor(cls, v):
        return blank_to_none(v)


class UserResponse(CamelModel):
    """Usuario (sin hash de contraseña)"""
    id: str = Field(..., description="ID")
    name: str = Field(..., description="Nombre")
    email: str = Field(..., description="Correo")
    role: str = Field(..., description="Rol")
    distributor_id: Optional[str] = Field(None, description="Distribuidor afiliado")
    created_at: Optional[datetime] = Field(None, description="Fecha de creación")
    updated_at: Optional[datetime] = Field(None, description="Fecha de actualización")
