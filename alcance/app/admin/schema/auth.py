"""Esquemas de autenticación"""
from __future__ import annotations

from pydantic import EmailStr, Field, field_validator

from alcance.app.admin.schema.base import CamelModel
from alcance.app.admin.schema.user import UserResponse


class RegisterRequest(CamelModel):
    """Registro público"""
    name: str = Field(..., description="Nombre", min_length=1, max_length=256)
    email: EmailStr = Field(..., description="Correo")
    password: str = Field(..., description="Contraseña", min_length=6, max_length=128)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("El nombre es obligatorio")
        return v

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: str) -> str:
        return v.strip().lower()


class LoginRequest(CamelModel):
    """Inicio de sesión"""
    email: str = Field(..., description="Correo", min_length=1)
    password: str = Field(..., description="Contraseña", min_length=1)

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: str) -> str:
        return v.strip().lower()


class LoginResponse(CamelModel):
    """Respuesta de inicio de sesión y registro"""
    message: str = Field(..., description="Mensaje")
    user: UserResponse = Field(..., description="Usuario")
    token: str = Field(..., description="Token JWT")
