"""Esquemas de distribuidor"""
from __future__ import annotations

from datetime import datetime
from typing import Any, Optional
from pydantic import Field, field_validator
from pydantic.networks import validate_email

from alcance.app.admin.schema.base import CamelModel, strip_or_empty


def _clean_email(v: Any) -> Any:
    v = strip_or_empty(v)
    if isinstance(v, str) and v:
        try:
            validate_email(v)
        except Exception:
            raise ValueError("Correo electrónico inválido")
        return v.lower()
    return v


def _clean_website(v: Any) -> Any:
    v = strip_or_empty(v)
    if isinstance(v, str) and v and not v.startswith(("http://", "https://")):
        raise ValueError("El sitio web debe comenzar con http:// o https://")
    return v


class DistributorCreate(CamelModel):
    """Alta de distribuidor"""
    representative_name: str = Field(..., description="Nombre del representante")
    full_representative_name: Optional[str] = Field("", description="Razón social")
    address: Optional[str] = Field("", description="Dirección")
    email: Optional[str] = Field("", description="Correo de contacto")
    website: Optional[str] = Field("", description="Sitio web")
    logo_url: Optional[str] = Field("", description="URL del logo")

    @field_validator("representative_name")
    @classmethod
    def required_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("El nombre del representante es obligatorio")
        return v

    @field_validator("full_representative_name", "address", "logo_url", mode="before")
    @classmethod
    def clean_text(cls, v):
        return strip_or_empty(v)

    @field_validator("email", mode="before")
    @classmethod
    def clean_email(cls, v):
        return _clean_email(v)

    @field_validator("website", mode="before")
    @classmethod
    def clean_website(cls, v):
        return _clean_website(v)


class DistributorUpdate(CamelModel):
    """Actualización parcial de distribuidor"""
    representative_name: Optional[str] = Field(None, description="Nombre del representante")
    full_representative_name: Optional[str] = Field(None, description="Razón social")
    address: Optional[str] = Field(None, description="Dirección")
    email: Optional[str] = Field(None, description="Correo de contacto")
    website: Optional[str] = Field(None, description="Sitio web")
    logo_url: Optional[str] = Field(None, description="URL del logo")

    @field_validator("representative_name")
    @classmethod
    def required_name(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("El nombre del representante no puede quedar vacío")
        return v

    @field_validator("full_representative_name", "address", "logo_url", mode="before")
    @classmethod
    def clean_text(cls, v):
        return strip_or_empty(v)

    @field_validator("email", mode="before")
    @classmethod
    def clean_email(cls, v):
        return _clean_email(v)

    @field_validator("website", mode="before")
    @classmethod
    def clean_website(cls, v):
        return _clean_website(v)


class DistributorBrief(CamelModel):
    """Referencia a un distribuidor dentro de un dispositivo"""
    id: str = Field(..., description="ID")
    representative_name: str = Field(..., description="Nombre del representante")
    full_representative_name: str = Field("", description="Razón social")
    logo_url: str = Field("", description="URL del logo")


class DistributorResponse(CamelModel):
    """Distribuidor"""
    id: str = Field(..., description="ID")
    representative_name: str = Field(..., description="Nombre del representante")
    full_representative_name: str = Field("", description="Razón social")
    address: str = Field("", description="Dirección")
    email: str = Field("", description="Correo de contacto")
    website: str = Field("", description="Sitio web")
    logo_url: str = Field("", description="URL del logo")
    device_ids: list[str] = Field(default_factory=list, description="IDs de dispositivos asociados")
    created_at: Optional[datetime] = Field(None, description="Fecha de creación")
    updated_at: Optional[datetime] = Field(None, description="Fecha de actualización")


class QRCodeResponse(CamelModel):
    """Código QR del distribuidor"""
    qr_code: str = Field(..., description="Imagen PNG como data URL")
    url: str = Field(..., description="URL codificada")
    distributor_id: str = Field(..., description="ID del distribuidor")
    representative_name: str = Field(..., description="Nombre del representante")
