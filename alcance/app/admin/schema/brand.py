"""Esquemas de marca"""
from __future__ import annotations

from datetime import datetime
from typing import Optional
from pydantic import Field, field_validator

from alcance.app.admin.schema.base import CamelModel, strip_or_empty


class BrandCreate(CamelModel):
    """Alta de marca"""
    manufacturer: str = Field(..., description="Fabricante")
    name: str = Field(..., description="Nombre de la marca")
    logo_url: Optional[str] = Field("", description="URL del logo")

    @field_validator("manufacturer", "name")
    @classmethod
    def required_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Fabricante y nombre son obligatorios")
        return v

    @field_validator("logo_url", mode="before")
    @classmethod
    def clean_logo(cls, v):
        return strip_or_empty(v)


class BrandUpdate(CamelModel):
    """Actualización parcial de marca"""
    manufacturer: Optional[str] = Field(None, description="Fabricante")
    name: Optional[str] = Field(None, description="Nombre de la marca")
    logo_url: Optional[str] = Field(None, description="URL del logo")

    @field_validator("manufacturer", "name")
    @classmethod
    def required_text(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("Fabricante y nombre no pueden quedar vacíos")
        return v

    @field_validator("logo_url", mode="before")
    @classmethod
    def clean_logo(cls, v):
        return strip_or_empty(v)


class BrandResponse(CamelModel):
    """Marca"""
    id: str = Field(..., description="ID")
    manufacturer: str = Field(..., description="Fabricante")
    name: str = Field(..., description="Nombre de la marca")
    logo_url: str = Field("", description="URL del logo")
    created_at: Optional[datetime] = Field(None, description="Fecha de creación")
    updated_at: Optional[datetime] = Field(None, description="Fecha de actualización")
