"""Esquemas de dispositivo"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional
from pydantic import Field, field_validator

from alcance.app.admin.model.device import RESOLUTION_VERSIONS
from alcance.app.admin.schema.base import CamelModel, as_string_list, blank_to_none, strip_or_empty
from alcance.app.admin.schema.brand import BrandResponse

LIST_FIELDS = ("technologies", "frequencies", "antenna_gain", "eirp", "modules", "test_report_names")


class DeviceIn(CamelModel):
    """Campos de entrada; todos opcionales para permitir actualizaciones parciales"""
    model: Optional[str] = Field(None, description="Modelo (único)")
    type: Optional[str] = Field(None, description="Tipo")
    photo_url: Optional[str] = Field(None, description="URL de la foto")
    publication_date: Optional[datetime] = Field(None, description="Fecha de publicación")
    technologies: Optional[list[str]] = Field(None, description="Tecnologías")
    frequencies: Optional[list[str]] = Field(None, description="Frecuencias")
    antenna_gain: Optional[list[str]] = Field(None, description="Ganancia de antena")
    eirp: Optional[list[str]] = Field(None, alias="EIRP", description="PIRE")
    modules: Optional[list[str]] = Field(None, description="Módulos")
    test_report_names: Optional[list[str]] = Field(None, description="Nombres de informes de ensayo")
    test_report_file_url: Optional[str] = Field(None, description="URL del informe de ensayo")
    subtel_certification_date: Optional[datetime] = Field(None, description="Fecha de certificación SUBTEL")
    subtel_certification_office: Optional[str] = Field(None, description="Oficio de certificación SUBTEL")
    resolution_version: Optional[str] = Field(None, description="Versión de la resolución: 2017 o 2025")
    brand: Optional[str] = Field(None, description="ID de la marca")
    # generación múltiple
    distributors: Optional[Any] = Field(None, description="IDs de distribuidores")
    # generación simple (legado)
    distributor: Optional[str] = Field(None, description="ID del distribuidor")

    @field_validator("model", mode="before")
    @classmethod
    def clean_model(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator(*LIST_FIELDS, mode="before")
    @classmethod
    def coerce_list(cls, v):
        return as_string_list(v)

    @field_validator("type", "photo_url", "test_report_file_url", "subtel_certification_office", mode="before")
    @classmethod
    def clean_text(cls, v):
        return strip_or_empty(v)

    @field_validator("publication_date", "subtel_certification_date", "brand", "distributor", mode="before")
    @classmethod
    def blank_values(cls, v):
        return blank_to_none(v)

    @field_validator("publication_date", "subtel_certification_date")
    @classmethod
    def naive_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        # las columnas guardan UTC sin zona horaria
        if v is not None and v.tzinfo is not None:
            v = v.astimezone(timezone.utc).replace(tzinfo=None)
        return v

    @field_validator("resolution_version", mode="before")
    @classmethod
    def check_resolution_version(cls, v):
        v = blank_to_none(v)
        if v is None:
            return v
        v = str(v).strip()
        if v not in RESOLUTION_VERSIONS:
            raise ValueError("resolutionVersion debe ser 2017 o 2025")
        return v


class DeviceResponse(CamelModel):
    """Campos propios del dispositivo"""
    id: str = Field(..., description="ID")
    model: str = Field(..., description="Modelo")
    type: str = Field("", description="Tipo")
    photo_url: str = Field("", description="URL de la foto")
    publication_date: Optional[datetime] = Field(None, description="Fecha de publicación")
    technologies: list[str] = Field(default_factory=list, description="Tecnologías")
    frequencies: list[str] = Field(default_factory=list, description="Frecuencias")
    antenna_gain: list[str] = Field(default_factory=list, description="Ganancia de antena")
    eirp: list[str] = Field(default_factory=list, alias="EIRP", description="PIRE")
    modules: list[str] = Field(default_factory=list, description="Módulos")
    test_report_names: list[str] = Field(default_factory=list, description="Nombres de informes de ensayo")
    test_report_file_url: str = Field("", description="URL del informe de ensayo")
    subtel_certification_date: Optional[datetime] = Field(None, description="Fecha de certificación SUBTEL")
    subtel_certification_office: str = Field("", description="Oficio de certificación SUBTEL")
    resolution_version: str = Field("2017", description="Versión de la resolución")
    created_at: Optional[datetime] = Field(None, description="Fecha de creación")
    updated_at: Optional[datetime] = Field(None, description="Fecha de actualización")


class DeviceWithBrand(DeviceResponse):
    """Dispositivo con su marca"""
    brand: Optional[BrandResponse] = Field(None, description="Marca")
