"""Esquemas de subida de archivos"""
from __future__ import annotations

from pydantic import Field

from alcance.app.admin.schema.base import CamelModel


class UploadedFile(CamelModel):
    """Archivo almacenado"""
    url: str = Field(..., description="URL pública")
    key: str = Field(..., description="Clave en el almacenamiento")
    folder: str = Field(..., description="Carpeta")
    original_name: str = Field("", description="Nombre original")
    content_type: str = Field("", description="Tipo MIME")
    size: int = Field(..., description="Tamaño en bytes")
