"""Modelo de marca"""
from __future__ import annotations

from sqlalchemy import Column, DateTime, String
from sqlalchemy.sql import func
from alcance.app.common.auth.crypto import generate_object_id
from alcance.app.database.db import Base


class Brand(Base):
    """Tabla de marcas"""
    __tablename__ = "brand"

    id = Column(String(24), primary_key=True, default=generate_object_id, comment="ID de la marca")
    manufacturer = Column(String(256), nullable=False, comment="Fabricante")
    name = Column(String(256), nullable=False, comment="Nombre de la marca")
    logo_url = Column(String(1024), nullable=False, default="", comment="URL del logo")
    created_at = Column(DateTime, default=func.now(), comment="Fecha de creación")
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), comment="Fecha de actualización")

    def __repr__(self) -> str:
        return f"<Brand(manufacturer='{self.manufacturer}', name='{self.name}')>"
