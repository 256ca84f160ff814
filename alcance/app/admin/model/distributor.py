"""Modelo de distribuidor"""
from __future__ import annotations

from sqlalchemy import JSON, Column, DateTime, String
from sqlalchemy.sql import func
from alcance.app.common.auth.crypto import generate_object_id
from alcance.app.database.db import Base


def normalize_name(name: str) -> str:
    """Clave para comparar nombres sin distinguir mayúsculas"""
    return (name or "").strip().casefold()


class Distributor(Base):
    """Tabla de distribuidores"""
    __tablename__ = "distributor"

    id = Column(String(24), primary_key=True, default=generate_object_id, comment="ID del distribuidor")
    representative_name = Column(String(256), unique=True, nullable=False, comment="Nombre del representante")
    representative_key = Column(String(256), unique=True, nullable=False, comment="Nombre normalizado")
    full_representative_name = Column(String(512), nullable=False, default="", comment="Razón social")
    address = Column(String(512), nullable=False, default="", comment="Dirección")
    email = Column(String(256), nullable=False, default="", comment="Correo de contacto")
    website = Column(String(1024), nullable=False, default="", comment="Sitio web")
    logo_url = Column(String(1024), nullable=False, default="", comment="URL del logo")
    # solo lo escribe el mantenedor de relaciones
    device_ids = Column(JSON, nullable=False, default=list, comment="IDs de dispositivos asociados")
    created_at = Column(DateTime, default=func.now(), comment="Fecha de creación")
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), comment="Fecha de actualización")

    def set_representative_name(self, name: str) -> None:
        self.representative_name = name.strip()
        self.representative_key = normalize_name(name)

    def __repr__(self) -> str:
        return f"<Distributor(representative_name='{self.representative_name}')>"
