"""Modelo de dispositivo"""
from __future__ import annotations

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from alcance.app.common.auth.crypto import generate_object_id
from alcance.app.database.db import Base

RESOLUTION_VERSIONS = ("2017", "2025")


class DeviceDistributor(Base):
    """Asociación ordenada dispositivo-distribuidor"""
    __tablename__ = "device_distributor"

    device_id = Column(String(24), ForeignKey("device.id", ondelete="CASCADE"), primary_key=True, comment="ID del dispositivo")
    distributor_id = Column(String(24), ForeignKey("distributor.id", ondelete="CASCADE"), primary_key=True, comment="ID del distribuidor")
    position = Column(Integer, nullable=False, default=0, comment="Orden dentro del dispositivo")

    distributor = relationship("Distributor", lazy="selectin")

    def __repr__(self) -> str:
        return f"<DeviceDistributor(device_id='{self.device_id}', distributor_id='{self.distributor_id}')>"


class Device(Base):
    """Tabla de dispositivos"""
    __tablename__ = "device"

    id = Column(String(24), primary_key=True, default=generate_object_id, comment="ID del dispositivo")
    model = Column(String(256), unique=True, nullable=False, comment="Modelo")
    type = Column(String(64), nullable=False, default="", comment="Tipo")
    photo_url = Column(String(1024), nullable=False, default="", comment="URL de la foto")
    publication_date = Column(DateTime, default=func.now(), comment="Fecha de publicación")
    technologies = Column(JSON, nullable=False, default=list, comment="Tecnologías")
    frequencies = Column(JSON, nullable=False, default=list, comment="Frecuencias")
    antenna_gain = Column(JSON, nullable=False, default=list, comment="Ganancia de antena")
    eirp = Column(JSON, nullable=False, default=list, comment="PIRE")
    modules = Column(JSON, nullable=False, default=list, comment="Módulos")
    test_report_names = Column(JSON, nullable=False, default=list, comment="Nombres de informes de ensayo")
    test_report_file_url = Column(String(1024), nullable=False, default="", comment="URL del informe de ensayo")
    subtel_certification_date = Column(DateTime, nullable=True, comment="Fecha de certificación SUBTEL")
    subtel_certification_office = Column(String(256), nullable=False, default="", comment="Oficio de certificación SUBTEL")
    resolution_version = Column(String(4), nullable=False, default="2017", comment="Versión de la resolución")
    brand_id = Column(String(24), ForeignKey("brand.id"), nullable=False, comment="ID de la marca")
    created_at = Column(DateTime, default=func.now(), comment="Fecha de creación")
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), comment="Fecha de actualización")

    brand = relationship("Brand", lazy="selectin")
    distributor_links = relationship(
        "DeviceDistributor",
        order_by=DeviceDistributor.position,
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
    )

    @property
    def distributor_ids(self) -> list[str]:
        return [link.distributor_id for link in self.distributor_links]

    @property
    def distributors(self) -> list:
        return [link.distributor for link in self.distributor_links if link.distributor is not None]

    def set_distributor_ids(self, distributor_ids: list[str]) -> None:
        """Reemplaza la lista ordenada de distribuidores"""
        current = {link.distributor_id: link for link in self.distributor_links}
        links = []
        for position, distributor_id in enumerate(distributor_ids):
            # se reutiliza la fila existente para no repetir la clave primaria en el flush
            link = current.get(distributor_id) or DeviceDistributor(distributor_id=distributor_id)
            link.position = position
            links.append(link)
        self.distributor_links = links

    def __repr__(self) -> str:
        return f"<Device(model='{self.model}')>"
