"""Consultas públicas de distribuidores"""
from __future__ import annotations

import unicodedata
from typing import Any
from sqlalchemy.ext.asyncio import AsyncSession

from alcance.app.admin.crud import device_crud, distributor_crud
from alcance.app.admin.model import Brand, Distributor
from alcance.app.admin.schema import BrandResponse, DistributorResponse
from alcance.app.admin.service.device import serialize_device_fields
from alcance.app.common.auth.crypto import is_object_id
from alcance.app.common.exception.errors import NotFoundException


def brand_sort_key(brand: Brand) -> tuple[str, str, str]:
    """Orden por nombre sin acentos ni mayúsculas; empates por nombre original e ID"""
    name = brand.name or ""
    folded = "".join(
        c for c in unicodedata.normalize("NFKD", name) if not unicodedata.combining(c)
    ).casefold()
    return folded, name, brand.id


class LookupService:
    """Resuelve distribuidores por slug o nombre y agrupa su catálogo"""

    async def resolve(self, db: AsyncSession, slug: str) -> Distributor:
        """ID de 24 hexadecimales o nombre con guiones en lugar de espacios"""
        distributor = None
        if is_object_id(slug):
            distributor = await distributor_crud.get(db, slug)

        if not distributor:
            distributor = await distributor_crud.find_by_name_fragment(db, slug.replace("-", " "))

        if not distributor:
            raise NotFoundException("Distribuidor no encontrado")
        return distributor

    async def resolve_by_representative_name(self, db: AsyncSession, name: str) -> dict[str, Any]:
        """Distribuidor con sus dispositivos agrupados por marca"""
        distributor = await distributor_crud.get_by_representative_name(db, name)
        if not distributor:
            raise NotFoundException(f"No se encontró un distribuidor con el representante: {name}")

        devices = await device_crud.get_by_distributor(db, distributor.id)

        groups: dict[str, tuple[Brand, list]] = {}
        for device in devices:
            if device.brand is None:
                continue
            groups.setdefault(device.brand.id, (device.brand, []))[1].append(device)

        brands = []
        for brand, brand_devices in sorted(groups.values(), key=lambda group: brand_sort_key(group[0])):
            entry = BrandResponse.model_validate(brand).model_dump(by_alias=True, mode="json")
            entry["devices"] = [
                serialize_device_fields(device)
                for device in sorted(brand_devices, key=lambda d: (d.model, d.id))
            ]
            brands.append(entry)

        data = DistributorResponse.model_validate(distributor).model_dump(by_alias=True, mode="json")
        data.update({
            "brands": brands,
            "totalBrands": len(brands),
            "totalDevices": sum(len(entry["devices"]) for entry in brands),
        })
        return data


lookup_service = LookupService()
