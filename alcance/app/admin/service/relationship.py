"""Relación dispositivo-distribuidor.

Un dispositivo guarda la lista ordenada de sus distribuidores y cada
distribuidor guarda la lista de sus dispositivos. Este módulo decide qué
referencias pide cada petición según la generación configurada, valida que
existan antes de escribir nada y mantiene sincronizada la lista inversa.
"""
from __future__ import annotations

from typing import Any, Iterable, Optional
from sqlalchemy.ext.asyncio import AsyncSession

from alcance.app.admin.crud import distributor_crud
from alcance.app.admin.model import Device
from alcance.app.admin.schema import DistributorBrief
from alcance.app.common.exception.errors import ValidationException
from alcance.app.common.log import logger
from alcance.app.core.config import settings


def diff_distributor_sets(
    before: Iterable[str],
    after: Iterable[str]
) -> tuple[list[str], list[str]]:
    """(a quitar, a agregar), conservando el orden de entrada"""
    before = list(dict.fromkeys(before))
    after = list(dict.fromkeys(after))
    to_remove = [ref for ref in before if ref not in after]
    to_add = [ref for ref in after if ref not in before]
    return to_remove, to_add


def _brief(distributor) -> dict[str, Any]:
    return DistributorBrief.model_validate(distributor).model_dump(by_alias=True, mode="json")


class RelationshipStrategy:
    """Lectura y escritura de las referencias según la generación del esquema"""

    name = ""
    field = ""

    def requested(self, data: dict[str, Any], creating: bool) -> Optional[list[str]]:
        """Referencias pedidas; None cuando la petición no toca la relación"""
        raise NotImplementedError

    def dump_refs(self, device: Device) -> dict[str, Any]:
        raise NotImplementedError


class MultiOwnerStrategy(RelationshipStrategy):
    """Generación canónica: ``distributors`` es una lista no vacía"""

    name = "multi"
    field = "distributors"

    def requested(self, data: dict[str, Any], creating: bool) -> Optional[list[str]]:
        if not creating and self.field not in data:
            return None

        value = data.get(self.field)
        if isinstance(value, str):
            value = [value]
        if value is not None and not isinstance(value, (list, tuple)):
            raise ValidationException("distributors debe ser una lista de IDs")

        refs = [str(ref).strip() for ref in (value or []) if ref is not None and str(ref).strip()]
        if not refs:
            raise ValidationException("Debe indicar al menos un distribuidor")
        return list(dict.fromkeys(refs))

    def dump_refs(self, device: Device) -> dict[str, Any]:
        return {self.field: [_brief(d) for d in device.distributors]}


class SingleOwnerStrategy(RelationshipStrategy):
    """Generación legada: ``distributor`` es una referencia opcional"""

    name = "single"
    field = "distributor"

    def requested(self, data: dict[str, Any], creating: bool) -> Optional[list[str]]:
        if not creating and self.field not in data:
            return None

        value = data.get(self.field)
        if value is None or not str(value).strip():
            return []
        return [str(value).strip()]

    def dump_refs(self, device: Device) -> dict[str, Any]:
        distributors = device.distributors
        return {self.field: _brief(distributors[0]) if distributors else None}


STRATEGIES = {
    MultiOwnerStrategy.name: MultiOwnerStrategy(),
    SingleOwnerStrategy.name: SingleOwnerStrategy(),
}


def get_relationship_strategy() -> RelationshipStrategy:
    """Estrategia de la generación configurada"""
    return STRATEGIES[settings.distributor_relationship]


async def ensure_distributors_exist(db: AsyncSession, refs: list[str]) -> None:
    """Falla con los IDs que no existen, antes de cualquier escritura"""
    if not refs:
        return
    found = {d.id for d in await distributor_crud.get_many(db, refs)}
    invalid = [ref for ref in refs if ref not in found]
    if invalid:
        raise ValidationException(f"Distribuidores inválidos: {', '.join(invalid)}")


async def sync_back_references(
    db: AsyncSession,
    device_id: str,
    before: Iterable[str],
    after: Iterable[str]
) -> tuple[list[str], list[str]]:
    """Aplica la diferencia sobre las listas inversas de los distribuidores"""
    to_remove, to_add = diff_distributor_sets(before, after)

    for distributor_id in to_remove:
        await distributor_crud.pull_device_ref(db, distributor_id, device_id)
    for distributor_id in to_add:
        await distributor_crud.add_device_ref(db, distributor_id, device_id)

    if to_remove or to_add:
        logger.debug(f"Referencias del dispositivo {device_id}: -{to_remove} +{to_add}")
    return to_remove, to_add
