"""Operaciones CRUD"""
from __future__ import annotations

from .user import user_crud
from .brand import brand_crud
from .distributor import distributor_crud
from .device import device_crud

__all__ = [
    "user_crud",
    "brand_crud",
    "distributor_crud",
    "device_crud"
]
