"""Lógica de negocio"""
from __future__ import annotations

from .auth import auth_service
from .user import user_service
from .brand import brand_service
from .device import device_service
from .distributor import distributor_service
from .lookup import lookup_service
from .upload import upload_service
from .migration import migration_service

__all__ = [
    "auth_service",
    "user_service",
    "brand_service",
    "device_service",
    "distributor_service",
    "lookup_service",
    "upload_service",
    "migration_service"
]
