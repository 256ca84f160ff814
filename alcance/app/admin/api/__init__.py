"""Rutas autenticadas"""
from __future__ import annotations

from fastapi import APIRouter
from .auth import router as auth_router
from .user import router as user_router
from .brand import router as brand_router
from .device import router as device_router
from .distributor import router as distributor_router
from .upload import router as upload_router

admin_router = APIRouter()

admin_router.include_router(auth_router, prefix="/auth", tags=["Autenticación"])
admin_router.include_router(user_router, prefix="/users", tags=["Usuarios"])
admin_router.include_router(brand_router, prefix="/marcas", tags=["Marcas"])
admin_router.include_router(device_router, prefix="/dispositivos", tags=["Dispositivos"])
admin_router.include_router(distributor_router, prefix="/distribuidores", tags=["Distribuidores"])
admin_router.include_router(upload_router, prefix="/upload", tags=["Subidas"])

__all__ = ["admin_router"]
