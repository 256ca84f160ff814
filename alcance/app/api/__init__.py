"""Rutas públicas"""
from __future__ import annotations

from fastapi import APIRouter
from .device import router as device_router
from .distributor import router as distributor_router

api_router = APIRouter()

api_router.include_router(device_router, prefix="/dispositivos", tags=["Público"])
api_router.include_router(distributor_router, prefix="/distribuidores", tags=["Público"])

__all__ = ["api_router"]
