"""Esquemas"""
from __future__ import annotations

from .base import *
from .user import *
from .auth import *
from .brand import *
from .distributor import *
from .device import *
from .upload import *

__all__ = [
    "CamelModel",

    # usuarios y autenticación
    "UserCreate", "UserUpdate", "UserResponse",
    "RegisterRequest", "LoginRequest", "LoginResponse",

    # marcas
    "BrandCreate", "BrandUpdate", "BrandResponse",

    # distribuidores
    "DistributorCreate", "DistributorUpdate", "DistributorBrief",
    "DistributorResponse", "QRCodeResponse",

    # dispositivos
    "DeviceIn", "DeviceResponse", "DeviceWithBrand",

    # subidas
    "UploadedFile",
]
