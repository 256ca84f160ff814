"""Modelos"""
from __future__ import annotations

from .user import User
from .brand import Brand
from .distributor import Distributor
from .device import Device, DeviceDistributor

__all__ = ["User", "Brand", "Distributor", "Device", "DeviceDistributor"]
