"""Base de datos"""
from __future__ import annotations

from .db import Base, engine, AsyncSessionLocal, get_db, init_db, drop_db

__all__ = [
    "Base",
    "engine",
    "AsyncSessionLocal",
    "get_db",
    "init_db",
    "drop_db"
]
