"""Utilidades criptográficas"""
from __future__ import annotations

import re
import secrets
import time
from passlib.context import CryptContext

from alcance.app.core.config import settings

# Contexto de hashing de contraseñas
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.bcrypt_rounds
)

OBJECT_ID_PATTERN = re.compile(r"^[0-9a-fA-F]{24}$")


def hash_password(password: str) -> str:
    """Hash de la contraseña"""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verifica la contraseña"""
    return pwd_context.verify(plain_password, hashed_password)


def generate_object_id() -> str:
    """Identificador hexadecimal de 24 caracteres con prefijo de tiempo"""
    return f"{int(time.time()) & 0xFFFFFFFF:08x}{secrets.token_hex(8)}"


def is_object_id(value: str) -> bool:
    """True si el valor tiene forma de identificador"""
    return bool(value) and OBJECT_ID_PATTERN.match(value) is not None
