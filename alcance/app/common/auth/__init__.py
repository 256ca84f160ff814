"""Autenticación"""
from __future__ import annotations

from .jwt import (
    create_access_token,
    create_user_token,
    decode_access_token,
    get_token_subject
)
from .crypto import (
    hash_password,
    verify_password,
    generate_object_id,
    is_object_id
)

__all__ = [
    "create_access_token",
    "create_user_token",
    "decode_access_token",
    "get_token_subject",
    "hash_password",
    "verify_password",
    "generate_object_id",
    "is_object_id"
]
