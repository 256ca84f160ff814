"""Tokens JWT"""
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any
from jose import JWTError, jwt

from alcance.app.core.config import settings


def create_access_token(
    data: Dict[str, Any],
    expires_delta: Optional[timedelta] = None
) -> str:
    """Crea un token de acceso"""
    to_encode = data.copy()

    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=settings.access_token_expire_minutes)

    to_encode.update({"exp": expire})

    return jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=settings.algorithm
    )


def create_user_token(user_id: str) -> str:
    """Token con el id del usuario como sujeto"""
    return create_access_token({"sub": user_id})


def decode_access_token(token: str) -> Optional[Dict[str, Any]]:
    """Decodifica un token; None si es inválido o expiró"""
    try:
        # jose ya rechaza tokens con "exp" vencido
        return jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.algorithm]
        )
    except JWTError:
        return None


def get_token_subject(token: str) -> Optional[str]:
    """Id del usuario dueño del token"""
    payload = decode_access_token(token)
    if not payload:
        return None
    subject = payload.get("sub")
    return str(subject) if subject else None
