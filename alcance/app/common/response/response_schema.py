"""Formato de respuestas"""
from __future__ import annotations

from typing import Any
from pydantic import BaseModel, Field


def response_list(key: str, items: list[Any]) -> dict[str, Any]:
    """Respuesta de listado: {count, <plural>}"""
    return {
        "count": len(items),
        key: items
    }


def response_message(message: str, **data: Any) -> dict[str, Any]:
    """Respuesta con mensaje y datos adicionales"""
    return {"message": message, **data}


class MessageResponse(BaseModel):
    """Respuesta con mensaje"""
    message: str = Field(..., description="Mensaje")


class HealthResponse(BaseModel):
    """Estado del servicio"""
    status: str = Field(..., description="Estado")
    service: str = Field(..., description="Nombre del servicio")
    version: str = Field(..., description="Versión")
    timestamp: str = Field(..., description="Marca de tiempo")


__all__ = [
    "response_list",
    "response_message",
    "MessageResponse",
    "HealthResponse",
]
