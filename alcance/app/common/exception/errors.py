"""Definición de errores"""
from __future__ import annotations

from typing import Any, Optional
from fastapi import HTTPException, status
from pydantic import BaseModel, Field


class ErrorCode:
    """Categorías de error: (categoría, mensaje por defecto)"""
    VALIDATION_ERROR = ("ValidationError", "Error de validación")
    NOT_FOUND = ("NotFoundError", "Recurso no encontrado")
    FORBIDDEN = ("ForbiddenError", "Acceso denegado")
    UNAUTHENTICATED = ("UnauthenticatedError", "Token de acceso requerido")
    INTERNAL_ERROR = ("InternalError", "Error interno del servidor")


# código HTTP -> categoría, para errores que no nacen de nuestras excepciones
STATUS_CATEGORIES = {
    status.HTTP_400_BAD_REQUEST: ErrorCode.VALIDATION_ERROR,
    status.HTTP_401_UNAUTHORIZED: ErrorCode.UNAUTHENTICATED,
    status.HTTP_403_FORBIDDEN: ErrorCode.FORBIDDEN,
    status.HTTP_404_NOT_FOUND: ErrorCode.NOT_FOUND,
    status.HTTP_405_METHOD_NOT_ALLOWED: ErrorCode.VALIDATION_ERROR,
    413: ErrorCode.VALIDATION_ERROR,
    422: ErrorCode.VALIDATION_ERROR,
}


class ErrorDetail(BaseModel):
    """Cuerpo de error"""
    error: str = Field(..., description="Categoría del error")
    message: str = Field(..., description="Detalle legible")


def error_body(error_code: tuple[str, str], message: Optional[str] = None) -> dict[str, Any]:
    """Construye el cuerpo {error, message}"""
    return ErrorDetail(error=error_code[0], message=message or error_code[1]).model_dump()


class BaseErrorException(HTTPException):
    """Excepción base; ``detail`` ya es el cuerpo de la respuesta"""

    def __init__(
        self,
        error_code: tuple[str, str],
        status_code: int = status.HTTP_400_BAD_REQUEST,
        message: Optional[str] = None,
        headers: dict[str, Any] | None = None
    ):
        self.category = error_code[0]
        self.message = message or error_code[1]
        super().__init__(
            status_code=status_code,
            detail=error_body(error_code, self.message),
            headers=headers
        )

    def __str__(self) -> str:
        return f"{self.category}: {self.message}"


class ValidationException(BaseErrorException):
    """Entrada mal formada, incompleta o inconsistente"""
    def __init__(self, message: Optional[str] = None):
        super().__init__(
            ErrorCode.VALIDATION_ERROR,
            status_code=status.HTTP_400_BAD_REQUEST,
            message=message
        )


class DuplicateException(ValidationException):
    """Violación de una clave única"""


class NotFoundException(BaseErrorException):
    """Recurso inexistente"""
    def __init__(self, message: Optional[str] = None):
        super().__init__(
            ErrorCode.NOT_FOUND,
            status_code=status.HTTP_404_NOT_FOUND,
            message=message
        )


class ForbiddenException(BaseErrorException):
    """Autenticado pero fuera de su alcance"""
    def __init__(self, message: Optional[str] = None):
        super().__init__(
            ErrorCode.FORBIDDEN,
            status_code=status.HTTP_403_FORBIDDEN,
            message=message
        )


class UnauthenticatedException(BaseErrorException):
    """Credencial ausente, inválida o expirada"""
    def __init__(self, message: Optional[str] = None):
        super().__init__(
            ErrorCode.UNAUTHENTICATED,
            status_code=status.HTTP_401_UNAUTHORIZED,
            message=message,
            headers={"WWW-Authenticate": "Bearer"}
        )


class InternalErrorException(BaseErrorException):
    """Fallo inesperado"""
    def __init__(self, message: Optional[str] = None):
        super().__init__(
            ErrorCode.INTERNAL_ERROR,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            message=message
        )


__all__ = [
    "ErrorCode",
    "STATUS_CATEGORIES",
    "ErrorDetail",
    "error_body",
    "BaseErrorException",
    "ValidationException",
    "DuplicateException",
    "NotFoundException",
    "ForbiddenException",
    "UnauthenticatedException",
    "InternalErrorException",
]
