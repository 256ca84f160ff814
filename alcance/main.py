"""Aplicación FastAPI"""
from __future__ import annotations

import os
import time
from contextlib import asynccontextmanager
from datetime import datetime
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from alcance.app.core.config import settings
from alcance.app.common.log import logger
from alcance.app.common.exception.errors import (
    BaseErrorException,
    ErrorCode,
    STATUS_CATEGORIES,
    error_body
)
from alcance.app.database import AsyncSessionLocal, init_db
from alcance.app.admin.api import admin_router
from alcance.app.admin.service import auth_service
from alcance.app.api import api_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Arranque y cierre"""
    logger.info("Iniciando aplicación...")

    try:
        await init_db()
        logger.info("Base de datos inicializada")
    except Exception as e:
        logger.error(f"Falló la inicialización de la base de datos: {str(e)}")
        raise

    # el administrador inicial no debe impedir el arranque
    try:
        async with AsyncSessionLocal() as db:
            await auth_service.ensure_default_admin(db)
    except Exception as e:
        logger.error(f"No se pudo crear el administrador inicial: {str(e)}")

    yield

    logger.info("Cerrando aplicación...")


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="API del catálogo de dispositivos de alcance reducido certificados",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan
)


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Manejo de errores: todas las respuestas de error son {error, message}
@app.exception_handler(BaseErrorException)
async def custom_exception_handler(request: Request, exc: BaseErrorException):
    logger.warning(f"Error en la petición: {request.url.path} - {exc.detail}")
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.detail,
        headers=exc.headers
    )


def _validation_message(exc: RequestValidationError) -> str:
    messages = []
    for error in exc.errors():
        loc = ".".join(str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path"))
        msg = str(error.get("msg", "")).removeprefix("Value error, ")
        messages.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(messages) or ErrorCode.VALIDATION_ERROR[1]


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    message = _validation_message(exc)
    logger.warning(f"Validación fallida: {request.url.path} - {message}")
    return JSONResponse(
        status_code=400,
        content=error_body(ErrorCode.VALIDATION_ERROR, message)
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if isinstance(exc.detail, dict) and "error" in exc.detail:
        content = exc.detail
    else:
        default = ErrorCode.INTERNAL_ERROR if exc.status_code >= 500 else ErrorCode.VALIDATION_ERROR
        category = STATUS_CATEGORIES.get(exc.status_code, default)
        content = error_body(category, str(exc.detail) if exc.detail else None)
    logger.warning(f"Error HTTP: {request.url.path} - {exc.status_code} {content['message']}")
    return JSONResponse(
        status_code=exc.status_code,
        content=content,
        headers=getattr(exc, "headers", None)
    )


@app.exception_handler(IntegrityError)
async def integrity_exception_handler(request: Request, exc: IntegrityError):
    logger.warning(f"Violación de integridad: {request.url.path} - {str(exc.orig)}")
    return JSONResponse(
        status_code=400,
        content=error_body(ErrorCode.VALIDATION_ERROR, "Registro duplicado o referencia inválida")
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    logger.error(f"Excepción no controlada: {request.url.path} - {str(exc)}")
    return JSONResponse(
        status_code=500,
        content=error_body(ErrorCode.INTERNAL_ERROR, str(exc))
    )


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Registro de cada petición con su duración"""
    start_time = time.perf_counter()

    logger.info(f"Petición: {request.method} {request.url.path}")

    response = await call_next(request)

    process_time = time.perf_counter() - start_time
    logger.info(
        f"Respuesta: {request.method} {request.url.path} - "
        f"estado: {response.status_code} - "
        f"tiempo: {process_time:.3f}s"
    )

    response.headers["X-Process-Time"] = str(process_time)

    return response


@app.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "service": settings.app_name,
        "version": settings.app_version,
        "timestamp": datetime.now().isoformat()
    }


@app.get("/")
async def root():
    return {
        "message": f"Bienvenido a {settings.app_name}",
        "version": settings.app_version,
        "docs": "/docs",
        "redoc": "/redoc"
    }


# archivos subidos con el almacenamiento local
if settings.storage_backend == "local":
    os.makedirs(settings.upload_dir, exist_ok=True)
    app.mount("/uploads", StaticFiles(directory=settings.upload_dir), name="uploads")


# las rutas públicas van primero: /nombres y /public no deben caer en /{id}
app.include_router(api_router, prefix="/api")
app.include_router(admin_router, prefix="/api")


def run() -> None:
    import uvicorn

    uvicorn.run(
        "alcance.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload_server,
        log_level=settings.log_level.lower()
    )


if __name__ == "__main__":
    run()
