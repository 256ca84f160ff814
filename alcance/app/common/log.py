"""Sistema de logs"""
from __future__ import annotations

import sys
from pathlib import Path
from loguru import logger
from alcance.app.core.config import settings


# Quitar el handler por defecto
logger.remove()


# Consola
logger.add(
    sys.stdout,
    level=settings.log_level,
    format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
    colorize=True
)


# Archivo (si se configuró)
if settings.log_file:
    log_path = Path(settings.log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    logger.add(
        settings.log_file,
        level=settings.log_level,
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
        rotation="10 MB",
        retention="30 days",
        compression="zip",
        encoding="utf-8"
    )


def log_decorator(func_name: str = None):
    """Decorador que registra el inicio, fin y errores de una corrutina"""
    def decorator(func):
        async def wrapper(*args, **kwargs):
            func_name_str = func_name or func.__name__
            logger.debug(f"Inicio: {func_name_str}")
            try:
                result = await func(*args, **kwargs)
                logger.debug(f"Fin: {func_name_str}")
                return result
            except Exception as e:
                logger.error(f"Falló: {func_name_str}, error: {str(e)}")
                raise
        return wrapper
    return decorator


__all__ = ["logger", "log_decorator"]
