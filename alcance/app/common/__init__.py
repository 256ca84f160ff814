"""Módulo común"""
from __future__ import annotations

from .log import logger, log_decorator
from .exception.errors import *
from .response.response_schema import *

__all__ = [
    "logger",
    "log_decorator"
]
