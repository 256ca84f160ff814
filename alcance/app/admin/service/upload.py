"""Subida de imágenes y archivos comprimidos"""
from __future__ import annotations

import os
import uuid
from typing import Any, Literal

from starlette.datastructures import UploadFile

from alcance.app.admin.schema import UploadedFile
from alcance.app.common.exception.errors import ValidationException
from alcance.app.common.log import logger
from alcance.app.common.storage import BlobStore
from alcance.app.core.config import settings

IMAGE_MIME_TYPES = ("image/jpeg", "image/jpg", "image/png", "image/gif", "image/webp")
IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".gif", ".webp")
ARCHIVE_MIME_TYPES = (
    "application/zip",
    "application/x-zip-compressed",
    "application/x-rar-compressed",
    "application/vnd.rar",
)
ARCHIVE_EXTENSIONS = (".zip", ".rar")

FIELD_FOLDERS = {
    "logo": "logos",
    "photo": "photos",
    "foto": "fotos",
    "testReport": "test-reports",
    "testReportFile": "test-reports",
    "test-report": "test-reports",
}
DEFAULT_FOLDER = "general"

CHUNK_SIZE = 1024 * 1024

FileClass = Literal["image", "archive"]


def classify_file(filename: str, content_type: str) -> FileClass:
    """Imagen o archivo comprimido, por tipo MIME o extensión"""
    ext = os.path.splitext(filename or "")[1].lower()
    mime = (content_type or "").split(";")[0].strip().lower()

    if mime in IMAGE_MIME_TYPES or ext in IMAGE_EXTENSIONS:
        return "image"
    if mime in ARCHIVE_MIME_TYPES or ext in ARCHIVE_EXTENSIONS:
        return "archive"
    raise ValidationException(
        "Tipo de archivo no permitido. Solo se permiten imágenes (JPEG, PNG, GIF, WEBP) "
        "y archivos comprimidos (RAR, ZIP)"
    )


def size_limit(file_class: FileClass) -> int:
    return settings.max_image_size if file_class == "image" else settings.max_archive_size


def folder_for_field(field_name: str) -> str:
    return FIELD_FOLDERS.get(field_name, DEFAULT_FOLDER)


def build_key(folder: str, filename: str) -> str:
    """{carpeta}/{uuid4}{extensión}"""
    ext = os.path.splitext(filename or "")[1].lower()
    return f"{folder}/{uuid.uuid4()}{ext}"


async def read_limited(file: UploadFile, max_bytes: int, file_class: FileClass) -> bytes:
    """Lee por bloques y corta en cuanto se supera el límite"""
    total = 0
    chunks: list[bytes] = []
    while True:
        chunk = await file.read(CHUNK_SIZE)
        if not chunk:
            break
        total += len(chunk)
        if total > max_bytes:
            kind = "Las imágenes" if file_class == "image" else "Los archivos comprimidos (RAR/ZIP)"
            raise ValidationException(
                f"{kind} tienen un límite máximo de {max_bytes / 1024 / 1024:g}MB"
            )
        chunks.append(chunk)
    return b"".join(chunks)


class UploadService:
    """Valida y guarda archivos en el almacenamiento configurado"""

    async def _read(self, file: UploadFile) -> tuple[bytes, FileClass]:
        file_class = classify_file(file.filename or "", file.content_type or "")
        data = await read_limited(file, size_limit(file_class), file_class)
        if not data:
            raise ValidationException("El archivo está vacío")
        return data, file_class

    async def _put(
        self,
        store: BlobStore,
        field_name: str,
        file: UploadFile,
        data: bytes,
        file_class: FileClass
    ) -> dict[str, Any]:
        filename = file.filename or ""
        content_type = file.content_type or ""
        folder = folder_for_field(field_name)
        key = build_key(folder, filename)
        url = await store.put(key, data, content_type)

        logger.info(f"Archivo subido: {key} ({len(data)} bytes, {file_class})")
        return UploadedFile(
            url=url,
            key=key,
            folder=folder,
            original_name=filename,
            content_type=content_type,
            size=len(data),
        ).model_dump(by_alias=True)

    async def store_file(self, store: BlobStore, field_name: str, file: UploadFile) -> dict[str, Any]:
        data, file_class = await self._read(file)
        return await self._put(store, field_name, file, data, file_class)

    async def store_files(
        self,
        store: BlobStore,
        files: list[tuple[str, UploadFile]]
    ) -> list[dict[str, Any]]:
        """Varios archivos; se validan todos antes de guardar ninguno"""
        if not files:
            raise ValidationException("No se proporcionó ningún archivo")
        if len(files) > settings.max_upload_files:
            raise ValidationException(f"Se permiten como máximo {settings.max_upload_files} archivos")

        read = []
        for field_name, file in files:
            data, file_class = await self._read(file)
            read.append((field_name, file, data, file_class))

        return [
            await self._put(store, field_name, file, data, file_class)
            for field_name, file, data, file_class in read
        ]


upload_service = UploadService()
