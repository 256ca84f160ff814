"""API de subida de archivos (solo administradores)"""
from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from starlette.datastructures import UploadFile

from alcance.app.admin.model import User
from alcance.app.admin.service import upload_service
from alcance.app.common.exception.errors import ValidationException
from alcance.app.common.response.response_schema import response_message
from alcance.app.common.log import logger
from alcance.app.common.deps import require_admin
from alcance.app.common.storage import BlobStore, get_blob_store

router = APIRouter()


async def _form_files(request: Request) -> list[tuple[str, UploadFile]]:
    """(campo, archivo) de un formulario multipart"""
    content_type = request.headers.get("content-type", "")
    if not content_type.startswith("multipart/form-data"):
        raise ValidationException("Se esperaba un formulario multipart/form-data")
    form = await request.form()
    return [(field, value) for field, value in form.multi_items() if isinstance(value, UploadFile)]


@router.post("", summary="Subir un archivo")
async def upload_file(
    request: Request,
    store: BlobStore = Depends(get_blob_store),
    current_user: User = Depends(require_admin)
) -> dict:
    """La carpeta destino depende del nombre del campo"""
    try:
        files = await _form_files(request)
        if not files:
            raise ValidationException("No se proporcionó ningún archivo")

        field_name, file = files[0]
        stored = await upload_service.store_file(store, field_name, file)
        return response_message("Archivo subido exitosamente", **stored)

    except Exception as e:
        logger.error(f"Falló la subida del archivo: {str(e)}")
        raise


@router.post("/multiple", summary="Subir varios archivos")
async def upload_files(
    request: Request,
    store: BlobStore = Depends(get_blob_store),
    current_user: User = Depends(require_admin)
) -> dict:
    try:
        files = await _form_files(request)
        stored = await upload_service.store_files(store, files)
        return response_message("Archivos subidos exitosamente", count=len(stored), files=stored)

    except Exception as e:
        logger.error(f"Falló la subida de archivos: {str(e)}")
        raise
