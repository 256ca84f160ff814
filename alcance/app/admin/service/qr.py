"""Códigos QR de distribuidores"""
from __future__ import annotations

import base64
import io
import re

import qrcode
from qrcode.constants import ERROR_CORRECT_M

from alcance.app.admin.model import Distributor
from alcance.app.admin.schema import QRCodeResponse
from alcance.app.core.config import settings


def distributor_slug(distributor: Distributor) -> str:
    """ID del distribuidor o, si falta, su nombre en minúsculas con guiones"""
    if distributor.id:
        return distributor.id
    return re.sub(r"\s+", "-", distributor.representative_name.strip().lower())


def distributor_info_url(distributor: Distributor) -> str:
    """URL pública de la ficha del distribuidor"""
    return f"{settings.base_url.rstrip('/')}/api/distribuidores/{distributor_slug(distributor)}/info"


def render_qr_data_url(text: str) -> str:
    """PNG del QR como data URL en base64"""
    qr = qrcode.QRCode(error_correction=ERROR_CORRECT_M, box_size=10, border=1)
    qr.add_data(text)
    qr.make(fit=True)
    image = qr.make_image(fill_color="black", back_color="white")

    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return "data:image/png;base64," + base64.b64encode(buffer.getvalue()).decode("ascii")


def build_distributor_qr(distributor: Distributor) -> dict:
    """Respuesta completa del QR"""
    url = distributor_info_url(distributor)
    return QRCodeResponse(
        qr_code=render_qr_data_url(url),
        url=url,
        distributor_id=distributor.id,
        representative_name=distributor.representative_name,
    ).model_dump(by_alias=True)
