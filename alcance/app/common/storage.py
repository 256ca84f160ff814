"""Almacenamiento de archivos: S3 o directorio local"""
from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from starlette.concurrency import run_in_threadpool

from alcance.app.core.config import settings
from alcance.app.common.log import logger


class BlobStore:
    """Escritura atómica de un objeto y su URL pública"""

    async def put(self, key: str, data: bytes, content_type: str) -> str:
        raise NotImplementedError

    def public_url(self, key: str) -> str:
        raise NotImplementedError


class S3BlobStore(BlobStore):
    """Bucket S3 de lectura pública"""

    def __init__(self, bucket: str, region: str, client=None):
        self.bucket = bucket
        self.region = region
        self._client = client

    @property
    def client(self):
        if self._client is None:
            import boto3

            self._client = boto3.client("s3", region_name=self.region)
        return self._client

    def public_url(self, key: str) -> str:
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{key}"

    async def put(self, key: str, data: bytes, content_type: str) -> str:
        await run_in_threadpool(
            self.client.put_object,
            Bucket=self.bucket,
            Key=key,
            Body=data,
            ContentType=content_type or "application/octet-stream",
        )
        logger.info(f"Archivo subido a S3: {self.bucket}/{key}")
        return self.public_url(key)


class LocalBlobStore(BlobStore):
    """Directorio local servido en /uploads"""

    def __init__(self, root: str, base_url: str):
        self.root = Path(root)
        self.base_url = base_url.rstrip("/")

    def public_url(self, key: str) -> str:
        return f"{self.base_url}/uploads/{key}"

    def _write(self, key: str, data: bytes) -> None:
        target = self.root / key
        target.parent.mkdir(parents=True, exist_ok=True)
        # se escribe aparte y se renombra para no exponer archivos a medias
        partial = target.with_name(target.name + ".part")
        partial.write_bytes(data)
        os.replace(partial, target)

    async def put(self, key: str, data: bytes, content_type: str) -> str:
        await run_in_threadpool(self._write, key, data)
        logger.info(f"Archivo guardado en disco: {key}")
        return self.public_url(key)


_blob_store: Optional[BlobStore] = None


def get_blob_store() -> BlobStore:
    """Almacenamiento configurado (dependencia de FastAPI)"""
    global _blob_store
    if _blob_store is None:
        if settings.storage_backend == "local":
            _blob_store = LocalBlobStore(settings.upload_dir, settings.base_url)
        else:
            _blob_store = S3BlobStore(settings.s3_bucket_name, settings.aws_region)
    return _blob_store


__all__ = ["BlobStore", "S3BlobStore", "LocalBlobStore", "get_blob_store"]
