"""
Descarga de imagenes desde la plataforma e-commerce.

- GET <base_url>/media/image/<path>
- Solo HTTP 200 es exito; cualquier otro status es un fallo definitivo
  para este intento (los reintentos son cosa de la cola).
- Errores de transporte y timeouts se reportan igual, con status=None.
"""

from __future__ import annotations

import mimetypes
import shutil
import tempfile
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Optional
from urllib.parse import urlparse

import httpx
from loguru import logger

from commerce_sync.shared.exceptions.sync import RemoteFetchFailed


DEFAULT_MIME_TYPE = "image/jpeg"


@dataclass(frozen=True)
class DownloadedImage:
    """Imagen descargada en un directorio temporal privado."""

    path: Path
    filename: str
    size: int
    mime_type: str

    def cleanup(self) -> None:
        """Elimina el directorio temporal de la descarga."""
        shutil.rmtree(self.path.parent, ignore_errors=True)


def build_image_url(base_url: str, path: str) -> str:
    """Construye la URL publica de una imagen de la plataforma."""
    return f"{base_url.rstrip('/')}/media/image/{path.lstrip('/')}"


def _filename_from_url(url: str) -> str:
    name = PurePosixPath(urlparse(url).path).name
    return name or "image"


def _resolve_mime_type(filename: str, content_type: Optional[str]) -> str:
    """
    Prioridad: extension del archivo, luego Content-Type si es image/*,
    y por ultimo image/jpeg.
    """
    guessed, _ = mimetypes.guess_type(filename)
    if guessed:
        return guessed
    if content_type:
        media_type = content_type.split(";", 1)[0].strip().lower()
        if media_type.startswith("image/"):
            return media_type
    return DEFAULT_MIME_TYPE


class ImageDownloader:
    """
    Cliente de descarga de imagenes.

    Importante:
    - No reintenta: un fallo se propaga como RemoteFetchFailed.
    - El cuerpo se escribe por chunks, sin cargarlo completo en memoria.
    """

    def __init__(
        self,
        base_url: str,
        client: httpx.AsyncClient,
        *,
        timeout_s: float = 30.0,
        temp_dir: Optional[str] = None,
    ) -> None:
        self._base_url = base_url
        self._client = client
        self._timeout_s = timeout_s
        self._temp_dir = temp_dir

    async def download(self, path: str) -> DownloadedImage:
        """
        Descarga la imagen `path` a un archivo temporal.

        Raises:
            RemoteFetchFailed: status != 200, timeout o error de transporte
        """
        url = build_image_url(self._base_url, path)
        filename = _filename_from_url(url)
        work_dir = Path(tempfile.mkdtemp(prefix="commerce-image-", dir=self._temp_dir))
        target = work_dir / filename

        try:
            async with self._client.stream("GET", url, timeout=self._timeout_s) as response:
                if response.status_code != 200:
                    logger.warning(f"Descarga de imagen fallida: {url} -> {response.status_code}")
                    raise RemoteFetchFailed(url, response.status_code)

                with target.open("wb") as handle:
                    async for chunk in response.aiter_bytes():
                        handle.write(chunk)
                content_type = response.headers.get("content-type")
        except httpx.HTTPError as e:
            shutil.rmtree(work_dir, ignore_errors=True)
            logger.warning(f"Error de transporte descargando {url}: {e}")
            raise RemoteFetchFailed(url) from e
        except BaseException:
            # Incluye RemoteFetchFailed, errores de disco y cancelacion
            shutil.rmtree(work_dir, ignore_errors=True)
            raise

        image = DownloadedImage(
            path=target,
            filename=filename,
            size=target.stat().st_size,
            mime_type=_resolve_mime_type(filename, content_type),
        )
        logger.debug(f"Imagen descargada: {url} ({image.size} bytes, {image.mime_type})")
        return image
