"""
Content store en sistema de archivos local.

Los archivos se reparten en segmentos (subdirectorios "00".."NN") para no
acumular todo en un solo directorio. La referencia devuelta por `save` es
opaca para el resto del sistema y se persiste tal cual en la FileVersion.
"""

from __future__ import annotations

import random
import shutil
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, BinaryIO, Dict, Optional, Tuple

from loguru import logger


StorageOptions = Dict[str, Any]


class StorageError(RuntimeError):
    """Error del content store."""


class StorageInterface(ABC):
    """Contrato minimo del content store."""

    @abstractmethod
    def save(self, local_path: str | Path, filename: str) -> StorageOptions:
        """Copia el archivo local al store y retorna su referencia."""

    @abstractmethod
    def remove(self, storage_options: StorageOptions) -> None:
        """Elimina el blob referenciado. Es un no-op si ya no existe."""

    @abstractmethod
    def path_for(self, storage_options: StorageOptions) -> Path:
        """Ruta local del blob referenciado."""


class LocalStorage(StorageInterface):
    """
    Storage local: `<root>/<segment>/<filename>`.

    Si el nombre ya existe en el segmento se agrega un sufijo `-1`, `-2`, ...
    al stem, de modo que nunca se sobreescribe una version anterior.
    """

    def __init__(self, root: str | Path, segments: int = 10, *, rng: Optional[random.Random] = None) -> None:
        if segments < 1:
            raise ValueError("segments debe ser >= 1")
        self._root = Path(root)
        self._segments = segments
        self._rng = rng or random.Random()

    def save(self, local_path: str | Path, filename: str) -> StorageOptions:
        source = Path(local_path)
        if not source.is_file():
            raise StorageError(f"Archivo local no encontrado: {source}")

        segment = f"{self._rng.randrange(self._segments):02d}"
        segment_dir = self._root / segment
        segment_dir.mkdir(parents=True, exist_ok=True)

        target_name, target = self._reserve(segment_dir, filename)
        try:
            with target, source.open("rb") as src:
                shutil.copyfileobj(src, target)
        except BaseException:
            (segment_dir / target_name).unlink(missing_ok=True)
            raise

        logger.debug(f"Blob guardado en storage: {segment}/{target_name}")
        return {"segment": segment, "fileName": target_name}

    def remove(self, storage_options: StorageOptions) -> None:
        path = self.path_for(storage_options)
        try:
            path.unlink()
        except FileNotFoundError:
            return
        logger.debug(f"Blob eliminado del storage: {path}")

    def path_for(self, storage_options: StorageOptions) -> Path:
        try:
            return self._root / storage_options["segment"] / storage_options["fileName"]
        except (KeyError, TypeError) as e:
            raise StorageError(f"Referencia de storage invalida: {storage_options!r}") from e

    @staticmethod
    def _reserve(directory: Path, filename: str) -> Tuple[str, BinaryIO]:
        """Crea el archivo destino en exclusiva; el nombre queda tomado al abrirlo."""
        candidate = Path(filename)
        counter = 0
        name = candidate.name
        while True:
            try:
                return name, open(directory / name, "xb")
            except FileExistsError:
                counter += 1
                name = f"{candidate.stem}-{counter}{candidate.suffix}"
