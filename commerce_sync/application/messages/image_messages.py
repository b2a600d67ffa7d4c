"""
Mensajes de sincronizacion de imagenes.
"""
from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict


@dataclass(frozen=True)
class SynchronizeImageMessage:
    """Sincronizar una imagen: payload con `path`, `locale` y campos libres."""

    resource_kind: ClassVar[str] = "image"

    id: int
    payload: Dict[str, Any] = field(default_factory=dict)
    ignore_children: bool = False


@dataclass(frozen=True)
class RemoveImageMessage:
    """Eliminar la imagen (bridge + media) con este id externo."""

    resource_kind: ClassVar[str] = "image"

    id: int
