"""
DTOs del endpoint de sincronizacion.
"""
from typing import Any, Dict

from pydantic import BaseModel, Field


class SynchronizeImageRequestDTO(BaseModel):
    """Envelope de sincronizacion de imagen recibido por HTTP."""

    id: int = Field(..., description="ID externo de la imagen")
    payload: Dict[str, Any] = Field(default_factory=dict, description="path, locale y campos libres")


class SynchronizeTaxonRequestDTO(BaseModel):
    """Envelope de sincronizacion de taxon recibido por HTTP."""

    id: int = Field(..., description="ID externo del taxon")
    payload: Dict[str, Any] = Field(default_factory=dict)
    ignore_children: bool = Field(default=False, description="Si True, no sincroniza los hijos")


class SyncResultDTO(BaseModel):
    """Resultado de procesar un mensaje."""

    success: bool
    message: str
    resource_kind: str
    resource_id: int
