"""
Mensajes de sincronizacion de taxons (arbol de categorias).
"""
from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict


@dataclass(frozen=True)
class SynchronizeTaxonMessage:
    """
    Sincronizar un taxon.

    ignore_children: si True, solo se sincroniza el taxon raiz del payload.
    """

    resource_kind: ClassVar[str] = "taxon"

    id: int
    payload: Dict[str, Any] = field(default_factory=dict)
    ignore_children: bool = False


@dataclass(frozen=True)
class RemoveTaxonMessage:
    """Eliminar todos los contenidos del taxon con este id externo."""

    resource_kind: ClassVar[str] = "taxon"

    id: int
