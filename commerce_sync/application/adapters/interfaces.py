"""
Contratos de los adapters de sincronizacion.

Cada tipo de recurso puede tener varios adapters; el handler del mensaje
los ejecuta todos dentro del mismo unit of work.
"""
from abc import ABC, abstractmethod

from commerce_sync.application.dto.image_payload import ImagePayload
from commerce_sync.application.dto.taxon_payload import TaxonPayload


class ImageAdapterInterface(ABC):
    """Adapter de imagenes."""

    @abstractmethod
    async def synchronize(self, payload: ImagePayload) -> None:
        pass

    @abstractmethod
    async def remove(self, image_id: int) -> bool:
        """Retorna False si no habia nada que eliminar."""
        pass


class TaxonAdapterInterface(ABC):
    """Adapter de taxons."""

    @abstractmethod
    async def synchronize(self, payload: TaxonPayload, ignore_children: bool = False) -> None:
        pass

    @abstractmethod
    async def remove(self, taxon_id: int) -> bool:
        """Retorna False si no habia nada que eliminar."""
        pass
