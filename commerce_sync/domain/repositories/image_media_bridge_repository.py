"""
Interfaz del repositorio de bridges imagen -> media.
Define el contrato que debe cumplir cualquier implementación.
"""
from abc import ABC, abstractmethod
from typing import Optional

from commerce_sync.infrastructure.database.models import ImageMediaBridgeModel, MediaModel


class IImageMediaBridgeRepository(ABC):
    """
    Interfaz del repositorio de bridges.
    Mapea el id externo de una imagen al media local que la representa.
    """

    @abstractmethod
    async def find_by_id(self, image_id: int) -> Optional[ImageMediaBridgeModel]:
        """
        Obtiene el bridge de una imagen externa.

        Args:
            image_id: ID de la imagen en la plataforma origen

        Returns:
            Optional[ImageMediaBridgeModel]: Bridge encontrado o None
        """
        pass

    @abstractmethod
    def create(self, image_id: int, media: MediaModel) -> ImageMediaBridgeModel:
        """
        Construye un bridge nuevo que envuelve `media`. No lo persiste.
        """
        pass

    @abstractmethod
    def add(self, bridge: ImageMediaBridgeModel) -> None:
        """Registra el bridge en el unit of work para el proximo commit."""
        pass

    @abstractmethod
    async def remove_by_id(self, image_id: int) -> bool:
        """
        Elimina el bridge y, en cascada, el media con sus archivos,
        versiones y metadatos.

        Returns:
            bool: True si existia y se eliminó, False si no existia
        """
        pass
