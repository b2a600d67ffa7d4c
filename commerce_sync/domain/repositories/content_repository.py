"""
Interfaz del repositorio de contenidos por dimension.
"""
from abc import ABC, abstractmethod
from typing import List, Optional

from commerce_sync.domain.entities.dimension import Dimension
from commerce_sync.infrastructure.database.models import ContentModel


class IContentRepository(ABC):
    """Contenidos de recursos externos indexados por (resource_key, resource_id, dimension)."""

    @abstractmethod
    async def find_or_create(
        self,
        resource_key: str,
        resource_id: str,
        dimension: Dimension
    ) -> ContentModel:
        pass

    @abstractmethod
    async def find_by_resource(
        self,
        resource_key: str,
        resource_id: str,
        dimension: Dimension
    ) -> Optional[ContentModel]:
        pass

    @abstractmethod
    async def find_by_dimensions(
        self,
        resource_key: str,
        resource_id: str,
        dimensions: List[Dimension]
    ) -> List[ContentModel]:
        """Contenidos del recurso en las dimensiones dadas, en el mismo orden."""
        pass

    @abstractmethod
    async def remove_by_resource(self, resource_key: str, resource_id: str) -> int:
        """
        Elimina todos los contenidos del recurso.

        Returns:
            int: Numero de filas eliminadas
        """
        pass
