"""
Implementación del repositorio de bridges imagen -> media usando SQLAlchemy.
"""
from typing import Optional
from sqlalchemy import delete, select
from loguru import logger

from commerce_sync.domain.repositories.image_media_bridge_repository import IImageMediaBridgeRepository
from commerce_sync.infrastructure.database.models import (
    FileModel,
    FileVersionMetaModel,
    FileVersionModel,
    ImageMediaBridgeModel,
    MediaModel,
)
from commerce_sync.infrastructure.database.unit_of_work import UnitOfWork


class ImageMediaBridgeRepository(IImageMediaBridgeRepository):
    """Implementación del repositorio de bridges con SQLAlchemy."""

    def __init__(self, uow: UnitOfWork):
        """
        Inicializa el repositorio con el unit of work del mensaje.

        Args:
            uow: Unit of work que envuelve la sesión de SQLAlchemy
        """
        self.uow = uow
        self.session = uow.session

    async def find_by_id(self, image_id: int) -> Optional[ImageMediaBridgeModel]:
        """Obtiene un bridge por el ID externo de la imagen."""
        result = await self.session.execute(
            select(ImageMediaBridgeModel).where(ImageMediaBridgeModel.id == image_id)
        )
        return result.scalars().first()

    def create(self, image_id: int, media: MediaModel) -> ImageMediaBridgeModel:
        """Construye el bridge sin persistirlo."""
        return ImageMediaBridgeModel(id=image_id, media=media)

    def add(self, bridge: ImageMediaBridgeModel) -> None:
        """Registra el bridge (y su media, por cascada save-update)."""
        self.uow.persist(bridge)

    async def remove_by_id(self, image_id: int) -> bool:
        """
        Elimina el bridge y todo el grafo del media que posee.

        Orden: metadatos -> versiones -> archivos -> bridge -> media,
        respetando las foreign keys.
        """
        bridge = await self.find_by_id(image_id)
        if bridge is None:
            return False

        media_id = bridge.media_id
        file_ids = select(FileModel.id).where(FileModel.media_id == media_id)
        version_ids = select(FileVersionModel.id).where(FileVersionModel.file_id.in_(file_ids))

        await self.session.execute(
            delete(FileVersionMetaModel).where(FileVersionMetaModel.file_version_id.in_(version_ids))
        )
        await self.session.execute(
            delete(FileVersionModel).where(FileVersionModel.file_id.in_(file_ids))
        )
        await self.session.execute(
            delete(FileModel).where(FileModel.media_id == media_id)
        )
        await self.session.delete(bridge)
        await self.session.flush()
        await self.session.execute(
            delete(MediaModel).where(MediaModel.id == media_id)
        )

        logger.info(f"Bridge de imagen {image_id} eliminado (media {media_id})")
        return True
