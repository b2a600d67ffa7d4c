"""
Repositorio para el grafo media -> file -> file version -> metadatos.
"""
from typing import Any, Dict, List, Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from commerce_sync.infrastructure.database.models import (
    CollectionModel,
    FileModel,
    FileVersionMetaModel,
    FileVersionModel,
    MediaTypeModel,
)


class MediaRepository:
    """Consultas de lectura sobre el grafo de un media."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_file(self, media_id: int) -> Optional[FileModel]:
        """Obtiene el archivo del media (uno por media)."""
        result = await self.session.execute(
            select(FileModel).where(FileModel.media_id == media_id).order_by(FileModel.id.desc())
        )
        return result.scalars().first()

    async def get_latest_version(self, file: FileModel) -> Optional[FileVersionModel]:
        """Obtiene la FileVersion apuntada por `file.version`."""
        result = await self.session.execute(
            select(FileVersionModel).where(
                FileVersionModel.file_id == file.id,
                FileVersionModel.version == file.version
            )
        )
        return result.scalar_one_or_none()

    async def get_versions(self, media_id: int) -> List[FileVersionModel]:
        """Todas las versiones del media, en orden ascendente."""
        result = await self.session.execute(
            select(FileVersionModel)
            .join(FileModel, FileModel.id == FileVersionModel.file_id)
            .where(FileModel.media_id == media_id)
            .order_by(FileVersionModel.version)
        )
        return list(result.scalars().all())

    async def get_metas(self, file_version_id: int) -> List[FileVersionMetaModel]:
        result = await self.session.execute(
            select(FileVersionMetaModel)
            .where(FileVersionMetaModel.file_version_id == file_version_id)
            .order_by(FileVersionMetaModel.id)
        )
        return list(result.scalars().all())

    async def get_storage_options(self, media_id: int) -> List[Dict[str, Any]]:
        """Referencias de storage de todas las versiones del media."""
        return [version.storage_options for version in await self.get_versions(media_id)]

    async def get_media_type(self, media_type_id: int) -> Optional[MediaTypeModel]:
        return await self.session.get(MediaTypeModel, media_type_id)

    async def get_collection(self, collection_id: int) -> Optional[CollectionModel]:
        return await self.session.get(CollectionModel, collection_id)
