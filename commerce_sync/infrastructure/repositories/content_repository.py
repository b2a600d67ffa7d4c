"""
Implementación del repositorio de contenidos usando SQLAlchemy.
"""
from typing import List, Optional
from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from loguru import logger

from commerce_sync.domain.entities.dimension import Dimension
from commerce_sync.domain.repositories.content_repository import IContentRepository
from commerce_sync.infrastructure.database.models import ContentModel


class ContentRepository(IContentRepository):
    """Repositorio de contenidos por (resource_key, resource_id, dimension)."""

    def __init__(self, session: AsyncSession):
        self.session = session

    def _dimension_query(self, resource_key: str, resource_id: str, dimension: Dimension):
        locale_clause = (
            ContentModel.locale.is_(None)
            if dimension.locale is None
            else ContentModel.locale == dimension.locale
        )
        return select(ContentModel).where(
            ContentModel.resource_key == resource_key,
            ContentModel.resource_id == resource_id,
            ContentModel.stage == dimension.stage,
            locale_clause
        )

    async def find_by_resource(
        self,
        resource_key: str,
        resource_id: str,
        dimension: Dimension
    ) -> Optional[ContentModel]:
        result = await self.session.execute(
            self._dimension_query(resource_key, resource_id, dimension)
        )
        return result.scalars().first()

    async def find_or_create(
        self,
        resource_key: str,
        resource_id: str,
        dimension: Dimension
    ) -> ContentModel:
        """
        Obtiene el contenido de la dimension o lo crea vacio.
        El contenido nuevo se escribe en un savepoint: si otro worker inserto la
        misma dimension entre la busqueda y el insert, se descarta el savepoint
        y se retorna la fila existente sin invalidar la transaccion.
        """
        content = await self.find_by_resource(resource_key, resource_id, dimension)
        if content is not None:
            return content

        content = ContentModel(
            resource_key=resource_key,
            resource_id=resource_id,
            locale=dimension.locale,
            stage=dimension.stage,
            data={}
        )
        try:
            async with self.session.begin_nested():
                self.session.add(content)
        except IntegrityError:
            existing = await self.find_by_resource(resource_key, resource_id, dimension)
            if existing is None:
                raise
            logger.debug(f"Contenido {resource_key}:{resource_id} creado en paralelo, se reutiliza")
            return existing

        logger.debug(f"Contenido creado: {resource_key}:{resource_id} ({dimension.locale}, {dimension.stage})")
        return content

    async def find_by_dimensions(
        self,
        resource_key: str,
        resource_id: str,
        dimensions: List[Dimension]
    ) -> List[ContentModel]:
        contents = []
        for dimension in dimensions:
            content = await self.find_by_resource(resource_key, resource_id, dimension)
            if content is not None:
                contents.append(content)
        return contents

    async def remove_by_resource(self, resource_key: str, resource_id: str) -> int:
        result = await self.session.execute(
            delete(ContentModel).where(
                ContentModel.resource_key == resource_key,
                ContentModel.resource_id == resource_id
            )
        )
        return result.rowcount or 0
