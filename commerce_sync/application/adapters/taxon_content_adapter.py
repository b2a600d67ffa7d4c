"""
Adapter taxon externo -> contenidos por dimension.
"""
from typing import Optional

from loguru import logger

from commerce_sync.application.adapters.interfaces import TaxonAdapterInterface
from commerce_sync.application.dto.taxon_payload import TaxonPayload
from commerce_sync.domain.entities.dimension import Dimension
from commerce_sync.domain.repositories.content_repository import IContentRepository


TAXON_RESOURCE_KEY = "taxons"


class TaxonContentAdapter(TaxonAdapterInterface):
    """
    Escribe un contenido por locale para cada taxon del arbol recibido.
    """

    def __init__(self, content_repository: IContentRepository):
        self._contents = content_repository

    async def synchronize(self, payload: TaxonPayload, ignore_children: bool = False) -> None:
        await self._synchronize_taxon(payload, parent_id=None, ignore_children=ignore_children)

    async def remove(self, taxon_id: int) -> bool:
        removed = await self._contents.remove_by_resource(TAXON_RESOURCE_KEY, str(taxon_id))
        if not removed:
            logger.warning(f"Taxon {taxon_id} no tiene contenidos: nada que eliminar")
            return False

        logger.info(f"Taxon {taxon_id}: {removed} contenidos eliminados")
        return True

    async def _synchronize_taxon(
        self,
        payload: TaxonPayload,
        parent_id: Optional[int],
        ignore_children: bool
    ) -> None:
        for translation in payload.translations:
            content = await self._contents.find_or_create(
                TAXON_RESOURCE_KEY,
                str(payload.id),
                Dimension(locale=translation.locale)
            )
            content.data = {
                "code": payload.code,
                "position": payload.position,
                "parentId": parent_id,
                "name": translation.name,
                "slug": translation.slug,
                "description": translation.description,
            }

        logger.debug(f"Taxon {payload.id} sincronizado ({len(payload.translations)} traducciones)")

        if ignore_children:
            return

        for child in payload.children:
            await self._synchronize_taxon(child, parent_id=payload.id, ignore_children=False)
