"""
Handlers de mensajes de taxons.
"""
from typing import List

from loguru import logger

from commerce_sync.application.adapters.interfaces import TaxonAdapterInterface
from commerce_sync.application.dto.taxon_payload import TaxonPayload
from commerce_sync.application.messages.taxon_messages import RemoveTaxonMessage, SynchronizeTaxonMessage


class SynchronizeTaxonMessageHandler:
    """Ejecuta todos los adapters de taxon para un mensaje."""

    def __init__(self, adapters: List[TaxonAdapterInterface]):
        self._adapters = adapters

    async def __call__(self, message: SynchronizeTaxonMessage) -> bool:
        payload = TaxonPayload.from_message(message)
        logger.info(
            f"Sincronizando taxon {payload.id} ({payload.code}, "
            f"hijos {'ignorados' if message.ignore_children else len(payload.children)})"
        )

        for adapter in self._adapters:
            await adapter.synchronize(payload, ignore_children=message.ignore_children)
        return True


class RemoveTaxonMessageHandler:
    """Elimina el taxon en todos los adapters."""

    def __init__(self, adapters: List[TaxonAdapterInterface]):
        self._adapters = adapters

    async def __call__(self, message: RemoveTaxonMessage) -> bool:
        logger.info(f"Eliminando taxon {message.id}")

        removed = False
        for adapter in self._adapters:
            removed = await adapter.remove(message.id) or removed
        return removed
