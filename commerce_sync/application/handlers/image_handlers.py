"""
Handlers de mensajes de imagenes.
"""
from typing import List

from loguru import logger

from commerce_sync.application.adapters.interfaces import ImageAdapterInterface
from commerce_sync.application.dto.image_payload import ImagePayload
from commerce_sync.application.messages.image_messages import RemoveImageMessage, SynchronizeImageMessage


class SynchronizeImageMessageHandler:
    """Ejecuta todos los adapters de imagen para un mensaje."""

    def __init__(self, adapters: List[ImageAdapterInterface]):
        self._adapters = adapters

    async def __call__(self, message: SynchronizeImageMessage) -> bool:
        payload = ImagePayload.from_message(message)
        logger.info(f"Sincronizando imagen {payload.id} ({payload.path}, {payload.locale})")

        for adapter in self._adapters:
            await adapter.synchronize(payload)
        return True


class RemoveImageMessageHandler:
    """Elimina la imagen en todos los adapters."""

    def __init__(self, adapters: List[ImageAdapterInterface]):
        self._adapters = adapters

    async def __call__(self, message: RemoveImageMessage) -> bool:
        logger.info(f"Eliminando imagen {message.id}")

        removed = False
        for adapter in self._adapters:
            removed = await adapter.remove(message.id) or removed
        return removed
