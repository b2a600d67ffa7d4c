"""
Raiz de composicion: construye el bus con sus handlers y adapters.

Es el unico lugar donde se conectan configuracion, cliente HTTP, storage
y repositorios.
"""
from typing import List

import httpx
from sqlalchemy.ext.asyncio import async_sessionmaker

from commerce_sync.application.adapters.image_media_adapter import ImageMediaAdapter
from commerce_sync.application.adapters.interfaces import ImageAdapterInterface, TaxonAdapterInterface
from commerce_sync.application.adapters.taxon_content_adapter import TaxonContentAdapter
from commerce_sync.application.handlers.image_handlers import (
    RemoveImageMessageHandler,
    SynchronizeImageMessageHandler,
)
from commerce_sync.application.handlers.taxon_handlers import (
    RemoveTaxonMessageHandler,
    SynchronizeTaxonMessageHandler,
)
from commerce_sync.application.message_bus import MessageBus
from commerce_sync.application.messages.image_messages import RemoveImageMessage, SynchronizeImageMessage
from commerce_sync.application.messages.taxon_messages import RemoveTaxonMessage, SynchronizeTaxonMessage
from commerce_sync.core.config import Settings
from commerce_sync.infrastructure.database.unit_of_work import UnitOfWork
from commerce_sync.infrastructure.external.commerce.image_downloader import ImageDownloader
from commerce_sync.infrastructure.repositories.content_repository import ContentRepository
from commerce_sync.infrastructure.repositories.image_media_bridge_repository import ImageMediaBridgeRepository
from commerce_sync.infrastructure.repositories.media_repository import MediaRepository
from commerce_sync.infrastructure.repositories.system_collection_manager import SystemCollectionManager
from commerce_sync.infrastructure.storage.local_storage import LocalStorage, StorageInterface


def build_storage(config: Settings) -> LocalStorage:
    return LocalStorage(config.MEDIA_STORAGE_PATH, segments=config.MEDIA_STORAGE_SEGMENTS)


def build_message_bus(
    config: Settings,
    session_factory: async_sessionmaker,
    http_client: httpx.AsyncClient,
    storage: StorageInterface,
) -> MessageBus:
    """
    Construye el bus con los handlers de imagenes y taxons.

    Los adapters se crean por mensaje, ligados a su unit of work.
    """
    downloader = ImageDownloader(
        config.COMMERCE_BASE_URL,
        http_client,
        timeout_s=config.COMMERCE_HTTP_TIMEOUT_S,
    )

    def image_adapters(uow: UnitOfWork) -> List[ImageAdapterInterface]:
        return [
            ImageMediaAdapter(
                bridge_repository=ImageMediaBridgeRepository(uow),
                media_repository=MediaRepository(uow.session),
                system_collection_manager=SystemCollectionManager(uow.session),
                uow=uow,
                downloader=downloader,
                storage=storage,
                collection_key=config.MEDIA_COLLECTION_KEY,
                image_media_type_id=config.IMAGE_MEDIA_TYPE_ID,
            )
        ]

    def taxon_adapters(uow: UnitOfWork) -> List[TaxonAdapterInterface]:
        return [TaxonContentAdapter(ContentRepository(uow.session))]

    bus = MessageBus(session_factory, lock_timeout=config.RESOURCE_LOCK_TIMEOUT_S)
    bus.register(SynchronizeImageMessage, lambda uow: SynchronizeImageMessageHandler(image_adapters(uow)))
    bus.register(RemoveImageMessage, lambda uow: RemoveImageMessageHandler(image_adapters(uow)))
    bus.register(SynchronizeTaxonMessage, lambda uow: SynchronizeTaxonMessageHandler(taxon_adapters(uow)))
    bus.register(RemoveTaxonMessage, lambda uow: RemoveTaxonMessageHandler(taxon_adapters(uow)))
    return bus
