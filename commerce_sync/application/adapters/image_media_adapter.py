"""
Adapter imagen externa -> media versionado.

Flujo de `synchronize`:
1. Buscar el bridge del id externo
2. Descargar la imagen (RemoteFetchFailed si falla, sin cambios pendientes)
3. Crear bridge + media si es la primera vez
4. Si el tamaño coincide con la ultima version: no se crea version nueva
5. Si no: guardar el blob, crear FileVersion N+1 con su metadato por locale

Nota sobre idempotencia: la comparacion es SOLO por tamaño en bytes. Dos
imagenes distintas con el mismo tamaño se consideran iguales. Es un
comportamiento conocido y se conserva tal cual.
"""
import asyncio
from functools import partial
from typing import Optional

from loguru import logger

from commerce_sync.application.adapters.interfaces import ImageAdapterInterface
from commerce_sync.application.dto.image_payload import ImagePayload
from commerce_sync.domain.repositories.image_media_bridge_repository import IImageMediaBridgeRepository
from commerce_sync.infrastructure.database.models import (
    CollectionModel,
    FileModel,
    FileVersionMetaModel,
    FileVersionModel,
    MediaModel,
    MediaTypeModel,
)
from commerce_sync.infrastructure.database.unit_of_work import UnitOfWork
from commerce_sync.infrastructure.external.commerce.image_downloader import DownloadedImage, ImageDownloader
from commerce_sync.infrastructure.repositories.media_repository import MediaRepository
from commerce_sync.infrastructure.repositories.system_collection_manager import SystemCollectionManager
from commerce_sync.infrastructure.storage.local_storage import StorageInterface
from commerce_sync.shared.exceptions.sync import ConfigurationError


IMAGE_MEDIA_TYPE = 2


class ImageMediaAdapter(ImageAdapterInterface):
    """
    Sincroniza imagenes de la plataforma e-commerce como medias versionados.
    """

    def __init__(
        self,
        *,
        bridge_repository: IImageMediaBridgeRepository,
        media_repository: MediaRepository,
        system_collection_manager: SystemCollectionManager,
        uow: UnitOfWork,
        downloader: ImageDownloader,
        storage: StorageInterface,
        collection_key: str,
        image_media_type_id: int = IMAGE_MEDIA_TYPE,
    ) -> None:
        self._bridges = bridge_repository
        self._media = media_repository
        self._collections = system_collection_manager
        self._uow = uow
        self._downloader = downloader
        self._storage = storage
        self._collection_key = collection_key
        self._image_media_type_id = image_media_type_id

    async def synchronize(self, payload: ImagePayload) -> None:
        bridge = await self._bridges.find_by_id(payload.id)
        image = await self._downloader.download(payload.path)

        try:
            if bridge is None:
                bridge = self._bridges.create(payload.id, MediaModel())
                self._bridges.add(bridge)
                await self._uow.flush()
                logger.info(f"Bridge creado para imagen {payload.id} (media {bridge.media.id})")

            await self._update_media(bridge.media, image, payload.locale)
        finally:
            image.cleanup()

        # Otros adapters del mismo mensaje necesitan ver el media escrito
        await self._uow.flush()

    async def remove(self, image_id: int) -> bool:
        bridge = await self._bridges.find_by_id(image_id)
        if bridge is None:
            logger.warning(f"Imagen {image_id} no tiene bridge: nada que eliminar")
            return False

        storage_options = await self._media.get_storage_options(bridge.media_id)
        await self._bridges.remove_by_id(image_id)

        # Los blobs se borran solo si el borrado de filas se confirma
        for options in storage_options:
            self._uow.after_commit(partial(asyncio.to_thread, self._storage.remove, options))
        return True

    async def _update_media(self, media: MediaModel, image: DownloadedImage, locale: str) -> MediaModel:
        file = await self._media.get_file(media.id)
        latest_version: Optional[FileVersionModel] = None
        if file is not None:
            latest_version = await self._media.get_latest_version(file)

        if latest_version is not None and latest_version.size == image.size:
            # Misma imagen, no hace falta una version nueva
            await self._ensure_locale_meta(latest_version, locale)
            logger.debug(f"Media {media.id}: tamaño sin cambios ({image.size} bytes), sin version nueva")
            return media

        media_type = await self._get_image_media_type()
        collection = await self._get_collection()

        storage_options = await asyncio.to_thread(self._storage.save, image.path, image.filename)
        self._uow.on_rollback(partial(asyncio.to_thread, self._storage.remove, storage_options))

        next_version = latest_version.version + 1 if latest_version else 1
        if file is None:
            file = FileModel(media_id=media.id, version=next_version)
            self._uow.persist(file)
        else:
            file.version = next_version

        media.type_id = media_type.id
        media.collection_id = collection.id
        self._uow.persist(media)
        await self._uow.flush()

        file_version = FileVersionModel(
            file_id=file.id,
            version=next_version,
            size=image.size,
            name=image.filename,
            storage_options=storage_options,
            mime_type=image.mime_type or "image/jpeg",
        )
        self._uow.persist(file_version)
        await self._uow.flush()

        self._uow.persist(FileVersionMetaModel(
            file_version_id=file_version.id,
            title=image.filename,
            locale=locale,
            is_default=True,
        ))

        logger.info(
            f"Media {media.id}: version {next_version} creada ({image.size} bytes, {image.filename})"
        )
        return media

    async def _ensure_locale_meta(self, file_version: FileVersionModel, locale: str) -> None:
        """
        Agrega el metadato del locale a una version existente si aun no lo tiene.
        Solo es default si la version no tenia ninguno.
        """
        metas = await self._media.get_metas(file_version.id)
        if any(meta.locale == locale for meta in metas):
            return

        self._uow.persist(FileVersionMetaModel(
            file_version_id=file_version.id,
            title=file_version.name,
            locale=locale,
            is_default=not any(meta.is_default for meta in metas),
        ))
        logger.info(f"FileVersion {file_version.id}: metadato agregado para locale '{locale}'")

    async def _get_image_media_type(self) -> MediaTypeModel:
        media_type = await self._media.get_media_type(self._image_media_type_id)
        if media_type is None:
            logger.error(f"MediaType {self._image_media_type_id} no existe")
            raise ConfigurationError(
                f'MediaType "{self._image_media_type_id}" no encontrado. ¿Ejecutaste scripts/init_db.py?'
            )
        return media_type

    async def _get_collection(self) -> CollectionModel:
        collection_id = await self._collections.get_system_collection(self._collection_key)
        collection = await self._media.get_collection(collection_id)
        if collection is None:
            raise ConfigurationError(f"Coleccion {collection_id} no encontrada")
        return collection
