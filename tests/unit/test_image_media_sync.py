"""
Tests de sincronizacion de imagenes a traves del bus.

Cubren el ciclo completo con SQLite en memoria, storage en tmp_path y la
plataforma remota simulada con httpx.MockTransport:
- version nueva solo cuando cambia el tamaño
- un bridge y un media por id externo
- metadatos por locale con un unico default
- fallos de descarga y de configuracion sin cambios persistidos
- eliminacion del grafo completo y de los blobs
"""
from __future__ import annotations

import asyncio
from pathlib import Path
from typing import List

import pytest
from sqlalchemy import func, select

from commerce_sync.application.bootstrap import build_message_bus
from commerce_sync.application.messages.image_messages import RemoveImageMessage, SynchronizeImageMessage
from commerce_sync.infrastructure.database.models import (
    CollectionModel,
    FileModel,
    FileVersionMetaModel,
    FileVersionModel,
    ImageMediaBridgeModel,
    MediaModel,
    MediaTypeModel,
)
from commerce_sync.infrastructure.repositories.media_repository import MediaRepository
from commerce_sync.shared.exceptions.domain import ValidationException
from commerce_sync.shared.exceptions.sync import ConfigurationError, RemoteFetchFailed


IMAGE_PATH = "products/42/shirt.jpg"


@pytest.fixture
def bus(test_settings, session_factory, http_client, storage):
    return build_message_bus(test_settings, session_factory, http_client, storage)


def _sync(image_id: int = 42, locale: str = "en", path: str = IMAGE_PATH) -> SynchronizeImageMessage:
    return SynchronizeImageMessage(id=image_id, payload={"path": path, "locale": locale})


async def _count(session_factory, model) -> int:
    async with session_factory() as session:
        result = await session.execute(select(func.count()).select_from(model))
        return result.scalar_one()


async def _media_id(session_factory, image_id: int) -> int:
    async with session_factory() as session:
        bridge = await session.get(ImageMediaBridgeModel, image_id)
        return bridge.media_id


async def _versions(session_factory, image_id: int) -> List[FileVersionModel]:
    media_id = await _media_id(session_factory, image_id)
    async with session_factory() as session:
        return await MediaRepository(session).get_versions(media_id)


async def _metas(session_factory, file_version_id: int) -> List[FileVersionMetaModel]:
    async with session_factory() as session:
        return await MediaRepository(session).get_metas(file_version_id)


def _blobs(test_settings) -> List[Path]:
    return sorted(p for p in Path(test_settings.MEDIA_STORAGE_PATH).rglob("*") if p.is_file())


class TestSynchronizeImage:
    """Tests para SynchronizeImageMessage."""

    @pytest.mark.asyncio
    async def test_first_sync_creates_bridge_media_and_version(
        self, seeded, bus, commerce_server, session_factory, test_settings
    ) -> None:
        commerce_server.images[IMAGE_PATH] = 1000

        assert await bus.dispatch(_sync()) is True

        assert await _count(session_factory, ImageMediaBridgeModel) == 1
        assert await _count(session_factory, MediaModel) == 1

        versions = await _versions(session_factory, 42)
        assert [v.version for v in versions] == [1]
        assert versions[0].size == 1000
        assert versions[0].name == "shirt.jpg"
        assert versions[0].mime_type == "image/jpeg"

        media_id = await _media_id(session_factory, 42)
        async with session_factory() as session:
            media = await session.get(MediaModel, media_id)
            collection_id = (await session.execute(
                select(CollectionModel.id).where(CollectionModel.key == test_settings.MEDIA_COLLECTION_KEY)
            )).scalar_one()
        assert media.type_id == test_settings.IMAGE_MEDIA_TYPE_ID
        assert media.collection_id == collection_id

        metas = await _metas(session_factory, versions[0].id)
        assert [(m.locale, m.is_default, m.title) for m in metas] == [("en", True, "shirt.jpg")]

        assert len(_blobs(test_settings)) == 1

    @pytest.mark.asyncio
    async def test_same_size_does_not_create_version(
        self, seeded, bus, commerce_server, session_factory, test_settings
    ) -> None:
        commerce_server.images[IMAGE_PATH] = 1000

        await bus.dispatch(_sync())
        await bus.dispatch(_sync())

        versions = await _versions(session_factory, 42)
        assert [v.version for v in versions] == [1]
        assert await _count(session_factory, ImageMediaBridgeModel) == 1
        assert len(_blobs(test_settings)) == 1

    @pytest.mark.asyncio
    async def test_size_change_creates_next_version(
        self, seeded, bus, commerce_server, session_factory, test_settings
    ) -> None:
        commerce_server.images[IMAGE_PATH] = 1000
        await bus.dispatch(_sync())

        commerce_server.images[IMAGE_PATH] = 1200
        await bus.dispatch(_sync())

        versions = await _versions(session_factory, 42)
        assert [(v.version, v.size) for v in versions] == [(1, 1000), (2, 1200)]
        assert versions[0].storage_options != versions[1].storage_options
        assert len(_blobs(test_settings)) == 2

        media_id = await _media_id(session_factory, 42)
        async with session_factory() as session:
            file = await MediaRepository(session).get_file(media_id)
        assert file.version == 2
        assert await _count(session_factory, FileModel) == 1
        assert await _count(session_factory, MediaModel) == 1

    @pytest.mark.asyncio
    async def test_new_locale_adds_metadata_without_new_version(
        self, seeded, bus, commerce_server, session_factory
    ) -> None:
        commerce_server.images[IMAGE_PATH] = 1000

        await bus.dispatch(_sync(locale="en"))
        await bus.dispatch(_sync(locale="de"))
        await bus.dispatch(_sync(locale="de"))

        versions = await _versions(session_factory, 42)
        assert len(versions) == 1

        metas = await _metas(session_factory, versions[0].id)
        assert sorted(m.locale for m in metas) == ["de", "en"]
        assert [m.locale for m in metas if m.is_default] == ["en"]

    @pytest.mark.asyncio
    async def test_each_external_id_gets_its_own_media(
        self, seeded, bus, commerce_server, session_factory
    ) -> None:
        commerce_server.images[IMAGE_PATH] = 1000
        commerce_server.images["products/43/pants.jpg"] = 500

        await bus.dispatch(_sync(42))
        await bus.dispatch(_sync(43, path="products/43/pants.jpg"))

        assert await _count(session_factory, ImageMediaBridgeModel) == 2
        assert await _count(session_factory, MediaModel) == 2
        assert await _media_id(session_factory, 42) != await _media_id(session_factory, 43)

    @pytest.mark.asyncio
    async def test_concurrent_messages_create_one_bridge(
        self, seeded, bus, commerce_server, session_factory
    ) -> None:
        commerce_server.images[IMAGE_PATH] = 1000

        await asyncio.gather(bus.dispatch(_sync()), bus.dispatch(_sync()))

        assert await _count(session_factory, ImageMediaBridgeModel) == 1
        assert await _count(session_factory, MediaModel) == 1
        assert len(await _versions(session_factory, 42)) == 1

    @pytest.mark.asyncio
    async def test_fetch_failure_leaves_nothing(
        self, seeded, bus, commerce_server, session_factory, test_settings
    ) -> None:
        commerce_server.failures[IMAGE_PATH] = 503

        with pytest.raises(RemoteFetchFailed) as exc_info:
            await bus.dispatch(_sync())

        assert exc_info.value.status == 503
        assert await _count(session_factory, ImageMediaBridgeModel) == 0
        assert await _count(session_factory, MediaModel) == 0
        assert _blobs(test_settings) == []

    @pytest.mark.asyncio
    async def test_fetch_failure_keeps_existing_versions(
        self, seeded, bus, commerce_server, session_factory
    ) -> None:
        commerce_server.images[IMAGE_PATH] = 1000
        await bus.dispatch(_sync())

        commerce_server.failures[IMAGE_PATH] = 404
        with pytest.raises(RemoteFetchFailed):
            await bus.dispatch(_sync())

        assert [v.version for v in await _versions(session_factory, 42)] == [1]

    @pytest.mark.asyncio
    async def test_invalid_payload_raises_validation(self, seeded, bus, session_factory) -> None:
        with pytest.raises(ValidationException):
            await bus.dispatch(SynchronizeImageMessage(id=42, payload={"locale": "en"}))

        assert await _count(session_factory, ImageMediaBridgeModel) == 0


class TestSynchronizeImageConfiguration:
    """Sin datos de referencia sembrados la sincronizacion falla sin escribir."""

    @pytest.mark.asyncio
    async def test_missing_media_type_raises_configuration_error(
        self, bus, commerce_server, session_factory, test_settings
    ) -> None:
        async with session_factory() as session:
            session.add(CollectionModel(key=test_settings.MEDIA_COLLECTION_KEY, title="Commerce media"))
            await session.commit()
        commerce_server.images[IMAGE_PATH] = 1000

        with pytest.raises(ConfigurationError):
            await bus.dispatch(_sync())

        assert await _count(session_factory, ImageMediaBridgeModel) == 0
        assert await _count(session_factory, MediaModel) == 0
        assert _blobs(test_settings) == []

    @pytest.mark.asyncio
    async def test_missing_collection_raises_configuration_error(
        self, bus, commerce_server, session_factory, test_settings
    ) -> None:
        async with session_factory() as session:
            session.add(MediaTypeModel(id=test_settings.IMAGE_MEDIA_TYPE_ID, name="image"))
            await session.commit()
        commerce_server.images[IMAGE_PATH] = 1000

        with pytest.raises(ConfigurationError) as exc_info:
            await bus.dispatch(_sync())

        assert test_settings.MEDIA_COLLECTION_KEY in exc_info.value.message
        assert await _count(session_factory, ImageMediaBridgeModel) == 0


class TestRemoveImage:
    """Tests para RemoveImageMessage."""

    @pytest.mark.asyncio
    async def test_remove_deletes_graph_and_blobs(
        self, seeded, bus, commerce_server, session_factory, test_settings
    ) -> None:
        commerce_server.images[IMAGE_PATH] = 1000
        await bus.dispatch(_sync(locale="en"))
        await bus.dispatch(_sync(locale="de"))
        commerce_server.images[IMAGE_PATH] = 1200
        await bus.dispatch(_sync())

        assert await bus.dispatch(RemoveImageMessage(id=42)) is True

        for model in (ImageMediaBridgeModel, MediaModel, FileModel, FileVersionModel, FileVersionMetaModel):
            assert await _count(session_factory, model) == 0
        assert _blobs(test_settings) == []

    @pytest.mark.asyncio
    async def test_remove_unknown_id_is_noop(self, seeded, bus, commerce_server, session_factory) -> None:
        commerce_server.images[IMAGE_PATH] = 1000
        await bus.dispatch(_sync(42))

        assert await bus.dispatch(RemoveImageMessage(id=999)) is False

        assert await _count(session_factory, ImageMediaBridgeModel) == 1

    @pytest.mark.asyncio
    async def test_sync_after_remove_starts_over(
        self, seeded, bus, commerce_server, session_factory
    ) -> None:
        commerce_server.images[IMAGE_PATH] = 1000
        await bus.dispatch(_sync())
        await bus.dispatch(RemoveImageMessage(id=42))

        await bus.dispatch(_sync())

        assert [v.version for v in await _versions(session_factory, 42)] == [1]
