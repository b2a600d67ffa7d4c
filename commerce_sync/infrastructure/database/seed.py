"""
Datos de referencia sembrados: tipos de media y coleccion de sistema.
"""
from loguru import logger
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from commerce_sync.infrastructure.database.models import CollectionModel, MediaTypeModel


MEDIA_TYPES = {
    1: "document",
    2: "image",
    3: "video",
    4: "audio",
}


async def seed_reference_data(session: AsyncSession, collection_key: str) -> None:
    """
    Inserta los tipos de media y la coleccion de sistema si faltan.
    Se puede ejecutar varias veces sin duplicar filas.
    """
    for media_type_id, name in MEDIA_TYPES.items():
        if await session.get(MediaTypeModel, media_type_id) is None:
            session.add(MediaTypeModel(id=media_type_id, name=name))
            logger.info(f"MediaType sembrado: {media_type_id} ({name})")

    result = await session.execute(
        select(CollectionModel.id).where(CollectionModel.key == collection_key)
    )
    if result.scalar_one_or_none() is None:
        session.add(CollectionModel(key=collection_key, title="Commerce media"))
        logger.info(f"Coleccion de sistema sembrada: {collection_key}")

    await session.commit()
