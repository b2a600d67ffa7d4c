"""
Resolucion de colecciones de sistema por clave.
"""
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from commerce_sync.infrastructure.database.models import CollectionModel
from commerce_sync.shared.exceptions.sync import ConfigurationError


class SystemCollectionManager:
    """
    Gestiona la tabla collections para las colecciones de sistema.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_system_collection(self, key: str) -> int:
        """
        Obtiene el ID de la coleccion de sistema `key`.

        Raises:
            ConfigurationError: Si la coleccion no fue sembrada
        """
        result = await self.session.execute(
            select(CollectionModel.id).where(CollectionModel.key == key)
        )
        collection_id = result.scalar_one_or_none()
        if collection_id is None:
            raise ConfigurationError(
                f'Coleccion de sistema "{key}" no encontrada. ¿Ejecutaste scripts/init_db.py?'
            )
        return collection_id
