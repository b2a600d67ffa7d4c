"""
Script para inicializar la base de datos.
Crea las tablas y siembra los datos de referencia.
"""
import asyncio
from loguru import logger

from commerce_sync.core.config import settings
from commerce_sync.infrastructure.database.seed import seed_reference_data
from commerce_sync.infrastructure.database.session import close_db, get_session_factory, init_db


async def main():
    """Función principal para inicializar la base de datos."""
    logger.info("Inicializando base de datos...")

    try:
        await init_db()
        async with get_session_factory()() as session:
            await seed_reference_data(session, settings.MEDIA_COLLECTION_KEY)
        logger.success("Base de datos inicializada correctamente")
    except Exception as e:
        logger.error(f"Error al inicializar base de datos: {e}")
        raise
    finally:
        await close_db()


if __name__ == "__main__":
    asyncio.run(main())
