"""
Manejadores de eventos de inicio y cierre de la aplicacion.
"""
from typing import Callable

import httpx
from fastapi import FastAPI
from loguru import logger

from commerce_sync.application.bootstrap import build_message_bus, build_storage
from commerce_sync.core.config import settings
from commerce_sync.core.logging import configure_logging
from commerce_sync.infrastructure.database.models import MediaTypeModel
from commerce_sync.infrastructure.database.session import close_db, get_session_factory, init_db
from commerce_sync.infrastructure.repositories.system_collection_manager import SystemCollectionManager
from commerce_sync.shared.exceptions.sync import ConfigurationError


def startup_handler(app: FastAPI) -> Callable:
    """
    Manejador de eventos de inicio de la aplicacion.

    Args:
        app: Instancia de FastAPI

    Returns:
        Callable: Funcion asincrona de inicio
    """
    async def startup() -> None:
        """Inicializa recursos al inicio de la aplicacion."""
        try:
            configure_logging(settings)
            logger.info(f"Iniciando {settings.APP_NAME} v{settings.APP_VERSION}")
            logger.info(f"Entorno: {settings.ENVIRONMENT}")

            # Inicializar base de datos (crea tablas si no existen)
            await init_db()
            logger.info("Base de datos inicializada")

            await _validate_reference_data()

            app.state.http_client = httpx.AsyncClient(
                timeout=settings.COMMERCE_HTTP_TIMEOUT_S,
                follow_redirects=True
            )
            app.state.message_bus = build_message_bus(
                settings,
                get_session_factory(),
                app.state.http_client,
                build_storage(settings),
            )
            logger.info(f"Plataforma origen: {settings.COMMERCE_BASE_URL}")

            logger.success("Aplicacion iniciada correctamente")

        except Exception as e:
            logger.error(f"Error durante startup: {e}")
            logger.exception("Detalle del error:")
            raise

    return startup


async def _validate_reference_data() -> None:
    """
    Advierte si faltan las filas sembradas.
    No aborta el arranque: los taxons siguen funcionando sin ellas.
    """
    async with get_session_factory()() as session:
        if await session.get(MediaTypeModel, settings.IMAGE_MEDIA_TYPE_ID) is None:
            logger.warning(
                f"CONFIG: MediaType {settings.IMAGE_MEDIA_TYPE_ID} no existe - "
                f"la sincronizacion de imagenes fallara (ejecuta scripts/init_db.py)"
            )
        try:
            await SystemCollectionManager(session).get_system_collection(settings.MEDIA_COLLECTION_KEY)
        except ConfigurationError as e:
            logger.warning(f"CONFIG: {e.message}")


def shutdown_handler(app: FastAPI) -> Callable:
    """
    Manejador de eventos de cierre de la aplicacion.

    Args:
        app: Instancia de FastAPI

    Returns:
        Callable: Funcion asincrona de cierre
    """
    async def shutdown() -> None:
        """Libera recursos al cerrar la aplicacion."""
        logger.info("Cerrando aplicacion...")

        http_client = getattr(app.state, "http_client", None)
        if http_client is not None:
            await http_client.aclose()
            logger.info("Cliente HTTP cerrado")

        # Cerrar conexiones de base de datos
        await close_db()
        logger.info("Conexiones de base de datos cerradas")

        logger.success("Aplicacion cerrada correctamente")

    return shutdown
