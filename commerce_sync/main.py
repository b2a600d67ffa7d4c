"""
Punto de entrada principal de la aplicación FastAPI.
Configura la aplicación, middlewares, rutas y eventos.
"""
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from commerce_sync.core.config import settings
from commerce_sync.core.events import startup_handler, shutdown_handler
from commerce_sync.api.v1.router import api_router
from commerce_sync.api.middlewares.error_handler import ErrorHandlerMiddleware
from commerce_sync.infrastructure.locks.resource_lock import ResourceLockManager
from commerce_sync.shared.exceptions.base import AppException


@asynccontextmanager
async def lifespan(application: FastAPI) -> AsyncIterator[None]:
    """Inicio y cierre de la aplicacion: recursos compartidos en `app.state`."""
    await startup_handler(application)()
    try:
        yield
    finally:
        await shutdown_handler(application)()


def create_application() -> FastAPI:
    """
    Factory para crear y configurar la aplicación FastAPI.

    Returns:
        FastAPI: Instancia configurada de la aplicación
    """
    application = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Consumidor de sincronizacion e-commerce -> gestor de contenidos",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Middleware personalizado para manejo de errores
    application.add_middleware(ErrorHandlerMiddleware)

    # Incluir routers de la API
    application.include_router(api_router, prefix="/api")

    # Manejador global de excepciones personalizadas
    @application.exception_handler(AppException)
    async def app_exception_handler(request, exc: AppException):
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": exc.error_code,
                "message": exc.message,
                "details": exc.details
            }
        )

    # Health check endpoint
    @application.get("/health", tags=["Health"])
    async def health_check():
        """Endpoint para verificar el estado de la aplicación."""
        return {
            "status": "healthy",
            "app_name": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "environment": settings.ENVIRONMENT,
            "resource_locks": ResourceLockManager.get_active_locks_count()
        }

    return application


# Crear instancia de la aplicación
app = create_application()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "commerce_sync.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower()
    )
