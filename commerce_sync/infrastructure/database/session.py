"""
Gestión de sesiones de base de datos.

El engine se crea de forma perezosa para que importar los modelos no
requiera el driver de Postgres (los tests usan SQLite en memoria).
"""
from typing import AsyncGenerator, Optional
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    create_async_engine,
    async_sessionmaker
)
from sqlalchemy.orm import declarative_base

from commerce_sync.core.config import settings


# Base para modelos de SQLAlchemy
Base = declarative_base()

_engine: Optional[AsyncEngine] = None
_session_factory: Optional[async_sessionmaker] = None


def _create_engine_args(database_url: str) -> dict:
    """
    Construye los argumentos del engine segun el tipo de base de datos.
    PostgreSQL usa pool de conexiones, SQLite no lo soporta.
    """
    args = {
        "echo": settings.DEBUG,
        "future": True,
    }

    # Configuracion de pool solo para PostgreSQL
    if "postgresql" in database_url:
        args.update({
            "pool_size": settings.DB_POOL_SIZE,
            "max_overflow": settings.DB_MAX_OVERFLOW,
            "pool_pre_ping": True,  # Verifica conexion antes de usar
        })

    return args


def get_engine() -> AsyncEngine:
    """Retorna el engine global, creandolo en el primer uso."""
    global _engine
    if _engine is None:
        url = settings.effective_database_url
        _engine = create_async_engine(url, **_create_engine_args(url))
    return _engine


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    """
    Session factory para un engine.
    Sin autoflush: el unit of work decide cuando se escribe.
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False
    )


def get_session_factory() -> async_sessionmaker:
    """Retorna la session factory global."""
    global _session_factory
    if _session_factory is None:
        _session_factory = build_session_factory(get_engine())
    return _session_factory


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Generador de sesiones de base de datos.
    Para usar como dependencia en FastAPI.

    Yields:
        AsyncSession: Sesión de base de datos
    """
    async with get_session_factory()() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def init_db() -> None:
    """Inicializa la base de datos creando todas las tablas."""
    # Registrar modelos en Base.metadata
    from commerce_sync.infrastructure.database import models  # noqa: F401

    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db() -> None:
    """Cierra las conexiones de la base de datos."""
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _session_factory = None
