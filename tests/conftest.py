"""
Configuración de fixtures para pytest.
"""
import random
from typing import AsyncGenerator, Dict

import httpx
import pytest
import pytest_asyncio
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from commerce_sync.core.config import Settings
from commerce_sync.infrastructure.database import models  # noqa: F401
from commerce_sync.infrastructure.database.seed import seed_reference_data
from commerce_sync.infrastructure.database.session import Base, build_session_factory
from commerce_sync.infrastructure.locks.resource_lock import ResourceLockManager
from commerce_sync.infrastructure.storage.local_storage import LocalStorage


# URL de base de datos de prueba
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
TEST_BASE_URL = "http://shop.test"
TEST_COLLECTION_KEY = "commerce_media"


@pytest.fixture(autouse=True)
def cleanup_locks():
    """Limpia los locks por recurso antes y despues de cada test."""
    ResourceLockManager.reset()
    yield
    ResourceLockManager.reset()


@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """
    Engine SQLite en memoria.
    StaticPool: todas las sesiones comparten la misma base en memoria.
    """
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    # pysqlite no emite BEGIN por si mismo; sin esto los SAVEPOINT no funcionan
    @event.listens_for(engine.sync_engine, "connect")
    def do_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def do_begin(conn):
        conn.exec_driver_sql("BEGIN")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker:
    return build_session_factory(engine)


@pytest_asyncio.fixture
async def db_session(session_factory: async_sessionmaker) -> AsyncGenerator[AsyncSession, None]:
    """Fixture que proporciona una sesión de base de datos para tests."""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def seeded(session_factory: async_sessionmaker) -> None:
    """Siembra tipos de media y la coleccion de sistema."""
    async with session_factory() as session:
        await seed_reference_data(session, TEST_COLLECTION_KEY)


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    return Settings(
        COMMERCE_BASE_URL=TEST_BASE_URL,
        MEDIA_COLLECTION_KEY=TEST_COLLECTION_KEY,
        MEDIA_STORAGE_PATH=str(tmp_path / "storage"),
        MEDIA_STORAGE_SEGMENTS=3,
        RESOURCE_LOCK_TIMEOUT_S=5.0,
        LOG_FILE="",
    )


@pytest.fixture
def storage(test_settings: Settings) -> LocalStorage:
    return LocalStorage(
        test_settings.MEDIA_STORAGE_PATH,
        segments=test_settings.MEDIA_STORAGE_SEGMENTS,
        rng=random.Random(0),
    )


class FakeCommerceServer:
    """
    Servidor de imagenes falso para httpx.MockTransport.

    `images` mapea la ruta bajo /media/image/ a su tamaño en bytes;
    `failures` mapea una ruta a un status HTTP de error.
    """

    def __init__(self) -> None:
        self.images: Dict[str, int] = {}
        self.failures: Dict[str, int] = {}
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix("/media/image/")
        if path in self.failures:
            return httpx.Response(self.failures[path])
        if path not in self.images:
            return httpx.Response(404)
        return httpx.Response(
            200,
            content=b"\xff" * self.images[path],
            headers={"content-type": "image/jpeg"},
        )


@pytest.fixture
def commerce_server() -> FakeCommerceServer:
    return FakeCommerceServer()


@pytest_asyncio.fixture
async def http_client(commerce_server: FakeCommerceServer) -> AsyncGenerator[httpx.AsyncClient, None]:
    async with httpx.AsyncClient(transport=httpx.MockTransport(commerce_server)) as client:
        yield client

