"""
Tests unitarios para los endpoints de sincronizacion.

Verifica el contrato HTTP:
- POST despacha el envelope y retorna SyncResultDTO.
- DELETE de un recurso inexistente retorna 404.
- Los errores de sincronizacion se traducen a su status HTTP.
"""
from __future__ import annotations

import pytest
from httpx import ASGITransport, AsyncClient

from commerce_sync.api.v1.dependencies.bus_deps import get_message_bus
from commerce_sync.application.bootstrap import build_message_bus


@pytest.fixture
def app_with_bus(test_settings, session_factory, http_client, storage):
    """Crea la app FastAPI con un bus sobre la base de test via dependency_overrides."""
    from commerce_sync.main import create_application
    bus = build_message_bus(test_settings, session_factory, http_client, storage)
    app = create_application()
    app.dependency_overrides[get_message_bus] = lambda: bus
    yield app
    app.dependency_overrides.clear()


def _client(app) -> AsyncClient:
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


@pytest.mark.asyncio
async def test_post_image_synchronizes(app_with_bus, seeded, commerce_server) -> None:
    commerce_server.images["a/b.jpg"] = 10

    async with _client(app_with_bus) as client:
        response = await client.post(
            "/api/v1/sync/images",
            json={"id": 42, "payload": {"path": "a/b.jpg", "locale": "en"}},
        )

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "message": "Imagen sincronizada",
        "resource_kind": "image",
        "resource_id": 42,
    }


@pytest.mark.asyncio
async def test_post_image_remote_failure_returns_502(app_with_bus, seeded, commerce_server) -> None:
    commerce_server.failures["a/b.jpg"] = 500

    async with _client(app_with_bus) as client:
        response = await client.post(
            "/api/v1/sync/images",
            json={"id": 42, "payload": {"path": "a/b.jpg", "locale": "en"}},
        )

    assert response.status_code == 502
    assert response.json()["error"] == "REMOTE_FETCH_FAILED"
    assert response.json()["details"]["status"] == 500


@pytest.mark.asyncio
async def test_post_image_invalid_payload_returns_400(app_with_bus, seeded) -> None:
    async with _client(app_with_bus) as client:
        response = await client.post("/api/v1/sync/images", json={"id": 42, "payload": {}})

    assert response.status_code == 400
    assert response.json()["error"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_post_image_without_seed_returns_configuration_error(app_with_bus, commerce_server) -> None:
    commerce_server.images["a/b.jpg"] = 10

    async with _client(app_with_bus) as client:
        response = await client.post(
            "/api/v1/sync/images",
            json={"id": 42, "payload": {"path": "a/b.jpg", "locale": "en"}},
        )

    assert response.status_code == 500
    assert response.json()["error"] == "CONFIGURATION_ERROR"


@pytest.mark.asyncio
async def test_delete_image(app_with_bus, seeded, commerce_server) -> None:
    commerce_server.images["a/b.jpg"] = 10

    async with _client(app_with_bus) as client:
        await client.post(
            "/api/v1/sync/images",
            json={"id": 42, "payload": {"path": "a/b.jpg", "locale": "en"}},
        )
        deleted = await client.delete("/api/v1/sync/images/42")
        missing = await client.delete("/api/v1/sync/images/42")

    assert deleted.status_code == 200
    assert deleted.json()["message"] == "Imagen eliminada"
    assert missing.status_code == 404
    assert missing.json()["error"] == "ENTITY_NOT_FOUND"


@pytest.mark.asyncio
async def test_taxon_sync_and_delete(app_with_bus) -> None:
    async with _client(app_with_bus) as client:
        created = await client.post(
            "/api/v1/sync/taxons",
            json={
                "id": 1,
                "payload": {
                    "code": "clothing",
                    "translations": [{"locale": "en", "name": "Clothing", "slug": "clothing"}],
                },
            },
        )
        deleted = await client.delete("/api/v1/sync/taxons/1")
        missing = await client.delete("/api/v1/sync/taxons/1")

    assert created.status_code == 200
    assert created.json()["resource_kind"] == "taxon"
    assert deleted.status_code == 200
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_health_reports_resource_locks(app_with_bus) -> None:
    async with _client(app_with_bus) as client:
        response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.json()["resource_locks"] == 0


@pytest.mark.asyncio
async def test_lifespan_runs_startup_and_shutdown(monkeypatch) -> None:
    import commerce_sync.main as main_module

    calls = []

    def fake_startup(app):
        async def startup() -> None:
            calls.append("startup")
            app.state.message_bus = "bus"
        return startup

    def fake_shutdown(app):
        async def shutdown() -> None:
            calls.append("shutdown")
        return shutdown

    monkeypatch.setattr(main_module, "startup_handler", fake_startup)
    monkeypatch.setattr(main_module, "shutdown_handler", fake_shutdown)
    app = main_module.create_application()

    async with app.router.lifespan_context(app):
        assert calls == ["startup"]
        assert app.state.message_bus == "bus"

    assert calls == ["startup", "shutdown"]
