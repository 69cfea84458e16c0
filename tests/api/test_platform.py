from __future__ import annotations

import pytest
from httpx import ASGITransport, AsyncClient

from tests.conftest import MEMORY_URL
from worknearby.core.config import Settings
from worknearby.main import create_app
from worknearby.store import LocationStore


@pytest.mark.asyncio
async def test_health_endpoints(app_client: AsyncClient):
    r = await app_client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"

    assert (await app_client.get("/healthz")).json() == {"ok": True}
    assert (await app_client.get("/readyz")).json() == {"ok": True}


@pytest.mark.asyncio
async def test_categories(app_client: AsyncClient):
    r = await app_client.get("/api/categories")
    assert r.status_code == 200
    assert r.json()["categories"][:2] == ["General", "Delivery"]
    assert "Manual Labor" in r.json()["categories"]


@pytest.mark.asyncio
async def test_request_id_echoes_back(app_client: AsyncClient):
    r = await app_client.get("/healthz", headers={"X-Request-ID": "test-123"})
    assert r.headers.get("X-Request-ID") == "test-123"


@pytest.mark.asyncio
async def test_request_id_generated_when_missing(app_client: AsyncClient):
    r = await app_client.get("/healthz")
    assert r.headers.get("X-Request-ID")


@pytest.mark.asyncio
async def test_security_headers(app_client: AsyncClient):
    r = await app_client.get("/healthz")
    assert r.headers["X-Content-Type-Options"] == "nosniff"
    assert r.headers["Permissions-Policy"] == "geolocation=(self)"


@pytest.mark.asyncio
async def test_readyz_reports_storage_failure(settings: Settings):
    broken = LocationStore.open(MEMORY_URL)

    async def _fail() -> None:
        from worknearby.core.exceptions import StorageError

        raise StorageError("storage is unreachable")

    broken.ping = _fail  # type: ignore[method-assign]
    app = create_app(settings=settings.model_copy(update={"auto_create_schema": False}), store=broken)
    try:
        async with app.router.lifespan_context(app):
            async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
                r = await ac.get("/readyz")
        assert r.status_code == 503
        assert r.json()["error"]["code"] == "storage_unavailable"
    finally:
        await broken.close()


@pytest.mark.asyncio
async def test_storage_error_maps_to_503(settings: Settings):
    # no schema: every query fails at the storage layer
    bare = LocationStore.open(MEMORY_URL)
    app = create_app(settings=settings.model_copy(update={"auto_create_schema": False}), store=bare)
    try:
        async with app.router.lifespan_context(app):
            async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
                r = await ac.get("/api/posts/nearby", params={"lat": 0, "lng": 0})
        assert r.status_code == 503
    finally:
        await bare.close()


@pytest.mark.asyncio
async def test_lifespan_opens_and_closes_own_store(settings: Settings):
    app = create_app(settings=settings)
    async with app.router.lifespan_context(app):
        assert isinstance(app.state.store, LocationStore)
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            r = await ac.post(
                "/api/users", json={"id": "u1", "name": "Ana", "role": "worker", "lat": 1, "lng": 1}
            )
            assert r.status_code == 200
            r = await ac.get("/api/workers/nearby", params={"lat": 1, "lng": 1})
            assert [w["id"] for w in r.json()] == ["u1"]


@pytest.mark.asyncio
async def test_cors_allowed_origin(settings: Settings, store: LocationStore):
    app = create_app(
        settings=settings.model_copy(update={"allow_origins": "http://localhost:3000"}), store=store
    )
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        r = await ac.get("/health", headers={"Origin": "http://localhost:3000"})
        assert r.headers.get("access-control-allow-origin") == "http://localhost:3000"

        r = await ac.get("/health", headers={"Origin": "http://evil.com"})
        assert r.headers.get("access-control-allow-origin") is None


@pytest.mark.asyncio
async def test_rate_limit_get_exceeded(monkeypatch, settings: Settings, store: LocationStore):
    monkeypatch.setenv("RATE_LIMIT_ENABLED", "1")
    app = create_app(settings=settings, store=store)
    headers = {"X-Forwarded-For": "203.0.113.77"}
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        for _ in range(60):
            assert (await ac.get("/health", headers=headers)).status_code == 200
        r = await ac.get("/health", headers=headers)
        assert r.status_code == 429
        assert r.json()["error"]["code"] == "rate_limited"
