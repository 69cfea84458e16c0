# tests/conftest.py
import os
from collections.abc import AsyncIterator
from datetime import datetime, timedelta

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# App modules read these at import time
os.environ.setdefault("TESTING", "1")
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("SENTRY_DSN", "")

from worknearby.core.config import Settings  # noqa: E402
from worknearby.main import create_app  # noqa: E402
from worknearby.store import LocationStore  # noqa: E402

MEMORY_URL = "sqlite+aiosqlite://"

NEW_YORK = (40.7128, -74.0060)
LOS_ANGELES = (34.0522, -118.2437)


class FakeClock:
    """Returns strictly increasing timestamps, one second apart."""

    def __init__(self, start: datetime | None = None) -> None:
        self.current = start or datetime(2025, 1, 1, 12, 0, 0)
        self.calls = 0

    def __call__(self) -> datetime:
        value = self.current
        self.current = self.current + timedelta(seconds=1)
        self.calls += 1
        return value


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest_asyncio.fixture
async def store(clock: FakeClock) -> AsyncIterator[LocationStore]:
    s = LocationStore.open(MEMORY_URL, clock=clock)
    await s.create_schema()
    try:
        yield s
    finally:
        await s.close()


@pytest.fixture
def settings() -> Settings:
    return Settings(database_url=MEMORY_URL, app_env="test", allow_origins="")


@pytest_asyncio.fixture
async def app_client(store: LocationStore, settings: Settings) -> AsyncIterator[AsyncClient]:
    app = create_app(settings=settings, store=store)
    # ASGITransport does not drive the lifespan itself
    async with app.router.lifespan_context(app):
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            yield ac
