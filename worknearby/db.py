# worknearby/db.py
"""Engine and session factory construction.

Nothing here is global: the store builds its own engine from a URL and owns
its lifecycle.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.engine.url import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from worknearby.core.config import DEFAULT_DATABASE_URL

_ASYNC_SCHEMES = (
    ("postgresql+psycopg://", "postgresql+asyncpg://"),
    ("postgresql+psycopg2://", "postgresql+asyncpg://"),
    ("postgresql://", "postgresql+asyncpg://"),
    ("postgres://", "postgresql+asyncpg://"),
    ("sqlite://", "sqlite+aiosqlite://"),
)


def normalize_database_url(database_url: str | None) -> str:
    """Map sync driver URLs onto their async counterparts."""
    url = database_url or DEFAULT_DATABASE_URL
    for prefix, replacement in _ASYNC_SCHEMES:
        if url.startswith(prefix):
            return url.replace(prefix, replacement, 1)
    return url


def _is_memory_sqlite(database: str | None) -> bool:
    return database in (None, "", ":memory:")


def create_engine(database_url: str | None = None) -> AsyncEngine:
    url = make_url(normalize_database_url(database_url))
    connect_args: dict[str, Any] = {}
    engine_kwargs: dict[str, Any] = {}

    backend = url.get_backend_name()
    if backend == "postgresql" and url.get_driver_name() == "asyncpg":
        query = dict(url.query)
        if "sslmode" in query:
            # asyncpg takes the mode through `ssl`
            connect_args["ssl"] = query.pop("sslmode")
        # asyncpg does not support channel_binding
        query.pop("channel_binding", None)
        url = url._replace(query=query)
    elif backend == "sqlite":
        connect_args["check_same_thread"] = False
        if _is_memory_sqlite(url.database):
            # one shared connection, otherwise every checkout sees an empty database
            engine_kwargs["poolclass"] = StaticPool

    return create_async_engine(
        url,
        pool_pre_ping=True,
        future=True,
        connect_args=connect_args,
        **engine_kwargs,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
