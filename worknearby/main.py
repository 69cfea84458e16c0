import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import sentry_sdk
import structlog
from fastapi import FastAPI
from sentry_sdk.integrations.starlette import StarletteIntegration
from starlette.middleware.cors import CORSMiddleware

from worknearby.api import errors
from worknearby.api.routers.healthz import router as healthz_router
from worknearby.api.routers.meta import router as meta_router
from worknearby.api.routers.posts import router as posts_router
from worknearby.api.routers.readyz import router as readyz_router
from worknearby.api.routers.users import router as users_router
from worknearby.api.routers.workers import router as workers_router
from worknearby.core.config import Settings, get_settings
from worknearby.logging import setup_logging
from worknearby.middleware.rate_limit import rate_limit_middleware
from worknearby.middleware.request_id import request_id_middleware
from worknearby.middleware.security_headers import security_headers_middleware
from worknearby.store import LocationStore


def _init_sentry(env: str) -> None:
    dsn = os.getenv("SENTRY_DSN")
    if not dsn:
        return
    try:
        rate_raw = float(os.getenv("SENTRY_TRACES_RATE", "0"))
    except ValueError:
        rate_raw = 0.0
    sentry_sdk.init(
        dsn=dsn,
        environment=env,
        release=os.getenv("RELEASE"),
        integrations=[StarletteIntegration()],
        traces_sample_rate=max(0.0, min(0.2, rate_raw)),
        send_default_pii=False,
    )


def create_app(settings: Settings | None = None, store: LocationStore | None = None) -> FastAPI:
    """Build the API application.

    The location store is opened in the lifespan and closed on shutdown. A
    ready-made ``store`` may be passed in, in which case its lifecycle stays
    with the caller.
    """
    setup_logging()
    settings = settings or get_settings()
    _init_sentry(settings.app_env)
    logger = structlog.get_logger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        owned = store is None
        app.state.store = store if store is not None else LocationStore.open(settings.database_url)
        if settings.auto_create_schema:
            await app.state.store.create_schema()
        logger.info("store_opened", env=settings.app_env, owned=owned)
        try:
            yield
        finally:
            if owned:
                await app.state.store.close()
            logger.info("store_closed", owned=owned)

    app = FastAPI(title="Work Nearby", lifespan=lifespan)
    app.state.settings = settings
    errors.install(app)

    app.middleware("http")(request_id_middleware)
    app.middleware("http")(security_headers_middleware)
    app.middleware("http")(rate_limit_middleware)

    if settings.allowed_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.allowed_origins,
            allow_credentials=True,
            allow_methods=["GET", "POST", "OPTIONS", "HEAD"],
            allow_headers=["*"],
        )

    app.include_router(users_router)
    app.include_router(posts_router)
    app.include_router(workers_router)
    app.include_router(meta_router)
    app.include_router(healthz_router)
    app.include_router(readyz_router)

    @app.get("/health")
    def health():
        return {"status": "ok", "env": settings.app_env}

    logger.info("app_startup", env=settings.app_env)
    return app


app = create_app()
