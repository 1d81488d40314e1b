"""
player_store.api.app

FastAPI app factory for the player store.

Responsibilities:
- Build the FastAPI application and register routers/middleware.
- Open the KV handle once at startup (and close it at shutdown); build the
  AccountStore around it.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from player_store import __version__
from player_store.api.routers.accounts import router as accounts_router
from player_store.api.routers.health import router as health_router
from player_store.api.routers.profiles import router as profiles_router
from player_store.api.routers.tokens import router as tokens_router
from player_store.kv.session import open_kv
from player_store.observability.logging import configure_logging, get_logger
from player_store.observability.middleware import RequestContextMiddleware
from player_store.players import AccountStore
from player_store.settings import Settings

log = get_logger(__name__)


def create_app(*, settings: Settings) -> FastAPI:
    configure_logging(
        service_name=settings.service_name,
        level=settings.log_level,
        json_logs=settings.log_json,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env)
        kv = await open_kv(settings)
        app.state.kv = kv
        app.state.account_store = AccountStore(kv)
        try:
            yield
        finally:
            await kv.close()
            log.info("shutdown")

    app = FastAPI(
        title="Player Store",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(RequestContextMiddleware)
    app.include_router(health_router, tags=["health"])
    app.include_router(accounts_router)
    app.include_router(profiles_router)
    app.include_router(tokens_router)

    return app
