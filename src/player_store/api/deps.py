"""
player_store.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Hand routers the process-wide `KvStore` / `AccountStore` created at startup.
- Translate store `Err` values into HTTP errors in one place.
"""

from __future__ import annotations

from typing import NoReturn

from fastapi import HTTPException, Request
from starlette.status import HTTP_409_CONFLICT, HTTP_503_SERVICE_UNAVAILABLE

from player_store.kv import KvStore
from player_store.observability.logging import get_logger
from player_store.players import AccountStore, Err, StoreErrorKind

log = get_logger(__name__)

_STATUS_FOR_KIND = {
    StoreErrorKind.duplicate_identity: HTTP_409_CONFLICT,
    StoreErrorKind.transaction_failure: HTTP_503_SERVICE_UNAVAILABLE,
}


def kv_dep(request: Request) -> KvStore:
    # Opened once in the startup hook of `player_store.api.app.create_app`.
    return request.app.state.kv  # type: ignore[attr-defined]


def account_store_dep(request: Request) -> AccountStore:
    return request.app.state.account_store  # type: ignore[attr-defined]


def raise_for_error(err: Err) -> NoReturn:
    log.info(
        "store.write_rejected",
        kind=err.error.kind.value,
        collisions=list(err.error.collisions),
    )
    raise HTTPException(
        status_code=_STATUS_FOR_KIND[err.error.kind],
        detail={
            "kind": err.error.kind.value,
            "message": err.error.message,
            "collisions": list(err.error.collisions),
        },
    )
