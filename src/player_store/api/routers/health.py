"""
player_store.api.routers.health

Liveness (`/healthz`) and readiness (`/readyz`, KV reachable) probes.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from player_store.api.deps import kv_dep
from player_store.kv import KvStore

router = APIRouter()


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/readyz")
async def readyz(kv: KvStore = Depends(kv_dep)) -> dict[str, str]:
    await kv.ping()
    return {"status": "ready"}
