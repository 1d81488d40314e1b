"""
tests.test_api

HTTP surface: the app boots, opens the KV handle and maps store results to status codes.
"""

from __future__ import annotations

from collections.abc import AsyncIterator

import httpx
import pytest
import pytest_asyncio

from player_store.api.app import create_app
from player_store.settings import Settings

_SLIME = {"name": "Slime", "defaultStatus": {"hp": 5, "atk": 2, "def": 1}, "joinNumber": 1}
_PARENT_SLIME = {"name": "Parent Slime", "defaultStatus": {"hp": 6, "atk": 2, "def": 1}, "joinNumber": 2}


@pytest_asyncio.fixture
async def client(settings: Settings) -> AsyncIterator[httpx.AsyncClient]:
    app = create_app(settings=settings)

    # ASGITransport does not run lifespan events; drive them explicitly.
    async with app.router.lifespan_context(app):
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
            yield c


async def _register(client: httpx.AsyncClient, user_name: str = "u1") -> str:
    r = await client.post(
        "/v1/accounts",
        json={"name": "N", "userName": user_name, "userPassword": "p1"},
    )
    assert r.status_code == 201, r.text
    return r.json()["playerId"]


@pytest.mark.asyncio
async def test_health_endpoints(client: httpx.AsyncClient) -> None:
    r = await client.get("/healthz")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"

    r = await client.get("/readyz")
    assert r.status_code == 200
    assert r.json()["status"] == "ready"
    assert r.headers["x-request-id"]


@pytest.mark.asyncio
async def test_request_id_is_propagated(client: httpx.AsyncClient) -> None:
    r = await client.get("/healthz", headers={"x-request-id": "req-42"})

    assert r.headers["x-request-id"] == "req-42"


@pytest.mark.asyncio
async def test_register_and_lookup_never_returns_password(client: httpx.AsyncClient) -> None:
    player_id = await _register(client)
    assert len(player_id) == 36

    by_id = await client.get(f"/v1/accounts/{player_id}")
    by_name = await client.get("/v1/accounts/by-username/u1")

    assert by_id.status_code == 200
    assert by_id.json() == {"playerId": player_id, "name": "N", "userName": "u1"}
    assert by_name.json() == by_id.json()
    assert "userPassword" not in by_id.json()


@pytest.mark.asyncio
async def test_duplicate_username_is_conflict(client: httpx.AsyncClient) -> None:
    await _register(client)

    r = await client.post(
        "/v1/accounts",
        json={"name": "Other", "userName": "u1", "userPassword": "p2"},
    )

    assert r.status_code == 409
    detail = r.json()["detail"]
    assert detail["kind"] == "DUPLICATE_IDENTITY"
    assert detail["collisions"] == ["userName"]


@pytest.mark.asyncio
async def test_account_exists_endpoint(client: httpx.AsyncClient) -> None:
    await _register(client, "present")

    yes = await client.get("/v1/accounts/by-username/present/exists")
    no = await client.get("/v1/accounts/by-username/absent/exists")

    assert yes.json() == {"userName": "present", "exists": True}
    assert no.json() == {"userName": "absent", "exists": False}


@pytest.mark.asyncio
async def test_unknown_resources_are_404(client: httpx.AsyncClient) -> None:
    assert (await client.get("/v1/accounts/missing")).status_code == 404
    assert (await client.get("/v1/accounts/by-username/missing")).status_code == 404
    assert (await client.get("/v1/profiles/missing")).status_code == 404
    assert (await client.get("/v1/players/missing/access-token")).status_code == 404


@pytest.mark.asyncio
async def test_register_rejects_blank_username(client: httpx.AsyncClient) -> None:
    r = await client.post("/v1/accounts", json={"name": "N", "userName": "", "userPassword": "p"})

    assert r.status_code == 422


@pytest.mark.asyncio
async def test_profile_and_token_flow(client: httpx.AsyncClient) -> None:
    player_id = await _register(client)

    r = await client.post(
        "/v1/profiles",
        json={"playerId": player_id, "name": "Test Player", "units": [_SLIME, _PARENT_SLIME]},
    )
    assert r.status_code == 201
    assert r.json() == {"playerId": player_id}

    again = await client.post("/v1/profiles", json={"playerId": player_id, "name": "Again"})
    assert again.status_code == 409

    profile = await client.get(f"/v1/profiles/{player_id}")
    assert profile.status_code == 200
    assert profile.json() == {
        "playerId": player_id,
        "name": "Test Player",
        "units": [_SLIME, _PARENT_SLIME],
    }

    r = await client.put(f"/v1/players/{player_id}/access-token", json={"token": "AT-1"})
    assert r.status_code == 200
    r = await client.put(f"/v1/players/{player_id}/access-token", json={"token": "AT-123"})
    assert r.json() == {"playerId": player_id, "token": "AT-123"}

    token = await client.get(f"/v1/players/{player_id}/access-token")
    assert token.json() == {"playerId": player_id, "token": "AT-123"}
