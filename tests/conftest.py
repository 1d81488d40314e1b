"""
tests.conftest

Shared fixtures: a fresh file-backed SQLite KV store per test.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from pathlib import Path

import pytest
import pytest_asyncio

from player_store.kv import KvStore
from player_store.kv.session import open_kv
from player_store.players import AccountStore, Unit, UnitStatus
from player_store.settings import Settings


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        env="test",
        log_json=False,
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'kv.db'}",
    )


@pytest_asyncio.fixture
async def kv(settings: Settings) -> AsyncIterator[KvStore]:
    store = await open_kv(settings)
    try:
        yield store
    finally:
        await store.close()


@pytest.fixture
def store(kv: KvStore) -> AccountStore:
    return AccountStore(kv)


@pytest.fixture
def slime_unit() -> Unit:
    return Unit(name="Slime", default_status=UnitStatus(hp=5, atk=2, defense=1), join_number=1)


@pytest.fixture
def parent_slime_unit() -> Unit:
    return Unit(
        name="Parent Slime",
        default_status=UnitStatus(hp=6, atk=2, defense=1),
        join_number=2,
    )
