from __future__ import annotations

import pytest

from player_store.kv import KvStore
from player_store.players import AccountStore, PlayerAccount, PlayerData
from player_store.players.keys import PLAYER_ACCOUNT_BY_USER_NAME, PLAYER_ACCOUNT_SCHEMA
from player_store.players.maintenance import purge_player_accounts


@pytest.mark.asyncio
async def test_purge_removes_both_index_keys(kv: KvStore, store: AccountStore) -> None:
    for user_name in ("a", "b", "c"):
        await store.register_account(PlayerAccount(name=user_name, user_name=user_name, user_password="x"))
    await store.create_profile(PlayerData(player_id="keep-me", name="Profile"))

    removed = await purge_player_accounts(kv)

    assert removed == 3
    assert [e async for e in kv.list((PLAYER_ACCOUNT_SCHEMA,))] == []
    assert [e async for e in kv.list((PLAYER_ACCOUNT_BY_USER_NAME,))] == []
    assert await store.get_profile("keep-me") is not None


@pytest.mark.asyncio
async def test_purge_frees_usernames_for_reuse(kv: KvStore, store: AccountStore) -> None:
    await store.register_account(PlayerAccount(name="A", user_name="reused", user_password="x"))
    await purge_player_accounts(kv)

    res = await store.register_account(PlayerAccount(name="B", user_name="reused", user_password="y"))

    assert res.ok
    assert not await store.account_exists("nobody")
    assert await store.account_exists("reused")


@pytest.mark.asyncio
async def test_purge_on_empty_store_is_noop(kv: KvStore) -> None:
    assert await purge_player_accounts(kv) == 0
