"""
player_store.players.keys

Collection names and key builders for player records.
"""

from __future__ import annotations

from player_store.kv import KvKey

PLAYER_ACCOUNT_SCHEMA = "playeraccount"
PLAYER_ACCOUNT_BY_USER_NAME = PLAYER_ACCOUNT_SCHEMA + "by_username"
PLAYER_DATA_SCHEMA = "playerdata"
PLAYER_ACCESS_TOKEN_SCHEMA = "playeraccesstoken"


def account_key(player_id: str) -> KvKey:
    return (PLAYER_ACCOUNT_SCHEMA, player_id)


def account_by_username_key(user_name: str) -> KvKey:
    return (PLAYER_ACCOUNT_BY_USER_NAME, user_name)


def profile_key(player_id: str) -> KvKey:
    return (PLAYER_DATA_SCHEMA, player_id)


def access_token_key(player_id: str) -> KvKey:
    return (PLAYER_ACCESS_TOKEN_SCHEMA, player_id)
