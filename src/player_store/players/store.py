"""
player_store.players.store

Account / profile / access-token facade over the KV engine.

Responsibilities:
- Register accounts with id and username uniqueness enforced in one atomic commit.
- Create profiles once per player.
- Point lookups for accounts (by id or username), profiles and access tokens.

Uniqueness lives entirely in the KV transaction: an account is written under its id
key and its username key together, and only if both keys were absent. There is no
window where one index holds the account and the other does not.
"""

from __future__ import annotations

import uuid
from collections.abc import Callable

from player_store.kv import KvCommitResult, KvKey, KvStore
from player_store.players.keys import (
    access_token_key,
    account_by_username_key,
    account_key,
    profile_key,
)
from player_store.players.models import PlayerAccount, PlayerData
from player_store.players.results import Err, Ok, Result, StoreError, StoreErrorKind


def _new_player_id() -> str:
    return str(uuid.uuid4())


class AccountStore:
    def __init__(self, kv: KvStore, *, id_factory: Callable[[], str] = _new_player_id) -> None:
        self._kv = kv
        self._id_factory = id_factory

    async def register_account(self, account: PlayerAccount) -> Result[str]:
        """
        Assign a fresh player id and store the account under both index keys.

        Fails with DUPLICATE_IDENTITY naming `playerId`, `userName` or both when either
        key is already taken; nothing is written in that case.
        """

        player_id = self._id_factory()
        stored = account.model_copy(update={"player_id": player_id})
        primary = account_key(player_id)
        by_username = account_by_username_key(stored.user_name)
        value = stored.to_json()

        res = await (
            self._kv.atomic()
            .check(primary, None)
            .check(by_username, None)
            .set(primary, value)
            .set(by_username, value)
            .commit()
        )
        if not res.ok:
            return _rejected(
                res,
                identities={
                    primary: ("playerId", player_id),
                    by_username: ("userName", stored.user_name),
                },
                subject="Player account",
            )
        return Ok(player_id)

    async def create_profile(self, data: PlayerData) -> Result[str]:
        # No check that an account exists for this player id.
        key = profile_key(data.player_id)
        res = await self._kv.atomic().check(key, None).set(key, data.to_json()).commit()
        if not res.ok:
            return _rejected(
                res,
                identities={key: ("playerId", data.player_id)},
                subject="PlayerData",
            )
        return Ok(data.player_id)

    async def account_exists(self, user_name: str) -> bool:
        return await self.get_account_by_username(user_name) is not None

    async def get_account(self, player_id: str) -> PlayerAccount | None:
        entry = await self._kv.get(account_key(player_id))
        return PlayerAccount.model_validate(entry.value) if entry is not None else None

    async def get_account_by_username(self, user_name: str) -> PlayerAccount | None:
        entry = await self._kv.get(account_by_username_key(user_name))
        return PlayerAccount.model_validate(entry.value) if entry is not None else None

    async def get_profile(self, player_id: str | None) -> PlayerData | None:
        if not player_id:
            return None
        entry = await self._kv.get(profile_key(player_id))
        return PlayerData.model_validate(entry.value) if entry is not None else None

    async def set_access_token(self, player_id: str, token: str) -> Result[str]:
        """Store `token` for the player, replacing any earlier one."""

        res = await self._kv.atomic().set(access_token_key(player_id), token).commit()
        if not res.ok:
            return _rejected(res, identities={}, subject=f"Access token for player {player_id}")
        return Ok(token)

    async def get_access_token(self, player_id: str) -> str | None:
        entry = await self._kv.get(access_token_key(player_id))
        return entry.value if entry is not None else None


def _rejected(
    res: KvCommitResult,
    *,
    identities: dict[KvKey, tuple[str, str]],
    subject: str,
) -> Err:
    collided = [identities[key] for key in res.conflicts if key in identities]
    if collided:
        described = " and ".join(f"{field} {value!r}" for field, value in collided)
        return Err(
            StoreError(
                kind=StoreErrorKind.duplicate_identity,
                message=f"{subject} with {described} already exists",
                collisions=tuple(field for field, _ in collided),
            )
        )

    detail = f": {res.error}" if res.error else ""
    return Err(
        StoreError(
            kind=StoreErrorKind.transaction_failure,
            message=f"{subject} could not be committed{detail}",
        )
    )


# --- Module Notes -----------------------------------------------------------
# Retries are the caller's call: a rejected write is reported once and left alone.
