"""
player_store.players.maintenance

Operational helpers that sit outside the normal account lifecycle.
"""

from __future__ import annotations

from player_store.kv import KvStore
from player_store.observability.logging import get_logger
from player_store.players.keys import (
    PLAYER_ACCOUNT_SCHEMA,
    account_by_username_key,
    account_key,
)
from player_store.players.models import PlayerAccount

log = get_logger(__name__)


async def purge_player_accounts(kv: KvStore) -> int:
    """
    Delete every player account (both the id key and the username key).

    Meant for test/dev environments. Profiles and access tokens are left in place.
    Returns the number of accounts removed.
    """

    accounts = [
        PlayerAccount.model_validate(entry.value)
        async for entry in kv.list((PLAYER_ACCOUNT_SCHEMA,))
    ]

    removed = 0
    for account in accounts:
        if account.player_id is None:
            continue
        res = await (
            kv.atomic()
            .delete(account_key(account.player_id))
            .delete(account_by_username_key(account.user_name))
            .commit()
        )
        if res.ok:
            removed += 1
        else:
            log.warning("accounts.purge.failed", player_id=account.player_id, error=res.error)

    log.info("accounts.purged", removed=removed, scanned=len(accounts))
    return removed
