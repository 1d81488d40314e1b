"""
player_store.players

Player accounts, profiles (roster data) and access tokens on top of the KV engine.
"""

from player_store.players.models import AccessToken, PlayerAccount, PlayerData, Unit, UnitStatus
from player_store.players.results import Err, Ok, Result, StoreError, StoreErrorKind
from player_store.players.store import AccountStore

__all__ = [
    "AccessToken",
    "AccountStore",
    "Err",
    "Ok",
    "PlayerAccount",
    "PlayerData",
    "Result",
    "StoreError",
    "StoreErrorKind",
    "Unit",
    "UnitStatus",
]
