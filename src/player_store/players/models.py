"""
player_store.players.models

Records persisted by `AccountStore`.

Responsibilities:
- Define PlayerAccount / PlayerData / Unit / AccessToken.
- Fix the stored (and wire) shape: camelCase JSON objects such as
  `{"playerId": ..., "userName": ..., "units": [{"defaultStatus": {...}, "joinNumber": 1}]}`.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _Record(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    def to_json(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class UnitStatus(_Record):
    hp: int
    atk: int
    # `def` is a keyword; the stored field name is still "def".
    defense: int = Field(alias="def")


class Unit(_Record):
    name: str
    default_status: UnitStatus
    join_number: int


class PlayerAccount(_Record):
    """
    Login identity. `player_id` is assigned by `AccountStore.register_account`;
    whatever the caller passes is replaced.
    """

    player_id: str | None = None
    name: str
    user_name: str
    user_password: str = Field(repr=False)


class PlayerData(_Record):
    """A player's game state: the roster of units, in join order as given."""

    player_id: str
    name: str
    units: list[Unit] = Field(default_factory=list)


class AccessToken(_Record):
    player_id: str
    token: str


# --- Module Notes -----------------------------------------------------------
# Records are frozen; the store derives new instances with `model_copy(update=...)`.
