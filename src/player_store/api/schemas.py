"""
player_store.api.schemas

Request/response bodies for the HTTP surface (camelCase on the wire).
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from player_store.players import PlayerAccount, Unit


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AccountRegisterRequest(_CamelModel):
    name: str = Field(min_length=1, max_length=128)
    user_name: str = Field(min_length=1, max_length=128)
    user_password: str = Field(min_length=1, max_length=256)


class PlayerIdResponse(_CamelModel):
    player_id: str


class AccountResponse(_CamelModel):
    # userPassword is deliberately absent.
    player_id: str
    name: str
    user_name: str

    @classmethod
    def from_account(cls, account: PlayerAccount) -> AccountResponse:
        return cls(player_id=account.player_id or "", name=account.name, user_name=account.user_name)


class AccountExistsResponse(_CamelModel):
    user_name: str
    exists: bool


class ProfileCreateRequest(_CamelModel):
    player_id: str = Field(min_length=1, max_length=64)
    name: str = Field(min_length=1, max_length=128)
    units: list[Unit] = Field(default_factory=list)


class AccessTokenRequest(_CamelModel):
    token: str = Field(min_length=1, max_length=4096)
