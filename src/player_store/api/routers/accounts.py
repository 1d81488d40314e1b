"""
player_store.api.routers.accounts

Account registration and lookups.

Responsibilities:
- Register an account (409 when the player id or username is taken).
- Fetch an account by id or username, and answer "does this username exist".
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from starlette.status import HTTP_201_CREATED, HTTP_404_NOT_FOUND

from player_store.api.deps import account_store_dep, raise_for_error
from player_store.api.schemas import (
    AccountExistsResponse,
    AccountRegisterRequest,
    AccountResponse,
    PlayerIdResponse,
)
from player_store.players import AccountStore, Err, PlayerAccount

router = APIRouter(prefix="/v1/accounts", tags=["accounts"])


@router.post("", status_code=HTTP_201_CREATED, response_model=PlayerIdResponse)
async def register_account(
    body: AccountRegisterRequest,
    store: AccountStore = Depends(account_store_dep),
) -> PlayerIdResponse:
    res = await store.register_account(
        PlayerAccount(name=body.name, user_name=body.user_name, user_password=body.user_password)
    )
    if isinstance(res, Err):
        raise_for_error(res)
    return PlayerIdResponse(player_id=res.value)


@router.get("/by-username/{user_name}/exists", response_model=AccountExistsResponse)
async def account_exists(
    user_name: str,
    store: AccountStore = Depends(account_store_dep),
) -> AccountExistsResponse:
    return AccountExistsResponse(user_name=user_name, exists=await store.account_exists(user_name))


@router.get("/by-username/{user_name}", response_model=AccountResponse)
async def get_account_by_username(
    user_name: str,
    store: AccountStore = Depends(account_store_dep),
) -> AccountResponse:
    account = await store.get_account_by_username(user_name)
    if account is None:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Account not found")
    return AccountResponse.from_account(account)


@router.get("/{player_id}", response_model=AccountResponse)
async def get_account(
    player_id: str,
    store: AccountStore = Depends(account_store_dep),
) -> AccountResponse:
    account = await store.get_account(player_id)
    if account is None:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Account not found")
    return AccountResponse.from_account(account)


# --- Module Notes -----------------------------------------------------------
# Lookups are unauthenticated here; session/auth checks belong to the game server in front.
