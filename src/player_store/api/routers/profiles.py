from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from starlette.status import HTTP_201_CREATED, HTTP_404_NOT_FOUND

from player_store.api.deps import account_store_dep, raise_for_error
from player_store.api.schemas import PlayerIdResponse, ProfileCreateRequest
from player_store.players import AccountStore, Err, PlayerData

router = APIRouter(prefix="/v1/profiles", tags=["profiles"])


@router.post("", status_code=HTTP_201_CREATED, response_model=PlayerIdResponse)
async def create_profile(
    body: ProfileCreateRequest,
    store: AccountStore = Depends(account_store_dep),
) -> PlayerIdResponse:
    res = await store.create_profile(
        PlayerData(player_id=body.player_id, name=body.name, units=body.units)
    )
    if isinstance(res, Err):
        raise_for_error(res)
    return PlayerIdResponse(player_id=res.value)


@router.get("/{player_id}", response_model=PlayerData)
async def get_profile(
    player_id: str,
    store: AccountStore = Depends(account_store_dep),
) -> PlayerData:
    profile = await store.get_profile(player_id)
    if profile is None:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Profile not found")
    return profile
