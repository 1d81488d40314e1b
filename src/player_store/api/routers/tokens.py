"""
player_store.api.routers.tokens

Per-player access token storage. Tokens are opaque; a PUT replaces any earlier token.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from starlette.status import HTTP_404_NOT_FOUND

from player_store.api.deps import account_store_dep, raise_for_error
from player_store.api.schemas import AccessTokenRequest
from player_store.players import AccessToken, AccountStore, Err

router = APIRouter(prefix="/v1/players", tags=["access-tokens"])


@router.put("/{player_id}/access-token", response_model=AccessToken)
async def set_access_token(
    player_id: str,
    body: AccessTokenRequest,
    store: AccountStore = Depends(account_store_dep),
) -> AccessToken:
    res = await store.set_access_token(player_id, body.token)
    if isinstance(res, Err):
        raise_for_error(res)
    return AccessToken(player_id=player_id, token=res.value)


@router.get("/{player_id}/access-token", response_model=AccessToken)
async def get_access_token(
    player_id: str,
    store: AccountStore = Depends(account_store_dep),
) -> AccessToken:
    token = await store.get_access_token(player_id)
    if token is None:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Access token not found")
    return AccessToken(player_id=player_id, token=token)
