"""
player_store.players.results

Result convention for store writes.

Every write returns `Ok(value)` or `Err(StoreError)`; expected failures never raise.
Reads return the record or `None` (absence is not an error).
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


class StoreErrorKind(enum.StrEnum):
    # A uniqueness check failed: the id/username/profile key is already populated.
    duplicate_identity = "DUPLICATE_IDENTITY"
    # The backend refused the commit for a reason other than a failed check.
    transaction_failure = "TRANSACTION_FAILURE"


@dataclass(frozen=True, slots=True)
class StoreError:
    kind: StoreErrorKind
    message: str
    # Names of the identity fields that collided, e.g. ("playerId", "userName").
    collisions: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class Err:
    error: StoreError

    @property
    def ok(self) -> bool:
        return False


Result = Union[Ok[T], Err]
