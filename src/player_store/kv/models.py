"""
player_store.kv.models

Tables backing the key-value engine.

Responsibilities:
- `KvEntryRow`: one row per live key, holding the JSON value and the versionstamp
  of the commit that last wrote it.
- `KvVersionRow`: a single-row counter, bumped inside every successful commit, that
  supplies monotonically increasing versionstamps.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from sqlalchemy import JSON, BigInteger, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

VERSION_ROW_ID = 1


class Base(DeclarativeBase):
    pass


def _utcnow() -> datetime:
    return datetime.now(tz=UTC).replace(tzinfo=None)


class KvEntryRow(Base):
    __tablename__ = "kv_entries"

    collection: Mapped[str] = mapped_column(String(128), primary_key=True)
    # Remaining key parts in escaped, terminated form (see `kv.store._encode_parts`).
    key_path: Mapped[str] = mapped_column(String(1024), primary_key=True)

    value: Mapped[Any] = mapped_column(JSON, nullable=False)
    versionstamp: Mapped[str] = mapped_column(String(20), nullable=False)

    updated_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow, onupdate=_utcnow)


class KvVersionRow(Base):
    __tablename__ = "kv_version"

    # Always VERSION_ROW_ID.
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    last: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    updated_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow, onupdate=_utcnow)


# --- Module Notes -----------------------------------------------------------
# The composite primary key doubles as the uniqueness constraint that makes
# "insert if absent" safe under concurrent writers. The version row is taken with
# the same lock as the checks, so commits see strictly increasing counter values.
