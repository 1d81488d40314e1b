"""
player_store.kv.store

Transactional key-value store over SQLAlchemy async sessions.

Responsibilities:
- Point reads (`get`) and ordered prefix scans (`list`).
- Atomic multi-key commits: every `check` must hold or nothing is written.
- Stamp each successful commit with a monotonically increasing versionstamp.

A key is a non-empty tuple of strings: the first part names the collection, the
rest identify the entry inside it, e.g. `("playeraccount", "4f1c...")`.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Sequence
from dataclasses import dataclass
from typing import Any, Literal

from sqlalchemy import delete, select, text
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from player_store.kv.models import VERSION_ROW_ID, KvEntryRow, KvVersionRow
from player_store.observability.logging import get_logger

log = get_logger(__name__)

KvKey = tuple[str, ...]

# Terminates every key part after the collection name inside `kv_entries.key_path`.
_TERM = "\x01"
# Marks an escaped content character: \x00, \x01 and \x02 are stored as _ESC + chr(c + 0x30).
_ESC = "\x02"
_ESC_OFFSET = 0x30
_NEEDS_ESCAPE = frozenset("\x00\x01\x02")


@dataclass(frozen=True, slots=True)
class KvEntry:
    key: KvKey
    value: Any
    versionstamp: str


@dataclass(frozen=True, slots=True)
class KvCommitResult:
    """
    Outcome of `AtomicOperation.commit()`.

    `conflicts` lists every checked key whose state did not match; `error` carries the
    backend message when the database itself refused the transaction.
    """

    ok: bool
    versionstamp: str | None = None
    conflicts: tuple[KvKey, ...] = ()
    error: str | None = None


_Mutation = tuple[Literal["set", "delete"], KvKey, Any]


def _split_key(key: Sequence[str]) -> tuple[str, str]:
    if len(key) == 0:
        raise ValueError("KV key must have at least one part")
    for part in key:
        if not isinstance(part, str):
            raise ValueError(f"KV key parts must be strings, got {type(part).__name__}: {part!r}")
    return key[0], _encode_parts(key[1:])


def _encode_part(part: str) -> str:
    if not _NEEDS_ESCAPE.intersection(part):
        return part
    return "".join(_ESC + chr(ord(c) + _ESC_OFFSET) if c in _NEEDS_ESCAPE else c for c in part)


def _encode_parts(parts: Sequence[str]) -> str:
    # The terminator sorts below every encoded character, so encoded order equals tuple
    # order and a prefix's encoding is a string prefix of every key under it.
    return "".join(_encode_part(part) + _TERM for part in parts)


def _join_key(collection: str, key_path: str) -> KvKey:
    parts: list[str] = []
    current: list[str] = []
    chars = iter(key_path)
    for c in chars:
        if c == _TERM:
            parts.append("".join(current))
            current = []
        elif c == _ESC:
            current.append(chr(ord(next(chars)) - _ESC_OFFSET))
        else:
            current.append(c)
    return (collection, *parts)


def _format_versionstamp(commit_id: int) -> str:
    return f"{commit_id:020x}"


class AtomicOperation:
    """
    Builder for one all-or-nothing transaction.

        res = await kv.atomic().check(key, None).set(key, value).commit()

    `check(key, None)` asserts the key is absent; `check(key, vs)` asserts it was last
    written by the commit with versionstamp `vs`.
    """

    def __init__(self, store: KvStore) -> None:
        self._store = store
        self._checks: list[tuple[KvKey, str | None]] = []
        self._mutations: list[_Mutation] = []

    def check(self, key: Sequence[str], versionstamp: str | None = None) -> AtomicOperation:
        _split_key(key)
        self._checks.append((tuple(key), versionstamp))
        return self

    def set(self, key: Sequence[str], value: Any) -> AtomicOperation:
        _split_key(key)
        self._mutations.append(("set", tuple(key), value))
        return self

    def delete(self, key: Sequence[str]) -> AtomicOperation:
        _split_key(key)
        self._mutations.append(("delete", tuple(key), None))
        return self

    async def commit(self) -> KvCommitResult:
        return await self._store._commit(self._checks, self._mutations)


class KvStore:
    def __init__(
        self,
        *,
        engine: AsyncEngine,
        session_factory: async_sessionmaker[AsyncSession],
        write_session_factory: async_sessionmaker[AsyncSession] | None = None,
    ) -> None:
        self._engine = engine
        # Reads use `session_factory`; commits use `write_session_factory`, which on
        # SQLite takes the write lock when its transaction begins.
        self._session_factory = session_factory
        self._write_session_factory = write_session_factory or session_factory

    async def get(self, key: Sequence[str]) -> KvEntry | None:
        pk = _split_key(key)
        async with self._session_factory() as session:
            row = await session.get(KvEntryRow, pk)
            if row is None:
                return None
            return KvEntry(key=tuple(key), value=row.value, versionstamp=row.versionstamp)

    async def list(self, prefix: Sequence[str], *, limit: int | None = None) -> AsyncIterator[KvEntry]:
        """
        Yield entries strictly under `prefix` (the prefix key itself is excluded),
        ordered by encoded key.
        """

        collection, key_path = _split_key(prefix)
        stmt = select(KvEntryRow).where(
            KvEntryRow.collection == collection,
            KvEntryRow.key_path > key_path,
        )
        if key_path:
            # Everything under the prefix sorts between its terminator and the next
            # character up; plain comparisons keep the scan case-sensitive.
            stmt = stmt.where(KvEntryRow.key_path < key_path[:-1] + _ESC)
        stmt = stmt.order_by(KvEntryRow.key_path)
        if limit is not None:
            stmt = stmt.limit(limit)

        async with self._session_factory() as session:
            rows = (await session.scalars(stmt)).all()
        for row in rows:
            yield KvEntry(
                key=_join_key(row.collection, row.key_path),
                value=row.value,
                versionstamp=row.versionstamp,
            )

    def atomic(self) -> AtomicOperation:
        return AtomicOperation(self)

    async def set(self, key: Sequence[str], value: Any) -> KvCommitResult:
        return await self.atomic().set(key, value).commit()

    async def delete(self, key: Sequence[str]) -> KvCommitResult:
        return await self.atomic().delete(key).commit()

    async def ping(self) -> None:
        async with self._engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def close(self) -> None:
        await self._engine.dispose()

    async def _commit(
        self,
        checks: Sequence[tuple[KvKey, str | None]],
        mutations: Sequence[_Mutation],
    ) -> KvCommitResult:
        try:
            async with self._write_session_factory() as session:
                conflicts = await _failed_checks(session, checks, lock=True)
                if conflicts:
                    await session.rollback()
                    log.debug("kv.commit.check_failed", conflicts=[list(k) for k in conflicts])
                    return KvCommitResult(ok=False, conflicts=conflicts)

                versionstamp = _format_versionstamp(await _next_version(session))

                for op, key, value in mutations:
                    if op == "set":
                        await _apply_set(session, key, value, versionstamp)
                    else:
                        await _apply_delete(session, key)
                await session.commit()
        except DBAPIError as e:
            # Lost a race (unique violation on insert) or the database refused the write.
            log.warning("kv.commit.rejected", error=str(e.orig), checks=len(checks))
            return KvCommitResult(
                ok=False,
                conflicts=await self._stale_checks(checks),
                error=str(e.orig),
            )

        return KvCommitResult(ok=True, versionstamp=versionstamp)

    async def _stale_checks(self, checks: Sequence[tuple[KvKey, str | None]]) -> tuple[KvKey, ...]:
        if not checks:
            return ()
        try:
            async with self._session_factory() as session:
                return await _failed_checks(session, checks, lock=False)
        except DBAPIError:
            log.warning("kv.commit.recheck_failed", checks=len(checks))
            return ()


async def _failed_checks(
    session: AsyncSession,
    checks: Sequence[tuple[KvKey, str | None]],
    *,
    lock: bool,
) -> tuple[KvKey, ...]:
    failed: list[KvKey] = []
    for key, expected in checks:
        collection, key_path = _split_key(key)
        stmt = select(KvEntryRow.versionstamp).where(
            KvEntryRow.collection == collection, KvEntryRow.key_path == key_path
        )
        if lock:
            stmt = stmt.with_for_update()
        current = (await session.execute(stmt)).scalar_one_or_none()
        if current != expected:
            failed.append(key)
    return tuple(failed)


async def _next_version(session: AsyncSession) -> int:
    row = await session.get(KvVersionRow, VERSION_ROW_ID, with_for_update=True)
    if row is None:
        # Tables created without `init_db`; the first commit seeds the counter.
        row = KvVersionRow(id=VERSION_ROW_ID, last=0)
        session.add(row)
    row.last += 1
    await session.flush()
    return row.last


async def _apply_set(session: AsyncSession, key: KvKey, value: Any, versionstamp: str) -> None:
    pk = _split_key(key)
    row = await session.get(KvEntryRow, pk)
    if row is None:
        session.add(
            KvEntryRow(collection=pk[0], key_path=pk[1], value=value, versionstamp=versionstamp)
        )
        # Surface a concurrent insert of the same key here, inside the transaction.
        await session.flush()
        return
    row.value = value
    row.versionstamp = versionstamp


async def _apply_delete(session: AsyncSession, key: KvKey) -> None:
    collection, key_path = _split_key(key)
    await session.execute(
        delete(KvEntryRow).where(
            KvEntryRow.collection == collection, KvEntryRow.key_path == key_path
        )
    )


# --- Module Notes -----------------------------------------------------------
# `with_for_update` is a no-op on SQLite, where `kv.session` opens commit transactions
# with BEGIN IMMEDIATE and reads with a plain BEGIN; on server databases it pins the
# checked rows until commit. Checks on absent keys that are also written are backed by
# the primary-key constraint.
