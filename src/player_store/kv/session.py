"""
player_store.kv.session

Async SQLAlchemy engine + session factory helpers.

Responsibilities:
- Create the async engine from settings.
- Create the read and write sessionmakers with safe defaults.
- Open a ready-to-use `KvStore` handle (the process-wide KV connection).
"""

from __future__ import annotations

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from player_store.kv.init_db import init_db
from player_store.kv.store import KvStore
from player_store.settings import Settings

# Execution option marking connections that run KV commits.
WRITE_OPTION = "kv_write"


def create_engine(settings: Settings) -> AsyncEngine:
    # pool_pre_ping helps detect stale connections in long-lived processes.
    engine = create_async_engine(
        settings.database_url,
        echo=settings.database_echo,
        pool_pre_ping=True,
    )
    if engine.dialect.name == "sqlite":
        _serialize_sqlite_writes(engine)
    return engine


def _serialize_sqlite_writes(engine: AsyncEngine) -> None:
    # The sqlite driver only opens a transaction before DML, so a check SELECT would run
    # outside the transaction it guards. Begin explicitly; commits take the write lock
    # up front, reads stay on a shared lock.
    @event.listens_for(engine.sync_engine, "connect")
    def _disable_driver_transactions(dbapi_connection, _record) -> None:
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def _begin(conn) -> None:
        if conn.get_execution_options().get(WRITE_OPTION):
            conn.exec_driver_sql("BEGIN IMMEDIATE")
        else:
            conn.exec_driver_sql("BEGIN")


def create_sessionmaker(engine: AsyncEngine, *, write: bool = False) -> async_sessionmaker[AsyncSession]:
    # expire_on_commit=False keeps row attributes readable after the transaction closes.
    bind = engine.execution_options(**{WRITE_OPTION: True}) if write else engine
    return async_sessionmaker(
        bind=bind,
        expire_on_commit=False,
        autoflush=False,
    )


async def open_kv(settings: Settings) -> KvStore:
    """
    Build the KV handle once at process startup and hand it to whoever needs it.
    Close it with `await kv.close()`.
    """

    engine = create_engine(settings)
    if settings.should_create_tables:
        await init_db(engine)
    return KvStore(
        engine=engine,
        session_factory=create_sessionmaker(engine),
        write_session_factory=create_sessionmaker(engine, write=True),
    )


# --- Module Notes -----------------------------------------------------------
# The API opens the handle in its startup hook (`api.app.create_app`); tests open one
# per test against a throwaway SQLite file. Both sessionmakers share one pool.
