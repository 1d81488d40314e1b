"""
player_store.kv.init_db

Table bootstrap for the KV engine.
"""

from __future__ import annotations

from sqlalchemy import insert, select
from sqlalchemy.ext.asyncio import AsyncEngine

from player_store.kv.models import VERSION_ROW_ID, Base, KvVersionRow


async def init_db(engine: AsyncEngine) -> None:
    """Create the KV tables if they don't exist and seed the version counter."""

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
        seeded = await conn.scalar(select(KvVersionRow.id).where(KvVersionRow.id == VERSION_ROW_ID))
        if seeded is None:
            await conn.execute(insert(KvVersionRow).values(id=VERSION_ROW_ID, last=0))
