"""
player_store.kv

Transactional key-value engine (SQLAlchemy async).

Responsibilities:
- Store JSON values under tuple keys `(collection, *parts)`.
- Provide point lookups, prefix scans and atomic check-and-set commits.
"""

from player_store.kv.store import AtomicOperation, KvCommitResult, KvEntry, KvKey, KvStore

__all__ = ["AtomicOperation", "KvCommitResult", "KvEntry", "KvKey", "KvStore"]


# --- Module Notes -----------------------------------------------------------
# Callers above this package never see SQLAlchemy types; swapping the engine only
# touches `kv.models`, `kv.session` and `kv.store`.
