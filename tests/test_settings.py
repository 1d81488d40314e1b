from __future__ import annotations

import pytest

from player_store.settings import Settings


def test_env_prefix_overrides_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PLAYER_STORE_ENV", "prod")
    monkeypatch.setenv("PLAYER_STORE_DATABASE_URL", "sqlite+aiosqlite:///./other.db")
    monkeypatch.setenv("PLAYER_STORE_LOG_JSON", "false")

    settings = Settings()

    assert settings.env == "prod"
    assert settings.database_url == "sqlite+aiosqlite:///./other.db"
    assert settings.log_json is False


def test_database_url_is_hidden_from_repr() -> None:
    settings = Settings(database_url="postgresql+asyncpg://user:secret@db/players")

    assert "secret" not in repr(settings)


@pytest.mark.parametrize(
    ("env", "create_tables", "expected"),
    [
        ("dev", None, True),
        ("test", None, True),
        ("prod", None, False),
        ("prod", True, True),
        ("dev", False, False),
    ],
)
def test_table_creation_defaults_off_in_prod(env: str, create_tables: bool | None, expected: bool) -> None:
    settings = Settings(env=env, create_tables=create_tables)

    assert settings.should_create_tables is expected
