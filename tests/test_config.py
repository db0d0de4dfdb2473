from __future__ import annotations

import pytest

from lottery_sales.config import SQLITE_FALLBACK_URL, resolve_database_url

_DB_VARS = ("DATABASE_URL", "PGHOST", "PGUSER", "PGDATABASE", "PGPORT", "PGPASSWORD", "PGSSLMODE")


@pytest.fixture()
def clean_env(monkeypatch):
    for name in _DB_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_explicit_database_url_wins(clean_env):
    clean_env.setenv("DATABASE_URL", "sqlite:///elsewhere.db")
    clean_env.setenv("PGHOST", "db")

    assert resolve_database_url() == "sqlite:///elsewhere.db"


def test_falls_back_to_sqlite_without_full_pg_settings(clean_env):
    clean_env.setenv("PGHOST", "db")
    clean_env.setenv("PGUSER", "lottery")

    assert resolve_database_url() == SQLITE_FALLBACK_URL


@pytest.mark.parametrize(("port", "expected"), [("6543", 6543), ("not-a-port", 5432), (None, 5432)])
def test_builds_postgres_url_from_pg_vars(clean_env, port, expected):
    clean_env.setenv("PGHOST", "db")
    clean_env.setenv("PGUSER", "lottery")
    clean_env.setenv("PGPASSWORD", "s3cret")
    clean_env.setenv("PGDATABASE", "sales")
    if port is not None:
        clean_env.setenv("PGPORT", port)

    url = resolve_database_url()

    assert url == f"postgresql+psycopg2://lottery:s3cret@db:{expected}/sales?sslmode=prefer"
