import pytest
from sqlalchemy.pool import NullPool

from consignment.db.base import (
    build_engine,
    is_serverless_url,
    normalize_database_url,
    requires_relaxed_tls,
)


@pytest.mark.parametrize(
    "url, expected",
    [
        ("postgres://u:p@db.example.com/app", "postgresql+asyncpg://u:p@db.example.com/app"),
        ("postgresql://u:p@db.example.com/app", "postgresql+asyncpg://u:p@db.example.com/app"),
        ("postgresql+asyncpg://u:p@h/app", "postgresql+asyncpg://u:p@h/app"),
        ("sqlite+aiosqlite:///./dev.db", "sqlite+aiosqlite:///./dev.db"),
    ],
)
def test_normalize_database_url(url, expected):
    assert normalize_database_url(url) == expected


def test_serverless_detection():
    assert is_serverless_url("postgres://u:p@ep-cool-1.us-east-2.aws.neon.tech/db")
    assert not is_serverless_url("postgres://u:p@ep-cool-1-pooler.us-east-2.aws.neon.tech/db")
    assert not is_serverless_url("postgres://u:p@localhost/db")


@pytest.mark.parametrize(
    "url, relaxed",
    [
        ("postgres://u:p@db.abc.supabase.co/postgres", True),
        ("postgres://u:p@dpg-1.oregon-postgres.render.com/app", True),
        ("postgres://u:p@containers.railway.app:6543/railway", True),
        ("postgres://u:p@localhost/app", False),
    ],
)
def test_relaxed_tls_hosts(url, relaxed):
    assert requires_relaxed_tls(url) is relaxed


async def test_serverless_engine_holds_no_local_pool():
    engine = build_engine("postgres://u:p@ep-cool-1.us-east-2.aws.neon.tech/db")
    try:
        assert isinstance(engine.pool, NullPool)
        assert engine.url.drivername == "postgresql+asyncpg"
    finally:
        await engine.dispose()


async def test_standard_engine_is_pooled():
    engine = build_engine("postgres://u:p@localhost/app")
    try:
        assert not isinstance(engine.pool, NullPool)
    finally:
        await engine.dispose()


async def test_sqlite_engine_supports_savepoints(tmp_path):
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'sp.db'}")
    try:
        async with engine.connect() as conn:
            await conn.exec_driver_sql("CREATE TABLE t (x INTEGER)")
            await conn.commit()

            trans = await conn.begin()
            await conn.exec_driver_sql("INSERT INTO t VALUES (1)")
            nested = await conn.begin_nested()
            await conn.exec_driver_sql("INSERT INTO t VALUES (2)")
            await nested.rollback()
            await trans.commit()

            rows = (await conn.exec_driver_sql("SELECT x FROM t")).all()
        assert [r[0] for r in rows] == [1]
    finally:
        await engine.dispose()
