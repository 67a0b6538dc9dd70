"""Async SQLAlchemy engine selection, session factory, declarative Base, and FastAPI dependency."""


import logging
import ssl
from collections.abc import AsyncGenerator, AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool

from consignment.core.config import settings

logger = logging.getLogger(__name__)

# Hosted Postgres providers that terminate TLS with certificates we do not verify
_RELAXED_TLS_HOSTS = ("supabase", "render", "railway")

# ---------------------------------------------------------------------------
# Connection selector
# ---------------------------------------------------------------------------

def normalize_database_url(url: str) -> str:
    """Point plain Postgres URLs at the asyncpg driver."""
    for prefix in ("postgres://", "postgresql://"):
        if url.startswith(prefix):
            return "postgresql+asyncpg://" + url[len(prefix):]
    return url


def is_serverless_url(url: str) -> bool:
    """Neon endpoints that are not behind Neon's own pooler."""
    return "neon.tech" in url and "pooler" not in url


def requires_relaxed_tls(url: str) -> bool:
    return any(host in url for host in _RELAXED_TLS_HOSTS)


def _relaxed_ssl_context() -> ssl.SSLContext:
    ctx = ssl.create_default_context()
    ctx.check_hostname = False
    ctx.verify_mode = ssl.CERT_NONE
    return ctx


def _enable_sqlite_savepoints(engine: AsyncEngine) -> None:
    # pysqlite opens transactions lazily, which breaks SAVEPOINT; emit BEGIN ourselves
    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")


def build_engine(url: str, *, echo: bool = False) -> AsyncEngine:
    """Create the async engine appropriate for *url*."""
    url = normalize_database_url(url)
    engine_kwargs: dict = {"echo": echo}

    if url.startswith("sqlite"):
        engine_kwargs["connect_args"] = {"check_same_thread": False}
        engine = create_async_engine(url, **engine_kwargs)
        _enable_sqlite_savepoints(engine)
        logger.info("Database engine: SQLite (%s)", engine.url.database)
        return engine

    if requires_relaxed_tls(url):
        engine_kwargs["connect_args"] = {"ssl": _relaxed_ssl_context()}

    if is_serverless_url(url):
        # Connections are cheap and pooled remotely; don't hold any locally
        engine_kwargs["poolclass"] = NullPool
        driver = "serverless"
    else:
        engine_kwargs["pool_pre_ping"] = True
        driver = "standard"

    engine = create_async_engine(url, **engine_kwargs)
    logger.info("Database engine: %s Postgres driver (%s)", driver, engine.url.host)
    return engine

# ---------------------------------------------------------------------------
# Engine + session factory
# ---------------------------------------------------------------------------
engine = build_engine(settings.database_url, echo=settings.sql_echo)

async_session_factory = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
    autocommit=False,
)

# ---------------------------------------------------------------------------
# Declarative Base
# ---------------------------------------------------------------------------
class Base(DeclarativeBase):
    """All ORM models inherit from this base."""

# ---------------------------------------------------------------------------
# Transactions
# ---------------------------------------------------------------------------
@asynccontextmanager
async def atomic(session: AsyncSession) -> AsyncIterator[AsyncSession]:
    """Run a block atomically: a new transaction, or a SAVEPOINT inside an open one."""
    if session.in_transaction():
        async with session.begin_nested():
            yield session
    else:
        async with session.begin():
            yield session

# ---------------------------------------------------------------------------
# FastAPI dependency
# ---------------------------------------------------------------------------
async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield an async database session; roll back on error."""
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
