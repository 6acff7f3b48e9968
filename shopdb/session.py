from __future__ import annotations

import os
from contextlib import contextmanager
from pathlib import Path
from typing import Generator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.engine.url import make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import NullPool, StaticPool

ROOT = Path(__file__).resolve().parents[1]

# The walkthrough runs against a throwaway in-memory store unless told otherwise
DEFAULT_DB_URL = "sqlite:///:memory:"


def _is_memory_sqlite(db_url: str) -> bool:
    url = make_url(db_url)
    return url.get_backend_name() == "sqlite" and url.database in (None, "", ":memory:")


def _normalize_sqlite_url(db_url: str) -> str:
    """Ensure sqlite file URLs are absolute and anchored at repo root when relative.

    This prevents mismatched files when different processes have different CWDs.
    """
    url = make_url(db_url)
    if url.get_backend_name() != "sqlite":
        return db_url
    db_path = url.database
    if db_path in (None, "", ":memory:"):
        return db_url
    p = Path(db_path)
    if p.is_absolute():
        return db_url
    abs_p = (ROOT / p).resolve()
    return url.set(database=str(abs_p)).render_as_string(hide_password=False)


def resolve_db_url(db_url: str | None = None) -> str:
    """Explicit argument first, then SHOPDB_DB_URL, then the in-memory default."""
    return _normalize_sqlite_url(db_url or os.environ.get("SHOPDB_DB_URL") or DEFAULT_DB_URL)


def _set_sqlite_pragma(dbapi_connection, connection_record):  # type: ignore[no-untyped-def]
    # SQLite ships with foreign keys off; the order_items references rely on them
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def make_engine(db_url: str | None = None, echo: bool = False) -> Engine:
    """Build an engine for ``db_url``.

    In-memory SQLite uses a StaticPool so every session sees the same database;
    anything else uses NullPool so file handles are released immediately.
    """
    url = resolve_db_url(db_url)
    if _is_memory_sqlite(url):
        engine = create_engine(
            url,
            echo=echo,
            future=True,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    else:
        engine = create_engine(url, echo=echo, future=True, poolclass=NullPool)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _set_sqlite_pragma)
    return engine


def make_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False, class_=Session)


@contextmanager
def open_database(db_url: str | None = None, echo: bool = False) -> Generator[Engine, None, None]:
    """Open an engine for the duration of the block and dispose it afterwards."""
    engine = make_engine(db_url, echo=echo)
    try:
        yield engine
    finally:
        engine.dispose()


@contextmanager
def get_session(engine: Engine) -> Generator[Session, None, None]:
    session = make_session_factory(engine)()
    try:
        yield session
    finally:
        session.close()
