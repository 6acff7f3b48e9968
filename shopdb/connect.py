"""Connection helper: engines from a literal URL or from a YAML settings file.

The YAML file follows the usual adapter/host/user/password/database layout::

    adapter: postgres
    host: localhost
    port: 5432
    user: jose
    password: secret
    database: my_app

A single ``url:`` key may be given instead of the individual parts.
"""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError
from sqlalchemy import MetaData, Table, select, text
from sqlalchemy.engine import Engine, URL
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.sql import Select

from shopdb.session import ROOT, make_engine

_log = logging.getLogger(__name__)

DEFAULT_URL = "postgresql://jose@localhost/my_app"
DEFAULT_CONFIG_PATH = ROOT / "config" / "database.yaml"

# Accept the short adapter names people tend to write in database.yaml
ADAPTERS = {
    "postgres": "postgresql",
    "postgresql": "postgresql",
    "sqlite": "sqlite",
    "mysql": "mysql+pymysql",
    "mysql2": "mysql+pymysql",
}


class DatabaseConnectionError(RuntimeError):
    """Configuration could not be read or the database could not be reached."""


def config_path_from_env() -> Path:
    env_path = os.environ.get("SHOPDB_DB_CONFIG")
    return Path(env_path) if env_path else DEFAULT_CONFIG_PATH


def load_connection_config(path: Path) -> Dict[str, Any]:
    if not path.is_file():
        raise DatabaseConnectionError(f"Connection config not found: {path}")
    yaml = YAML(typ="safe", pure=True)
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.load(f)
    except YAMLError as e:
        raise DatabaseConnectionError(f"Malformed connection config {path}: {e}") from e
    if not isinstance(data, dict):
        raise DatabaseConnectionError(f"Connection config {path} must be a mapping, got {type(data).__name__}")
    return dict(data)


def url_from_config(data: Dict[str, Any]) -> str:
    """Turn connection settings into a SQLAlchemy URL string."""
    if data.get("url"):
        return str(data["url"])
    adapter = str(data.get("adapter") or "").strip().lower()
    if not adapter:
        raise DatabaseConnectionError("Connection config is missing 'adapter'")
    drivername = ADAPTERS.get(adapter)
    if drivername is None:
        raise DatabaseConnectionError(f"Unsupported adapter '{adapter}' (expected one of {sorted(ADAPTERS)})")
    if not data.get("database"):
        raise DatabaseConnectionError("Connection config is missing 'database'")
    port: Optional[int] = None
    if data.get("port") is not None:
        try:
            port = int(data["port"])
        except (TypeError, ValueError) as e:
            raise DatabaseConnectionError(f"Invalid port {data['port']!r}") from e
    url = URL.create(
        drivername=drivername,
        username=data.get("user") or data.get("username"),
        password=data.get("password") or None,
        host=data.get("host"),
        port=port,
        database=str(data["database"]),
    )
    return url.render_as_string(hide_password=False)


def connect_url(db_url: str, echo: bool = False) -> Engine:
    """Build an engine for ``db_url`` and check it answers ``SELECT 1``."""
    try:
        engine = make_engine(db_url, echo=echo)
    except (SQLAlchemyError, ImportError) as e:
        # ImportError covers a missing DBAPI driver (psycopg2, PyMySQL)
        raise DatabaseConnectionError(f"Cannot create engine for {db_url}: {e}") from e
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        engine.dispose()
        raise DatabaseConnectionError(f"Database unreachable at {engine.url!r}: {e}") from e
    _log.info("Connected to %r", engine.url)
    return engine


def connect_yaml(path: Optional[Path] = None, echo: bool = False) -> Engine:
    cfg_path = path or config_path_from_env()
    data = load_connection_config(cfg_path)
    return connect_url(url_from_config(data), echo=echo)


def posts_query(engine: Engine) -> Select:
    try:
        posts = Table("posts", MetaData(), autoload_with=engine)
    except SQLAlchemyError as e:
        raise DatabaseConnectionError(f"Cannot load table 'posts': {e}") from e
    return select(posts)


def fetch_posts(engine: Engine) -> List[Dict[str, Any]]:
    """Return every row of ``posts``; used only as a connectivity smoke test."""
    stmt = posts_query(engine)
    try:
        with engine.connect() as conn:
            return [dict(row) for row in conn.execute(stmt).mappings()]
    except SQLAlchemyError as e:
        raise DatabaseConnectionError(f"Query against 'posts' failed: {e}") from e
