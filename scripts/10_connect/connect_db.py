#!/usr/bin/env python3
"""Connectivity smoke test against a database that has a ``posts`` table.

Two ways to say where the database is:
- --db-url URL            literal SQLAlchemy URL (default postgresql://jose@localhost/my_app)
- --config PATH           YAML file with adapter/host/user/password/database

Prints the SELECT for posts and every row. Exits 2 when the configuration is
missing or malformed or the database cannot be reached.

Examples:
  python scripts/10_connect/connect_db.py --db-url sqlite:///./data/blog.db
  python scripts/10_connect/connect_db.py --config config/database.yaml
"""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from shopdb.connect import (
    DEFAULT_URL,
    DatabaseConnectionError,
    connect_url,
    connect_yaml,
    fetch_posts,
    posts_query,
)


def parse_args(argv: list[str]) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Connect to a database and dump its posts table")
    src = ap.add_mutually_exclusive_group()
    src.add_argument("--db-url", dest="db_url", default=None,
                     help=f"Literal database URL (default {DEFAULT_URL})")
    src.add_argument("--config", type=Path, default=None,
                     help="YAML connection settings (default: SHOPDB_DB_CONFIG or config/database.yaml)")
    src.add_argument("--use-config", action="store_true",
                     help="Read settings from the default YAML file instead of the literal URL")
    ap.add_argument("--echo", action="store_true", help="Echo SQL statements to stdout")
    return ap.parse_args(argv)


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    try:
        if args.config is not None or args.use_config:
            engine = connect_yaml(args.config, echo=args.echo)
        else:
            engine = connect_url(args.db_url or DEFAULT_URL, echo=args.echo)
        try:
            print(posts_query(engine))
            print(json.dumps(fetch_posts(engine), indent=2, default=str))
        finally:
            engine.dispose()
    except DatabaseConnectionError as e:
        print(f"[error] {e}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
