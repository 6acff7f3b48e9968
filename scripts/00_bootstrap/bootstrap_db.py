#!/usr/bin/env python3
"""Walkthrough database bootstrapper

Creates the products, orders and order_items tables from the ORM metadata and
seeds products with the seven sample rows.

Defaults are safe:
- Targets an in-memory SQLite database (discarded at exit)
- Accepts --db-url to point at a file instead (overrides SHOPDB_DB_URL)

Examples:
  python scripts/00_bootstrap/bootstrap_db.py
  python scripts/00_bootstrap/bootstrap_db.py --db-url sqlite:///./data/shop.db --echo
"""
from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from sqlalchemy.engine import make_url

from shopdb.bootstrap import bootstrap
from shopdb.queries import query_all
from shopdb.session import DEFAULT_DB_URL, get_session, open_database, resolve_db_url


def _ensure_sqlite_dir(db_url: str) -> None:
    # Create parent directory for SQLite files if needed
    url = make_url(db_url)
    if url.get_backend_name() == "sqlite" and url.database and url.database != ":memory:":
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)


def parse_args(argv: list[str]) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Create and seed the walkthrough schema")
    ap.add_argument("--db-url", dest="db_url", default=os.environ.get("SHOPDB_DB_URL", DEFAULT_DB_URL),
                    help="Target database URL (overrides env var SHOPDB_DB_URL)")
    ap.add_argument("--echo", action="store_true", help="Echo SQL statements to stdout")
    return ap.parse_args(argv)


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    db_url = resolve_db_url(args.db_url)
    print(f"Target DB URL: {db_url}")
    _ensure_sqlite_dir(db_url)
    with open_database(db_url, echo=args.echo) as engine:
        seeded = bootstrap(engine)
        print(f"Seeded {seeded} products.")
        with get_session(engine) as session:
            print(json.dumps(query_all(session), indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
