#!/usr/bin/env python3
"""Query walkthrough over the seeded products table.

Each query prints its SQL followed by the result. With no --query every
demonstration runs in turn.

Examples:
  python scripts/30_queries/query_products.py
  python scripts/30_queries/query_products.py --query limit --limit 2 --offset 4
  python scripts/30_queries/query_products.py --query condition --id 1
"""
from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path
from typing import Any, Callable

PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.sql import Select

from shopdb import queries
from shopdb.bootstrap import bootstrap
from shopdb.session import DEFAULT_DB_URL, get_session, open_database

QUERIES = ("all", "order", "group", "limit", "condition")


def _show(session: Session, title: str, stmt: Select, run: Callable[[], Any]) -> None:
    print(f"== {title}")
    print(queries.render_sql(session, stmt))
    print(json.dumps(run(), indent=2))


def run_query(session: Session, name: str, args: argparse.Namespace) -> None:
    if name == "all":
        _show(session, "all", queries.all_stmt(), lambda: queries.query_all(session))
    elif name == "order":
        _show(session, "order by name desc", queries.order_stmt(), lambda: queries.query_order(session))
    elif name == "group":
        _show(session, "group and count by category", queries.group_stmt(), lambda: queries.query_group(session))
    elif name == "limit":
        _show(session, f"first {args.limit}", queries.first_stmt(args.limit),
              lambda: queries.query_first(session, args.limit))
        _show(session, f"page limit={args.limit} offset={args.offset}", queries.limit_stmt(args.limit, args.offset),
              lambda: queries.query_limit(session, args.limit, args.offset))
    elif name == "condition":
        _show(session, f"id = {args.id}", queries.condition_stmt(args.id),
              lambda: queries.query_on_condition(session, args.id))
    else:
        raise ValueError(f"unknown query {name!r}")


def parse_args(argv: list[str]) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Run read-only queries against the seeded products")
    ap.add_argument("--db-url", dest="db_url", default=os.environ.get("SHOPDB_DB_URL", DEFAULT_DB_URL),
                    help="Target database URL (overrides env var SHOPDB_DB_URL)")
    ap.add_argument("--query", choices=QUERIES, default=None, help="Run only this query")
    ap.add_argument("--limit", type=int, default=2)
    ap.add_argument("--offset", type=int, default=4)
    ap.add_argument("--id", type=int, default=1, help="Product id for the condition query")
    ap.add_argument("--skip-bootstrap", action="store_true",
                    help="Assume --db-url already holds the seeded schema")
    ap.add_argument("--echo", action="store_true", help="Echo SQL statements to stdout")
    args = ap.parse_args(argv)
    if args.limit < 0 or args.offset < 0:
        ap.error("--limit and --offset must be non-negative")
    return args


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    with open_database(args.db_url, echo=args.echo) as engine:
        try:
            if not args.skip_bootstrap:
                bootstrap(engine)
            with get_session(engine) as session:
                for name in [args.query] if args.query else QUERIES:
                    run_query(session, name, args)
        except SQLAlchemyError as e:
            # e.g. --skip-bootstrap against a database that has no products table
            print(f"[error] {e}", file=sys.stderr)
            return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
