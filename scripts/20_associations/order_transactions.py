#!/usr/bin/env python3
"""Associations and transactions walkthrough.

Bootstraps a fresh database, prints the product names, then links the first
and last product to a new order inside a transaction and prints the order
count before and after.

--break-link writes the second order item without a product; the NOT NULL
constraint rejects it and the whole transaction (order included) rolls back,
so both counts match.

Examples:
  python scripts/20_associations/order_transactions.py
  python scripts/20_associations/order_transactions.py --break-link --echo
"""
from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from shopdb.bootstrap import bootstrap
from shopdb.repository import list_product_names, report_order_count
from shopdb.session import DEFAULT_DB_URL, get_session, make_session_factory, open_database


def parse_args(argv: list[str]) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Link products to a new order inside a transaction")
    ap.add_argument("--db-url", dest="db_url", default=os.environ.get("SHOPDB_DB_URL", DEFAULT_DB_URL),
                    help="Target database URL (overrides env var SHOPDB_DB_URL)")
    ap.add_argument("--break-link", action="store_true",
                    help="Write one order item without a product to force a rollback")
    ap.add_argument("--echo", action="store_true", help="Echo SQL statements to stdout")
    return ap.parse_args(argv)


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")
    with open_database(args.db_url, echo=args.echo) as engine:
        bootstrap(engine)
        with get_session(engine) as session:
            print(json.dumps(list_product_names(session)))

        report = report_order_count(make_session_factory(engine), break_link=args.break_link)
        if report.result.ok:
            first, last = report.result.value
            print(f"Linked {first.name} and {last.name} to a new order.")
        else:
            print(f"Rolled back: {type(report.result.error).__name__}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
