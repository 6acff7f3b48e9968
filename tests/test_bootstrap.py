from __future__ import annotations

from sqlalchemy import inspect, select

from shopdb.bootstrap import SEED_PRODUCTS, bootstrap
from shopdb.models import Product
from shopdb.repository import list_product_names
from shopdb.session import make_engine, get_session


def test_creates_the_three_tables(engine):
    tables = set(inspect(engine).get_table_names())
    assert {"products", "orders", "order_items"} <= tables


def test_order_items_columns(engine):
    cols = {c["name"]: c for c in inspect(engine).get_columns("order_items")}
    assert set(cols) == {"id", "product_id", "order_id", "quantity"}
    assert cols["product_id"]["nullable"] is False
    assert cols["order_id"]["nullable"] is False
    assert cols["quantity"]["nullable"] is True


def test_seeds_products_in_insertion_order(session):
    assert list_product_names(session) == [
        "Apple", "Veal", "Broccoli", "Tomato", "Hammer", "Screwdriver", "Onion",
    ]


def test_seed_ids_follow_list_order(session):
    rows = session.execute(select(Product.id, Product.name, Product.category).order_by(Product.id)).all()
    assert [(r.name, r.category) for r in rows] == SEED_PRODUCTS
    assert [r.id for r in rows] == list(range(1, 8))


def test_bootstrap_returns_seed_count():
    eng = make_engine("sqlite:///:memory:")
    try:
        assert bootstrap(eng) == 7
        with get_session(eng) as s:
            assert len(list_product_names(s)) == 7
    finally:
        eng.dispose()


def test_in_memory_engines_are_isolated(engine):
    other = make_engine("sqlite:///:memory:")
    try:
        assert "products" not in inspect(other).get_table_names()
    finally:
        other.dispose()
