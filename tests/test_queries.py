from __future__ import annotations

import pytest

from shopdb import queries
from shopdb.repository import count_orders


def _names(rows):
    return [r["name"] for r in rows]


def test_query_all_storage_order(session):
    rows = queries.query_all(session)
    assert _names(rows) == ["Apple", "Veal", "Broccoli", "Tomato", "Hammer", "Screwdriver", "Onion"]
    assert set(rows[0]) == {"id", "name", "category"}


def test_query_order_by_name_desc(session):
    rows = queries.query_order(session)
    assert _names(rows) == ["Veal", "Tomato", "Screwdriver", "Onion", "Hammer", "Broccoli", "Apple"]
    assert _names(rows)[:2] == ["Veal", "Tomato"]


def test_query_group_counts(session):
    assert queries.query_group(session) == {"Fruit": 2, "Meat": 1, "Tool": 2, "Vegetable": 2}


def test_query_first_is_unordered_limit(session):
    assert _names(queries.query_first(session, 2)) == ["Apple", "Veal"]


@pytest.mark.parametrize(
    "limit, offset, expected",
    [
        (2, 0, ["Apple", "Broccoli"]),
        (2, 4, ["Screwdriver", "Tomato"]),
        (3, 5, ["Tomato", "Veal"]),
        (2, 10, []),
        (0, 0, []),
    ],
)
def test_query_limit_pages_by_name(session, limit, offset, expected):
    assert _names(queries.query_limit(session, limit, offset)) == expected


def test_query_limit_rejects_negative(session):
    with pytest.raises(ValueError):
        queries.query_limit(session, -1, 0)


def test_query_on_condition(session):
    assert queries.query_on_condition(session, 1) == {"id": 1, "name": "Apple", "category": "Fruit"}
    assert queries.query_on_condition(session, 42) is None


def test_queries_are_repeatable_and_read_only(session):
    runs = [
        lambda: queries.query_all(session),
        lambda: queries.query_order(session),
        lambda: queries.query_group(session),
        lambda: queries.query_limit(session, 2, 4),
        lambda: queries.query_on_condition(session, 1),
    ]
    for run in runs:
        assert run() == run()
    assert len(queries.query_all(session)) == 7
    assert count_orders(session) == 0


def test_render_sql_inlines_parameters(session):
    sql = queries.render_sql(session, queries.condition_stmt(1))
    assert "FROM products" in sql
    assert "products.id = 1" in sql

    page = queries.render_sql(session, queries.limit_stmt(2, 4))
    assert "ORDER BY products.name" in page
    assert "LIMIT 2" in page and "OFFSET 4" in page


def test_render_sql_order_desc(session):
    assert "ORDER BY products.name DESC" in queries.render_sql(session, queries.order_stmt())
