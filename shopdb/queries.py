"""Read-only query demonstrations over ``products``.

Every query has a ``*_stmt`` builder so callers can show the SQL before
running it; the runners return plain dicts.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session
from sqlalchemy.sql import Select

from shopdb.models import Product

products = Product.__table__


def all_stmt() -> Select:
    return select(products)


def order_stmt() -> Select:
    return select(products).order_by(products.c.name.desc())


def group_stmt() -> Select:
    return (
        select(products.c.category, func.count().label("count"))
        .group_by(products.c.category)
        .order_by(products.c.category)
    )


def first_stmt(limit: int = 2) -> Select:
    return select(products).limit(limit)


def limit_stmt(limit: int = 2, offset: int = 0) -> Select:
    return select(products).order_by(products.c.name).limit(limit).offset(offset)


def condition_stmt(product_id: int) -> Select:
    return select(products).where(products.c.id == product_id)


def render_sql(session: Session, stmt: Select) -> str:
    """Compile ``stmt`` for the session's dialect with parameters inlined."""
    compiled = stmt.compile(dialect=session.get_bind().dialect, compile_kwargs={"literal_binds": True})
    return str(compiled)


def _rows(session: Session, stmt: Select) -> List[Dict[str, Any]]:
    return [dict(row) for row in session.execute(stmt).mappings()]


def query_all(session: Session) -> List[Dict[str, Any]]:
    return _rows(session, all_stmt())


def query_order(session: Session) -> List[Dict[str, Any]]:
    return _rows(session, order_stmt())


def query_group(session: Session) -> Dict[str, int]:
    return {category: count for category, count in session.execute(group_stmt())}


def query_first(session: Session, limit: int = 2) -> List[Dict[str, Any]]:
    return _rows(session, first_stmt(limit))


def query_limit(session: Session, limit: int = 2, offset: int = 0) -> List[Dict[str, Any]]:
    if limit < 0 or offset < 0:
        raise ValueError("limit and offset must be non-negative")
    return _rows(session, limit_stmt(limit, offset))


def query_on_condition(session: Session, product_id: int) -> Optional[Dict[str, Any]]:
    row = session.execute(condition_stmt(product_id)).mappings().first()
    return dict(row) if row is not None else None
