"""Association helpers for products, orders and their order_items join rows.

Writes go through explicit functions (``create_order``, ``add_order_item``)
rather than relationship collections, so every INSERT is visible at the call site.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.orm import Session, sessionmaker

from shopdb.models import Order, OrderItem, Product

_log = logging.getLogger(__name__)


@dataclass
class TransactionResult:
    ok: bool
    value: Any = None
    error: Optional[BaseException] = None

    @property
    def rolled_back(self) -> bool:
        return not self.ok


@dataclass
class OrderCountReport:
    before: int
    after: int
    result: TransactionResult


def list_product_names(session: Session) -> List[str]:
    return list(session.execute(select(Product.name)).scalars())


def create_order(session: Session) -> Order:
    order = Order()
    session.add(order)
    session.flush()
    return order


def add_order_item(
    session: Session,
    product_id: Optional[int],
    order_id: Optional[int],
    quantity: Optional[int] = None,
) -> OrderItem:
    item = OrderItem(product_id=product_id, order_id=order_id, quantity=quantity)
    session.add(item)
    # Flush now so a bad reference fails here rather than at commit
    session.flush()
    return item


def first_and_last_products(session: Session) -> Tuple[Product, Product]:
    first = session.execute(select(Product).order_by(Product.id).limit(1)).scalar_one_or_none()
    last = session.execute(select(Product).order_by(Product.id.desc()).limit(1)).scalar_one_or_none()
    if first is None or last is None:
        raise LookupError("products table is empty; run the bootstrapper first")
    return first, last


def link_first_and_last_product_to_new_order(session: Session, break_link: bool = False) -> Tuple[Product, Product]:
    """Create an order holding the first and the last product.

    With ``break_link`` the second item is written without a product, which
    the NOT NULL constraint on ``order_items.product_id`` rejects.
    """
    order = create_order(session)
    products = first_and_last_products(session)
    for i, product in enumerate(products):
        product_id = None if break_link and i == len(products) - 1 else product.id
        add_order_item(session, product_id, order.id)
    return products


def count_orders(session: Session) -> int:
    return session.execute(select(func.count()).select_from(Order)).scalar_one()


def count_order_items(session: Session) -> int:
    return session.execute(select(func.count()).select_from(OrderItem)).scalar_one()


def run_in_transaction(session_factory: sessionmaker[Session], fn: Callable[[Session], Any]) -> TransactionResult:
    """Run ``fn`` in its own session and transaction.

    Commits when ``fn`` returns; any exception rolls back every write made
    inside the block and is handed back in the result instead of being raised.
    """
    session = session_factory()
    try:
        with session.begin():
            value = fn(session)
    except Exception as e:
        _log.warning("Transaction rolled back: %s: %s", type(e).__name__, e)
        return TransactionResult(ok=False, error=e)
    finally:
        session.close()
    return TransactionResult(ok=True, value=value)


def report_order_count(
    session_factory: sessionmaker[Session],
    break_link: bool = False,
    out: Callable[[str], Any] = print,
) -> OrderCountReport:
    with session_factory() as session:
        before = count_orders(session)
    out(f"There are {before} orders.")

    result = run_in_transaction(
        session_factory,
        lambda s: link_first_and_last_product_to_new_order(s, break_link=break_link),
    )

    with session_factory() as session:
        after = count_orders(session)
    out(f"There are {after} orders.")
    return OrderCountReport(before=before, after=after, result=result)
