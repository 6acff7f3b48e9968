"""shopdb package exports for the walkthrough's database layer.

Re-exports commonly used symbols to simplify imports in scripts
(e.g. `from shopdb import Base, make_engine`).
"""
from .models import Base, Order, OrderItem, Product  # noqa: F401
from .session import get_session, make_engine, make_session_factory, open_database  # noqa: F401

__all__ = [
    "Base",
    "Order",
    "OrderItem",
    "Product",
    "get_session",
    "make_engine",
    "make_session_factory",
    "open_database",
]
