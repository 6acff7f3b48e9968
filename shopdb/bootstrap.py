"""Schema creation and seed data for the products/orders walkthrough."""
from __future__ import annotations

import logging
from typing import List, Tuple

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from shopdb.models import Base, Product
from shopdb.session import get_session

_log = logging.getLogger(__name__)

# (name, category) in insertion order; ids 1..7 follow this order
SEED_PRODUCTS: List[Tuple[str, str]] = [
    ("Apple", "Fruit"),
    ("Veal", "Meat"),
    ("Broccoli", "Vegetable"),
    ("Tomato", "Fruit"),
    ("Hammer", "Tool"),
    ("Screwdriver", "Tool"),
    ("Onion", "Vegetable"),
]


def create_schema(engine: Engine) -> None:
    Base.metadata.create_all(bind=engine)


def seed_products(session: Session) -> int:
    """Insert the seed products one row at a time so ids follow list order."""
    for name, category in SEED_PRODUCTS:
        session.add(Product(name=name, category=category))
        session.flush()
    return len(SEED_PRODUCTS)


def bootstrap(engine: Engine) -> int:
    """Create the tables and seed ``products``; returns the number of seeded rows."""
    create_schema(engine)
    with get_session(engine) as session:
        count = seed_products(session)
        session.commit()
    _log.info("Seeded %d products", count)
    return count
