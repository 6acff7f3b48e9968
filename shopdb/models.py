from __future__ import annotations

from sqlalchemy import Column, ForeignKey, Integer, Text
from sqlalchemy.orm import declarative_base, relationship


Base = declarative_base()


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True)
    name = Column(Text)
    category = Column(Text)

    order_items = relationship("OrderItem", back_populates="product")
    # Many-to-many through the join table; writes go through OrderItem
    orders = relationship("Order", secondary="order_items", viewonly=True)

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return f"<Product id={self.id} name={self.name} category={self.category}>"


class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True)

    order_items = relationship("OrderItem", back_populates="order")
    products = relationship("Product", secondary="order_items", viewonly=True)

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return f"<Order id={self.id}>"


class OrderItem(Base):
    """Join row linking one Product to one Order."""

    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False, index=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False, index=True)
    quantity = Column(Integer, nullable=True)

    product = relationship("Product", back_populates="order_items")
    order = relationship("Order", back_populates="order_items")

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return f"<OrderItem order={self.order_id} product={self.product_id} quantity={self.quantity}>"
