"""
OrderItem: one line of an order.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base
from .item import Item

if TYPE_CHECKING:
    from .order import Order


class OrderItem(Base):
    """
    Line item.

    Attributes:
        id: Order item ID
        item: Ordered item (to-one)
        order: Owning order (never serialized)
        order_price: Unit price at order time
        count: Ordered quantity
    """

    __tablename__ = "order_items"

    id: Mapped[int] = mapped_column("order_item_id", primary_key=True)
    order_id: Mapped[int] = mapped_column(ForeignKey("orders.order_id"), index=True)
    item_id: Mapped[int] = mapped_column(ForeignKey("items.item_id"))
    order_price: Mapped[int]
    count: Mapped[int]

    item: Mapped[Item] = relationship()
    order: Mapped[Order] = relationship(back_populates="order_items")

    @property
    def total_price(self) -> int:
        """Line total: unit price times quantity."""
        return self.order_price * self.count

    def __repr__(self) -> str:
        return f"<OrderItem(id={self.id}, order_id={self.order_id}, count={self.count})>"
