"""
Order domain model (Aggregate Root).

An order belongs to one member, ships through one delivery and holds an
ordered list of order items.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Enum, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base
from .delivery import Delivery
from .member import Member
from .order_item import OrderItem
from .status import OrderStatus


class Order(Base):
    """
    Customer order.

    Relations are lazy; callers either fetch-join them or resolve them
    explicitly through ``awaitable_attrs`` before reading.

    Attributes:
        id: Order ID
        member: Buyer (to-one)
        delivery: Shipment (to-one)
        order_items: Line items ordered by their ID (to-many)
        order_date: Order timestamp
        status: Order status (ORDER, CANCEL)
    """

    __tablename__ = "orders"

    id: Mapped[int] = mapped_column("order_id", primary_key=True)
    member_id: Mapped[int] = mapped_column(ForeignKey("members.member_id"))
    delivery_id: Mapped[int] = mapped_column(ForeignKey("deliveries.delivery_id"), unique=True)
    order_date: Mapped[datetime] = mapped_column(DateTime)
    status: Mapped[OrderStatus] = mapped_column(Enum(OrderStatus, native_enum=False, length=20))

    member: Mapped[Member] = relationship(back_populates="orders")
    delivery: Mapped[Delivery] = relationship(back_populates="order")
    order_items: Mapped[list[OrderItem]] = relationship(
        back_populates="order", cascade="all, delete-orphan", order_by=OrderItem.id
    )

    @property
    def total_price(self) -> int:
        """Sum of the line totals. Requires ``order_items`` to be loaded."""
        return sum(order_item.total_price for order_item in self.order_items)

    def __repr__(self) -> str:
        return f"<Order(id={self.id}, status={self.status}, order_date={self.order_date})>"
