"""
Member entity: the buyer of an order.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, composite, mapped_column, relationship

from order_catalog.domain.value_objects import Address

from .base import Base

if TYPE_CHECKING:
    from .order import Order


class Member(Base):
    """
    Registered customer.

    Attributes:
        id: Member ID
        name: Display name
        address: Home address (city, street, zipcode columns)
        orders: Orders placed by this member (never serialized)
    """

    __tablename__ = "members"

    id: Mapped[int] = mapped_column("member_id", primary_key=True)
    name: Mapped[str] = mapped_column(String(100))
    address: Mapped[Address] = composite(
        mapped_column("city", String(100)),
        mapped_column("street", String(200)),
        mapped_column("zipcode", String(20)),
    )

    orders: Mapped[list[Order]] = relationship(back_populates="member", order_by="Order.id")

    def __repr__(self) -> str:
        return f"<Member(id={self.id}, name={self.name!r})>"
