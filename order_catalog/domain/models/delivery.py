"""
Delivery entity: where and how an order ships.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import Enum, String
from sqlalchemy.orm import Mapped, composite, mapped_column, relationship

from order_catalog.domain.value_objects import Address

from .base import Base
from .status import DeliveryStatus

if TYPE_CHECKING:
    from .order import Order


class Delivery(Base):
    """
    Shipment of a single order.

    Attributes:
        id: Delivery ID
        address: Shipping address
        status: Delivery status (READY, COMP)
        order: Owning order (never serialized)
    """

    __tablename__ = "deliveries"

    id: Mapped[int] = mapped_column("delivery_id", primary_key=True)
    address: Mapped[Address] = composite(
        mapped_column("city", String(100)),
        mapped_column("street", String(200)),
        mapped_column("zipcode", String(20)),
    )
    status: Mapped[DeliveryStatus] = mapped_column(
        Enum(DeliveryStatus, native_enum=False, length=20), default=DeliveryStatus.READY
    )

    order: Mapped[Order] = relationship(back_populates="delivery")

    def __repr__(self) -> str:
        return f"<Delivery(id={self.id}, status={self.status})>"
