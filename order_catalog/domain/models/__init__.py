"""
Domain models for business entities.

Mapped SQLAlchemy entities of the order catalog. The API only reads them.
"""

from .base import Base
from .delivery import Delivery
from .item import Album, Book, Item, Movie
from .member import Member
from .order import Order
from .order_item import OrderItem
from .status import DeliveryStatus, OrderStatus

__all__ = [
    "Base",
    "Album",
    "Book",
    "Delivery",
    "DeliveryStatus",
    "Item",
    "Member",
    "Movie",
    "Order",
    "OrderItem",
    "OrderStatus",
]
