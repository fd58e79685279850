"""
Enumerated states of orders and deliveries.
"""

from enum import Enum


class OrderStatus(str, Enum):
    """Lifecycle state of an order."""

    ORDER = "ORDER"
    CANCEL = "CANCEL"


class DeliveryStatus(str, Enum):
    """Shipping state of a delivery."""

    READY = "READY"
    COMP = "COMP"
