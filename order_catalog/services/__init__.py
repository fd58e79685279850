"""
Listing services: one method per retrieval strategy.
"""

from .order_listing_service import OrderListingService, group_flat_rows
from .simple_order_listing_service import SimpleOrderListingService

__all__ = ["OrderListingService", "SimpleOrderListingService", "group_flat_rows"]
