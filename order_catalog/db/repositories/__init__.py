"""
Catalog Repository Package.

Repository Structure:
- BaseRepository: Session holder and operation logging
- OrderRepository: Order entity graphs (lazy, fetch joined, paged + batched)
- OrderQueryRepository: Order projections with items (V4, V5, V6)
- OrderSimpleQueryRepository: Narrow order header projection
- OrderSearch: Optional filters for entity queries
"""

from .base import BaseRepository, log_operation
from .order_query_repository import OrderQueryRepository
from .order_repository import OrderRepository
from .order_search import OrderSearch
from .order_simple_query_repository import OrderSimpleQueryRepository

__all__ = [
    "BaseRepository",
    "log_operation",
    "OrderQueryRepository",
    "OrderRepository",
    "OrderSearch",
    "OrderSimpleQueryRepository",
]
