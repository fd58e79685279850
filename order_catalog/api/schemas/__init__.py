"""
Response schemas: DTOs for the listing endpoints and entity mirrors for V1.
"""

from .entity_schemas import (
    DeliveryEntity,
    ItemEntity,
    MemberEntity,
    OrderEntity,
    OrderItemEntity,
    SimpleOrderEntity,
)
from .order_schemas import (
    OrderDto,
    OrderFlatDto,
    OrderItemDto,
    OrderItemQueryDto,
    OrderQueryDto,
    OrderSimpleQueryDto,
    SimpleOrderDto,
)

__all__ = [
    "DeliveryEntity",
    "ItemEntity",
    "MemberEntity",
    "OrderEntity",
    "OrderItemEntity",
    "SimpleOrderEntity",
    "OrderDto",
    "OrderFlatDto",
    "OrderItemDto",
    "OrderItemQueryDto",
    "OrderQueryDto",
    "OrderSimpleQueryDto",
    "SimpleOrderDto",
]
