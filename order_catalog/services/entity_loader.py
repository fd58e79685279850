"""
Explicit resolution of lazy order relations.

The async ORM never loads a relation on plain attribute access; an entity
handed to a serializer must have every relation it exposes resolved first.
These helpers await each relation in turn, one query per relation not
already present in the session's identity map.
"""

import logging
from typing import Sequence

from order_catalog.domain.models import Order

logger = logging.getLogger(__name__)


async def resolve_order_graph(order: Order, include_items: bool = True) -> Order:
    """
    Resolve member and delivery and, optionally, order items and their items.

    Args:
        order: Order attached to a live session
        include_items: Also resolve ``order_items`` and each ``item``

    Returns:
        Order: The same order, safe to read without further queries
    """
    await order.awaitable_attrs.member
    await order.awaitable_attrs.delivery

    if include_items:
        order_items = await order.awaitable_attrs.order_items
        for order_item in order_items:
            await order_item.awaitable_attrs.item

    return order


async def resolve_order_graphs(orders: Sequence[Order], include_items: bool = True) -> list[Order]:
    """Resolve every order sequentially on its session."""
    for order in orders:
        await resolve_order_graph(order, include_items=include_items)

    logger.debug(f"Resolved relations of {len(orders)} orders (include_items={include_items})")
    return list(orders)
