"""
OrderRepository: entity queries over orders.

Returns mapped Order entities, either bare (relations left lazy), fetch
joined, or paged with their items attached afterwards in batches.
"""

import logging
from typing import Dict, List, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.orm import contains_eager, joinedload
from sqlalchemy.orm.attributes import set_committed_value

from order_catalog.db.repositories.base import BaseRepository, log_operation
from order_catalog.db.repositories.order_search import OrderSearch
from order_catalog.domain.models import Order, OrderItem
from order_catalog.utils.batch_loader import load_in_batches

logger = logging.getLogger(__name__)


class OrderRepository(BaseRepository):
    """Repository for Order entity graphs."""

    @log_operation()
    async def find_all_by_search(self, search: Optional[OrderSearch] = None) -> List[Order]:
        """
        Find orders matching the search, with every relation left lazy.

        Member is joined only to filter by name; it is not populated.
        Results are capped at ORDER_SEARCH_MAX_RESULTS.
        """
        search = search or OrderSearch()
        statement = search.apply(select(Order).join(Order.member))
        statement = statement.order_by(Order.id).limit(self.settings.ORDER_SEARCH_MAX_RESULTS)

        result = await self.session.scalars(statement)
        return list(result.all())

    @log_operation()
    async def find_all_with_item(self) -> List[Order]:
        """
        Fetch join member, delivery, order items and their items in one query.

        The result set has one row per order item; ``unique()`` collapses it
        back to one entity per order. Not pageable.
        """
        statement = (
            select(Order)
            .options(
                joinedload(Order.member),
                joinedload(Order.delivery),
                joinedload(Order.order_items).joinedload(OrderItem.item),
            )
            .order_by(Order.id)
        )

        result = await self.session.execute(statement)
        return list(result.unique().scalars().all())

    @log_operation()
    async def find_all_with_member_delivery(
        self,
        offset: int = 0,
        limit: Optional[int] = None,
        search: Optional[OrderSearch] = None,
    ) -> List[Order]:
        """
        Fetch join the to-one relations (member, delivery) only.

        Only to-one relations are joined, so OFFSET/LIMIT and the search
        criteria apply to orders, never to item rows.

        Args:
            offset: Number of orders to skip
            limit: Maximum number of orders; None for all
            search: Optional filters applied before paging
        """
        search = search or OrderSearch()
        statement = (
            select(Order)
            .join(Order.member)
            .join(Order.delivery)
            .options(contains_eager(Order.member), contains_eager(Order.delivery))
        )
        statement = search.apply(statement).order_by(Order.id).offset(offset)
        if limit is not None:
            statement = statement.limit(limit)

        result = await self.session.scalars(statement)
        return list(result.all())

    @log_operation()
    async def find_order_items_by_order_ids(self, order_ids: Sequence[int]) -> List[OrderItem]:
        """Load the order items (with their item) of the given orders in one IN-list query."""
        if not order_ids:
            return []

        statement = (
            select(OrderItem)
            .options(joinedload(OrderItem.item))
            .where(OrderItem.order_id.in_(order_ids))
            .order_by(OrderItem.id)
        )

        result = await self.session.scalars(statement)
        return list(result.all())

    async def load_order_items_in_batches(self, orders: Sequence[Order], batch_size: int) -> None:
        """
        Populate ``order_items`` of already loaded orders, ``batch_size`` orders per query.

        Items are set as committed state, so the orders are not marked dirty
        and reading ``order.order_items`` afterwards issues no query.

        Args:
            orders: Orders whose items are still unloaded
            batch_size: Maximum number of order ids per IN-list

        Raises:
            ValueError: If batch_size is lower than 1
        """
        order_items: Dict[int, List[OrderItem]] = await load_in_batches(
            keys=[order.id for order in orders],
            batch_size=batch_size,
            fetch=self.find_order_items_by_order_ids,
            key_of=lambda order_item: order_item.order_id,
        )

        for order in orders:
            set_committed_value(order, "order_items", order_items.get(order.id, []))

        logger.debug(f"Attached items to {len(orders)} orders (batch size {batch_size})")
