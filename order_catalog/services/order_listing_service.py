"""
OrderListingService - full order aggregates through alternative strategies.

Every strategy returns the same logical result (all orders with buyer,
delivery address and line items, ordered by order id); they differ in how
many statements they issue, how many rows come back and whether they page.

| Mode | Method                            | Statements                      |
|------|-----------------------------------|---------------------------------|
| V1   | list_order_entities               | 1 + per order + per item        |
| V2   | list_orders                       | same as V1                      |
| V3   | list_orders_with_items            | 1 (rows inflated by items)      |
| V3.1 | list_orders_paged                 | 1 + ceil(orders / batch size)   |
| V4   | list_order_query_dtos             | 1 + orders                      |
| V5   | list_order_query_dtos_optimized   | 2                               |
| V6   | list_order_query_dtos_flat        | 1 (one row per order item)      |
"""

import logging
from typing import Iterable, List, Optional

from order_catalog.api.schemas.order_schemas import OrderDto, OrderFlatDto, OrderItemQueryDto, OrderQueryDto
from order_catalog.db.repositories import OrderQueryRepository, OrderRepository, OrderSearch
from order_catalog.domain.models import Order
from order_catalog.services.entity_loader import resolve_order_graphs
from order_catalog.utils.grouping import group_by

logger = logging.getLogger(__name__)


def group_flat_rows(flats: Iterable[OrderFlatDto]) -> List[OrderQueryDto]:
    """
    Regroup flat (order × item) rows into nested order DTOs.

    Rows are grouped by the full header key (order id, name, date, status,
    address), not by order id alone. Groups keep first-seen order and items
    keep row arrival order. Rows without item fields contribute no item.

    Args:
        flats: Rows of the flat join

    Returns:
        List[OrderQueryDto]: One DTO per distinct header key
    """
    groups = group_by(flats, key=lambda flat: flat.order_key)

    return [
        OrderQueryDto(
            order_id=order_id,
            name=name,
            order_date=order_date,
            order_status=order_status,
            address=address,
            order_items=[
                OrderItemQueryDto(
                    order_id=row.order_id,
                    item_name=row.item_name,
                    order_price=row.order_price,
                    count=row.count,
                )
                for row in rows
                if row.has_item
            ],
        )
        for (order_id, name, order_date, order_status, address), rows in groups.items()
    ]


class OrderListingService:
    """
    Lists full orders (order, buyer, delivery address, line items).

    Stateless apart from its request-scoped repositories; store errors
    propagate unchanged.
    """

    def __init__(
        self,
        order_repository: OrderRepository,
        order_query_repository: OrderQueryRepository,
        batch_size: int,
    ):
        """
        Initialize the service with its collaborators.

        Args:
            order_repository: Entity queries
            order_query_repository: Projection queries
            batch_size: Order ids per IN-list when loading items in batches (V3.1)
        """
        self.order_repository = order_repository
        self.order_query_repository = order_query_repository
        self.batch_size = batch_size

    async def list_order_entities(self, search: Optional[OrderSearch] = None) -> List[Order]:
        """
        V1: raw entities with every serialized relation resolved explicitly.

        Naive baseline: one query for the orders, then one per unresolved
        member, delivery, item list and item.
        """
        orders = await self.order_repository.find_all_by_search(search)
        return await resolve_order_graphs(orders, include_items=True)

    async def list_orders(self, search: Optional[OrderSearch] = None) -> List[OrderDto]:
        """V2: same retrieval as V1, mapped to OrderDto."""
        orders = await self.list_order_entities(search)
        return [OrderDto.from_entity(order) for order in orders]

    async def list_orders_with_items(self) -> List[OrderDto]:
        """V3: one fetch-join query over the whole graph; cannot be paged."""
        orders = await self.order_repository.find_all_with_item()
        return [OrderDto.from_entity(order) for order in orders]

    async def list_orders_paged(
        self,
        offset: int = 0,
        limit: int = 100,
        search: Optional[OrderSearch] = None,
    ) -> List[OrderDto]:
        """
        V3.1: page over orders with to-one relations fetch joined, then load
        the items of the page in batches of ``batch_size`` order ids.

        Args:
            offset: Orders to skip
            limit: Maximum orders in the page
            search: Optional filters, applied before paging
        """
        orders = await self.order_repository.find_all_with_member_delivery(offset=offset, limit=limit, search=search)
        await self.order_repository.load_order_items_in_batches(orders, self.batch_size)

        logger.debug(f"Page offset={offset} limit={limit}: {len(orders)} orders")
        return [OrderDto.from_entity(order) for order in orders]

    async def list_order_query_dtos(self) -> List[OrderQueryDto]:
        """V4: header projection plus one item query per order."""
        return await self.order_query_repository.find_order_query_dtos()

    async def list_order_query_dtos_optimized(self) -> List[OrderQueryDto]:
        """V5: header projection plus a single IN-list item query."""
        return await self.order_query_repository.find_all_by_dto_optimization()

    async def list_order_query_dtos_flat(self) -> List[OrderQueryDto]:
        """V6: one flat join, regrouped in memory by the composite order key."""
        flats = await self.order_query_repository.find_all_by_dto_flat()
        orders = group_flat_rows(flats)

        logger.debug(f"Regrouped {len(flats)} flat rows into {len(orders)} orders")
        return orders
