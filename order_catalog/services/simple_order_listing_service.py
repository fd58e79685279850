"""
SimpleOrderListingService - order headers (no line items).

Only to-one relations (member, delivery) are involved, so there is no
fan-out to group or page around.

| Mode | Method                            | Statements |
|------|-----------------------------------|------------|
| V1   | list_order_entities               | N + 1      |
| V2   | list_orders                       | N + 1      |
| V3   | list_orders_with_member_delivery  | 1          |
| V4   | list_order_simple_query_dtos      | 1          |
"""

import logging
from typing import List, Optional

from order_catalog.api.schemas.order_schemas import OrderSimpleQueryDto, SimpleOrderDto
from order_catalog.db.repositories import OrderRepository, OrderSearch, OrderSimpleQueryRepository
from order_catalog.domain.models import Order
from order_catalog.services.entity_loader import resolve_order_graphs

logger = logging.getLogger(__name__)


class SimpleOrderListingService:
    """Lists order headers: id, buyer name, date, status, delivery address."""

    def __init__(
        self,
        order_repository: OrderRepository,
        order_simple_query_repository: OrderSimpleQueryRepository,
    ):
        self.order_repository = order_repository
        self.order_simple_query_repository = order_simple_query_repository

    async def list_order_entities(self, search: Optional[OrderSearch] = None) -> List[Order]:
        """V1: raw entities with member and delivery resolved explicitly."""
        orders = await self.order_repository.find_all_by_search(search)
        return await resolve_order_graphs(orders, include_items=False)

    async def list_orders(self, search: Optional[OrderSearch] = None) -> List[SimpleOrderDto]:
        """V2: same retrieval as V1, mapped to SimpleOrderDto."""
        orders = await self.list_order_entities(search)
        return [SimpleOrderDto.from_entity(order) for order in orders]

    async def list_orders_with_member_delivery(self) -> List[SimpleOrderDto]:
        """V3: member and delivery fetch joined in one query."""
        orders = await self.order_repository.find_all_with_member_delivery()
        return [SimpleOrderDto.from_entity(order) for order in orders]

    async def list_order_simple_query_dtos(self) -> List[OrderSimpleQueryDto]:
        """V4: narrow projection selecting only the needed columns."""
        return await self.order_simple_query_repository.find_order_dtos()
