"""
OrderQueryRepository: projection queries shaped directly into DTOs.

No entity is materialized here; each query selects exactly the columns the
response needs.
"""

import logging
from typing import Dict, List, Sequence

from sqlalchemy import select

from order_catalog.api.schemas.order_schemas import OrderFlatDto, OrderItemQueryDto, OrderQueryDto
from order_catalog.db.repositories.base import BaseRepository, log_operation
from order_catalog.domain.models import Delivery, Item, Member, Order, OrderItem
from order_catalog.utils.grouping import group_by

logger = logging.getLogger(__name__)


class OrderQueryRepository(BaseRepository):
    """Repository returning OrderQueryDto projections."""

    @log_operation()
    async def find_order_query_dtos(self) -> List[OrderQueryDto]:
        """
        Header projection, then one item query per order (1 + N).
        """
        orders = await self._find_orders()

        result = []
        for order in orders:
            order_items = await self._find_order_items(order.order_id)
            result.append(order.with_items(order_items))
        return result

    @log_operation()
    async def find_all_by_dto_optimization(self) -> List[OrderQueryDto]:
        """
        Header projection, then a single IN-list query for all items (2 queries).

        Items are grouped by order id in memory and attached to their order.
        """
        orders = await self._find_orders()
        order_item_map = await self._find_order_item_map([order.order_id for order in orders])

        return [order.with_items(order_item_map.get(order.order_id, [])) for order in orders]

    @log_operation()
    async def find_all_by_dto_flat(self) -> List[OrderFlatDto]:
        """
        One flat join returning a row per (order, order item).

        Orders are outer joined to their items so an order without items
        still yields one row, with the item fields set to None.
        """
        statement = (
            select(
                Order.id,
                Member.name,
                Order.order_date,
                Order.status,
                Delivery.address,
                Item.name,
                OrderItem.order_price,
                OrderItem.count,
            )
            .join(Order.member)
            .join(Order.delivery)
            .outerjoin(Order.order_items)
            .outerjoin(OrderItem.item)
            .order_by(Order.id, OrderItem.id)
        )

        result = await self.session.execute(statement)
        return [
            OrderFlatDto(
                order_id=order_id,
                name=name,
                order_date=order_date,
                order_status=status,
                address=address,
                item_name=item_name,
                order_price=order_price,
                count=count,
            )
            for order_id, name, order_date, status, address, item_name, order_price, count in result
        ]

    async def _find_orders(self) -> List[OrderQueryDto]:
        statement = (
            select(Order.id, Member.name, Order.order_date, Order.status, Delivery.address)
            .join(Order.member)
            .join(Order.delivery)
            .order_by(Order.id)
        )

        result = await self.session.execute(statement)
        return [
            OrderQueryDto(order_id=order_id, name=name, order_date=order_date, order_status=status, address=address)
            for order_id, name, order_date, status, address in result
        ]

    def _order_items_statement(self):
        return (
            select(OrderItem.order_id, Item.name, OrderItem.order_price, OrderItem.count)
            .join(OrderItem.item)
            .order_by(OrderItem.id)
        )

    async def _find_order_items(self, order_id: int) -> List[OrderItemQueryDto]:
        statement = self._order_items_statement().where(OrderItem.order_id == order_id)

        result = await self.session.execute(statement)
        return [self._to_item_dto(row) for row in result]

    async def _find_order_item_map(self, order_ids: Sequence[int]) -> Dict[int, List[OrderItemQueryDto]]:
        if not order_ids:
            return {}

        statement = self._order_items_statement().where(OrderItem.order_id.in_(order_ids))

        result = await self.session.execute(statement)
        return group_by((self._to_item_dto(row) for row in result), key=lambda dto: dto.order_id)

    @staticmethod
    def _to_item_dto(row) -> OrderItemQueryDto:
        order_id, item_name, order_price, count = row
        return OrderItemQueryDto(order_id=order_id, item_name=item_name, order_price=order_price, count=count)
