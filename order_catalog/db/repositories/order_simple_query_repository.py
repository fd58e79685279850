"""
OrderSimpleQueryRepository: narrow projection of order headers.
"""

import logging
from typing import List

from sqlalchemy import select

from order_catalog.api.schemas.order_schemas import OrderSimpleQueryDto
from order_catalog.db.repositories.base import BaseRepository, log_operation
from order_catalog.domain.models import Delivery, Member, Order

logger = logging.getLogger(__name__)


class OrderSimpleQueryRepository(BaseRepository):
    """Repository returning OrderSimpleQueryDto projections."""

    @log_operation()
    async def find_order_dtos(self) -> List[OrderSimpleQueryDto]:
        """Select exactly the header columns in one query."""
        statement = (
            select(Order.id, Member.name, Order.order_date, Order.status, Delivery.address)
            .join(Order.member)
            .join(Order.delivery)
            .order_by(Order.id)
        )

        result = await self.session.execute(statement)
        return [
            OrderSimpleQueryDto(order_id=order_id, name=name, order_date=order_date, status=status, address=address)
            for order_id, name, order_date, status, address in result
        ]
