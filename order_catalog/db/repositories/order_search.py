"""
Search criteria for entity order queries.
"""

from dataclasses import dataclass
from typing import Optional

from sqlalchemy import Select

from order_catalog.domain.models import Member, Order, OrderStatus


@dataclass(frozen=True)
class OrderSearch:
    """
    Optional filters; the default instance matches every order.

    Attributes:
        member_name: Substring of the buyer name
        order_status: Exact order status
    """

    member_name: Optional[str] = None
    order_status: Optional[OrderStatus] = None

    @property
    def is_empty(self) -> bool:
        return not self.member_name and self.order_status is None

    def apply(self, statement: Select) -> Select:
        """
        Add the filter criteria to a statement already joined to Member.

        Args:
            statement: Select over Order joined with Order.member

        Returns:
            Select: Statement with WHERE criteria added
        """
        if self.is_empty:
            return statement
        if self.order_status is not None:
            statement = statement.where(Order.status == self.order_status)
        if self.member_name:
            statement = statement.where(Member.name.like(f"%{self.member_name}%"))
        return statement
