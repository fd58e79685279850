"""
Sample data for development and tests.

Inserts two members with one order each, only when the store has no
members yet.
"""

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from order_catalog.domain.models import Book, Delivery, DeliveryStatus, Member, Order, OrderItem, OrderStatus
from order_catalog.domain.value_objects import Address

logger = logging.getLogger(__name__)

SAMPLE_ORDERS = [
    {
        "member": "userA",
        "address": Address(city="Seoul", street="1", zipcode="1111"),
        "items": [
            # (name, price, stock before order, count)
            ("JPA1 BOOK", 10000, 100, 1),
            ("JPA2 BOOK", 20000, 100, 2),
        ],
    },
    {
        "member": "userB",
        "address": Address(city="Busan", street="2", zipcode="2222"),
        "items": [
            ("SPRING1 BOOK", 20000, 200, 3),
            ("SPRING2 BOOK", 40000, 300, 4),
        ],
    },
]


def build_order(
    member: Member,
    items: list[tuple[Book, int]],
    order_date: Optional[datetime] = None,
    status: OrderStatus = OrderStatus.ORDER,
) -> Order:
    """
    Build an order shipping to the member's address.

    Args:
        member: Buyer
        items: (item, count) pairs; the order price is the item's list price
        order_date: Order timestamp; now by default
        status: Order status

    Returns:
        Order: Transient order with its delivery and order items
    """
    order = Order(
        member=member,
        delivery=Delivery(address=member.address, status=DeliveryStatus.READY),
        order_date=order_date or datetime.now(),
        status=status,
    )
    for item, count in items:
        item.stock_quantity -= count
        order.order_items.append(OrderItem(item=item, order_price=item.price, count=count))
    return order


async def seed_sample_data(session: AsyncSession) -> bool:
    """
    Insert the sample orders if the store is empty.

    Args:
        session: Session used for the inserts; committed on success

    Returns:
        bool: True if data was inserted, False if the store already had members
    """
    existing = await session.scalar(select(func.count()).select_from(Member))
    if existing:
        logger.info(f"Sample data skipped: {existing} members already present")
        return False

    for sample in SAMPLE_ORDERS:
        member = Member(name=sample["member"], address=sample["address"])
        books = [
            (Book(name=name, price=price, stock_quantity=stock), count)
            for name, price, stock, count in sample["items"]
        ]
        session.add(build_order(member, books))

    await session.commit()
    logger.info(f"Sample data inserted: {len(SAMPLE_ORDERS)} orders")
    return True
