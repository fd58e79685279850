"""
Dependencias de FastAPI con alcance de request.

Cada request obtiene su propia sesión; repositorios y servicios se
construyen sobre ella y se descartan al terminar la request.
"""

import logging
from typing import AsyncIterator, Optional

from fastapi import Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from order_catalog.core.config import Settings, get_settings
from order_catalog.db.connection import get_db_connection
from order_catalog.db.query_counter import QueryCounter
from order_catalog.db.repositories import (
    OrderQueryRepository,
    OrderRepository,
    OrderSearch,
    OrderSimpleQueryRepository,
)
from order_catalog.domain.models import OrderStatus
from order_catalog.services import OrderListingService, SimpleOrderListingService

logger = logging.getLogger(__name__)


async def get_db_session() -> AsyncIterator[AsyncSession]:
    """
    Abre una sesión para la request y la cierra al terminar.

    Registra en DEBUG cuántas sentencias ejecutó la request.
    """
    conn_db = get_db_connection()
    async with conn_db.get_session() as session:
        with QueryCounter(session) as counter:
            yield session
        logger.debug(
            f"Request session executed {counter.count} statements ({counter.relationship_loads} relationship loads)"
        )


def get_order_search(
    member_name: Optional[str] = Query(None, alias="memberName", description="Parte del nombre del comprador"),
    order_status: Optional[OrderStatus] = Query(None, alias="orderStatus", description="Estado exacto de la orden"),
) -> OrderSearch:
    """Construye el filtro de búsqueda desde los query params."""
    return OrderSearch(member_name=member_name, order_status=order_status)


def get_order_listing_service(
    session: AsyncSession = Depends(get_db_session),
    settings: Settings = Depends(get_settings),
) -> OrderListingService:
    return OrderListingService(
        order_repository=OrderRepository(session, settings),
        order_query_repository=OrderQueryRepository(session, settings),
        batch_size=settings.ORDER_ITEM_BATCH_SIZE,
    )


def get_simple_order_listing_service(
    session: AsyncSession = Depends(get_db_session),
    settings: Settings = Depends(get_settings),
) -> SimpleOrderListingService:
    return SimpleOrderListingService(
        order_repository=OrderRepository(session, settings),
        order_simple_query_repository=OrderSimpleQueryRepository(session, settings),
    )
