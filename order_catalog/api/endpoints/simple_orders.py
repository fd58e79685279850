"""
Endpoints de listado simple: encabezado de orden con comprador y dirección,
sin líneas.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends

from order_catalog.api.dependencies import get_order_search, get_simple_order_listing_service
from order_catalog.api.schemas import OrderSimpleQueryDto, SimpleOrderDto, SimpleOrderEntity
from order_catalog.db.repositories import OrderSearch
from order_catalog.services import SimpleOrderListingService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Simple Orders"])


@router.get("/v1/simple-orders", response_model=List[SimpleOrderEntity], summary="Entidades simples (V1)")
async def simple_orders_v1(
    search: OrderSearch = Depends(get_order_search),
    service: SimpleOrderListingService = Depends(get_simple_order_listing_service),
):
    """Entidades de orden con member y delivery resueltos uno a uno."""
    orders = await service.list_order_entities(search)
    return [SimpleOrderEntity.model_validate(order) for order in orders]


@router.get("/v2/simple-orders", response_model=List[SimpleOrderDto], summary="Órdenes simples (V2)")
async def simple_orders_v2(
    search: OrderSearch = Depends(get_order_search),
    service: SimpleOrderListingService = Depends(get_simple_order_listing_service),
):
    return await service.list_orders(search)


@router.get("/v3/simple-orders", response_model=List[SimpleOrderDto], summary="Órdenes simples con fetch join (V3)")
async def simple_orders_v3(service: SimpleOrderListingService = Depends(get_simple_order_listing_service)):
    return await service.list_orders_with_member_delivery()


@router.get("/v4/simple-orders", response_model=List[OrderSimpleQueryDto], summary="Proyección simple (V4)")
async def simple_orders_v4(service: SimpleOrderListingService = Depends(get_simple_order_listing_service)):
    """Proyección directa de las columnas del encabezado en una consulta."""
    return await service.list_order_simple_query_dtos()
