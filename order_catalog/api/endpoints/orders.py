"""
Endpoints de listado de órdenes completas (orden, comprador, entrega y líneas).

Todas las versiones devuelven el mismo contenido lógico; cambian la
estrategia de carga y, en V1, la forma del JSON.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Query

from order_catalog.api.dependencies import get_order_listing_service, get_order_search
from order_catalog.api.schemas import OrderDto, OrderEntity, OrderQueryDto
from order_catalog.core.config import settings
from order_catalog.db.repositories import OrderSearch
from order_catalog.services import OrderListingService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Orders"])


@router.get("/v1/orders", response_model=List[OrderEntity], summary="Entidades de orden (V1)")
async def orders_v1(
    search: OrderSearch = Depends(get_order_search),
    service: OrderListingService = Depends(get_order_listing_service),
):
    """
    Devuelve las entidades de orden con todas sus relaciones resueltas una a una.

    Expone la forma interna de las entidades; pensado como línea base.
    """
    orders = await service.list_order_entities(search)
    return [OrderEntity.model_validate(order) for order in orders]


@router.get("/v2/orders", response_model=List[OrderDto], summary="Órdenes como DTO (V2)")
async def orders_v2(
    search: OrderSearch = Depends(get_order_search),
    service: OrderListingService = Depends(get_order_listing_service),
):
    return await service.list_orders(search)


@router.get("/v3/orders", response_model=List[OrderDto], summary="Órdenes con fetch join (V3)")
async def orders_v3(service: OrderListingService = Depends(get_order_listing_service)):
    """Una sola consulta sobre todo el grafo; no admite paginación."""
    return await service.list_orders_with_items()


@router.get("/v3.1/orders", response_model=List[OrderDto], summary="Órdenes paginadas (V3.1)")
async def orders_v3_1(
    offset: int = Query(0, ge=0, description="Órdenes a saltar"),
    limit: int = Query(settings.DEFAULT_PAGE_LIMIT, ge=1, description="Máximo de órdenes en la página"),
    search: OrderSearch = Depends(get_order_search),
    service: OrderListingService = Depends(get_order_listing_service),
):
    """
    Página de órdenes ordenadas por id.

    Las relaciones a uno se traen en la consulta paginada y las líneas se
    cargan por lotes de ids de orden.

    Args:
        offset: Órdenes a saltar (>= 0)
        limit: Máximo de órdenes (>= 1)
    """
    return await service.list_orders_paged(offset=offset, limit=limit, search=search)


@router.get("/v4/orders", response_model=List[OrderQueryDto], summary="Proyección 1 + N (V4)")
async def orders_v4(service: OrderListingService = Depends(get_order_listing_service)):
    return await service.list_order_query_dtos()


@router.get("/v5/orders", response_model=List[OrderQueryDto], summary="Proyección con IN (V5)")
async def orders_v5(service: OrderListingService = Depends(get_order_listing_service)):
    return await service.list_order_query_dtos_optimized()


@router.get("/v6/orders", response_model=List[OrderQueryDto], summary="Join plano reagrupado (V6)")
async def orders_v6(service: OrderListingService = Depends(get_order_listing_service)):
    """Una consulta plana (una fila por línea) reagrupada en memoria por orden."""
    return await service.list_order_query_dtos_flat()
