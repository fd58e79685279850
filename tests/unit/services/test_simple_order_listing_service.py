"""Tests del servicio de listado simple (encabezados sin líneas)."""

import pytest

from order_catalog.api.schemas import SimpleOrderEntity
from order_catalog.db.query_counter import QueryCounter
from order_catalog.db.repositories import OrderSearch
from order_catalog.domain.models import OrderStatus


def header(order_id, name, order_date, status, address):
    return (order_id, name, order_date, status, address)


class TestSimpleOrderListingService:
    """V1 a V4 del listado simple."""

    @pytest.mark.asyncio
    async def test_all_modes_agree_on_shared_fields(self, simple_order_listing_service):
        """Debe devolver los mismos id, nombre, fecha, estado y dirección en V1 a V4."""
        entities = await simple_order_listing_service.list_order_entities()
        v2 = await simple_order_listing_service.list_orders()
        v3 = await simple_order_listing_service.list_orders_with_member_delivery()
        v4 = await simple_order_listing_service.list_order_simple_query_dtos()

        expected = [
            header(e.id, e.member.name, e.order_date, e.status, e.delivery.address) for e in entities
        ]
        for dtos in (v2, v3, v4):
            assert [header(d.order_id, d.name, d.order_date, d.status, d.address) for d in dtos] == expected

    @pytest.mark.asyncio
    async def test_sample_headers(self, simple_order_listing_service):
        """Debe devolver userA en Seoul y userB en Busan con estado ORDER."""
        orders = await simple_order_listing_service.list_order_simple_query_dtos()

        assert [(o.name, o.address.city, o.status) for o in orders] == [
            ("userA", "Seoul", OrderStatus.ORDER),
            ("userB", "Busan", OrderStatus.ORDER),
        ]

    @pytest.mark.asyncio
    async def test_v1_serializes_without_items(self, simple_order_listing_service):
        """Debe serializar V1 con member y delivery y sin orderItems."""
        entities = await simple_order_listing_service.list_order_entities()

        payload = SimpleOrderEntity.model_validate(entities[0]).model_dump(by_alias=True)

        assert payload["member"]["name"] == "userA"
        assert payload["delivery"]["address"]["city"] == "Seoul"
        assert "orderItems" not in payload

    @pytest.mark.asyncio
    async def test_v1_statement_count(self, session, simple_order_listing_service):
        """Debe emitir una consulta más una por member y delivery de cada orden."""
        with QueryCounter(session) as counter:
            orders = await simple_order_listing_service.list_order_entities()

        assert counter.count == 1 + 2 * len(orders)

    @pytest.mark.asyncio
    async def test_v3_and_v4_single_statement(self, session, simple_order_listing_service):
        """Debe resolver V3 y V4 en una consulta cada uno."""
        with QueryCounter(session) as counter:
            await simple_order_listing_service.list_orders_with_member_delivery()
        assert counter.count == 1

        with QueryCounter(session) as counter:
            await simple_order_listing_service.list_order_simple_query_dtos()
        assert counter.count == 1

    @pytest.mark.asyncio
    async def test_status_filter(self, simple_order_listing_service):
        """Debe devolver una lista vacía al filtrar por CANCEL en los datos de ejemplo."""
        orders = await simple_order_listing_service.list_orders(OrderSearch(order_status=OrderStatus.CANCEL))

        assert orders == []
