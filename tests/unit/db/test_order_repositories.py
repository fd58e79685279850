"""Tests de los repositorios de órdenes sobre SQLite en memoria."""

import pytest
from sqlalchemy import inspect, select

from order_catalog.db.query_counter import QueryCounter
from order_catalog.db.repositories import OrderQueryRepository, OrderRepository, OrderSearch
from order_catalog.db.seed import build_order, seed_sample_data
from order_catalog.domain.models import Book, Member, Order, OrderStatus
from order_catalog.domain.value_objects import Address


class TestOrderSearch:
    """Filtros opcionales de búsqueda."""

    def test_default_is_empty(self):
        """Debe considerarse vacío si no tiene criterios."""
        assert OrderSearch().is_empty
        assert not OrderSearch(order_status=OrderStatus.ORDER).is_empty

    def test_apply_adds_criteria(self):
        """Debe agregar un criterio WHERE por cada filtro presente."""
        statement = OrderSearch(member_name="user", order_status=OrderStatus.CANCEL).apply(
            select(Order).join(Order.member)
        )

        sql = str(statement)
        assert "orders.status" in sql
        assert "members.name LIKE" in sql

    def test_apply_without_criteria(self):
        """Debe devolver la sentencia sin WHERE si no hay filtros."""
        statement = OrderSearch().apply(select(Order).join(Order.member))

        assert "WHERE" not in str(statement)


class TestOrderRepository:
    """Consultas de entidades."""

    @pytest.mark.asyncio
    async def test_find_all_by_search_leaves_relations_lazy(self, session):
        """Debe devolver órdenes con member, delivery y order_items sin cargar."""
        orders = await OrderRepository(session).find_all_by_search()

        assert len(orders) == 2
        unloaded = inspect(orders[0]).unloaded
        assert {"member", "delivery", "order_items"} <= unloaded

    @pytest.mark.asyncio
    async def test_find_all_by_search_filters_status(self, session, session_factory):
        """Debe filtrar por estado exacto."""
        async with session_factory() as writer:
            member = await writer.scalar(select(Member).where(Member.name == "userA"))
            book = Book(name="CANCELED BOOK", price=5000, stock_quantity=10)
            writer.add(build_order(member, [(book, 1)], status=OrderStatus.CANCEL))
            await writer.commit()

        canceled = await OrderRepository(session).find_all_by_search(OrderSearch(order_status=OrderStatus.CANCEL))

        assert len(canceled) == 1
        assert canceled[0].status == OrderStatus.CANCEL

    @pytest.mark.asyncio
    async def test_find_all_with_item_collapses_rows(self, session):
        """Debe devolver una entidad por orden aunque el join traiga una fila por línea."""
        orders = await OrderRepository(session).find_all_with_item()

        assert [len(order.order_items) for order in orders] == [2, 2]
        assert orders[0].order_items[0].item.name == "JPA1 BOOK"

    @pytest.mark.asyncio
    async def test_item_loaded_through_base_mapper_has_subtype_columns(self, session):
        """Debe cargar las columnas del subtipo al resolver OrderItem.item desde Item."""
        orders = await OrderRepository(session).find_all_with_item()
        item = orders[0].order_items[0].item

        assert isinstance(item, Book)
        assert not {"author", "isbn"} & inspect(item).unloaded

    @pytest.mark.asyncio
    async def test_lazy_item_has_subtype_columns(self, session):
        """Debe traer author e isbn en la misma carga perezosa del item."""
        order = (await OrderRepository(session).find_all_by_search())[0]
        order_item = (await order.awaitable_attrs.order_items)[0]

        with QueryCounter(session) as counter:
            item = await order_item.awaitable_attrs.item
            unloaded = inspect(item).unloaded

        assert counter.count == 1
        assert not {"author", "isbn"} & unloaded

    @pytest.mark.asyncio
    async def test_find_all_with_member_delivery_pages_orders(self, session):
        """Debe aplicar offset y limit sobre órdenes con member y delivery cargados."""
        orders = await OrderRepository(session).find_all_with_member_delivery(offset=1, limit=1)

        assert len(orders) == 1
        state = inspect(orders[0])
        assert "member" not in state.unloaded
        assert "delivery" not in state.unloaded
        assert "order_items" in state.unloaded
        assert orders[0].member.name == "userB"

    @pytest.mark.asyncio
    async def test_find_order_items_by_empty_ids(self, session):
        """Debe devolver una lista vacía sin consultar si no hay ids."""
        with QueryCounter(session) as counter:
            assert await OrderRepository(session).find_order_items_by_order_ids([]) == []

        assert counter.count == 0

    @pytest.mark.asyncio
    async def test_load_order_items_in_batches(self, session):
        """Debe adjuntar las líneas sin marcar las órdenes como modificadas."""
        repository = OrderRepository(session)
        orders = await repository.find_all_with_member_delivery()

        with QueryCounter(session) as counter:
            await repository.load_order_items_in_batches(orders, batch_size=1)

        assert counter.count == len(orders)
        assert [[oi.item.name for oi in order.order_items] for order in orders] == [
            ["JPA1 BOOK", "JPA2 BOOK"],
            ["SPRING1 BOOK", "SPRING2 BOOK"],
        ]
        assert not session.dirty

    @pytest.mark.asyncio
    async def test_load_order_items_rejects_invalid_batch(self, session):
        """Debe rechazar un tamaño de lote menor a 1."""
        repository = OrderRepository(session)
        orders = await repository.find_all_with_member_delivery()

        with pytest.raises(ValueError):
            await repository.load_order_items_in_batches(orders, batch_size=0)


class TestOrderQueryRepository:
    """Proyecciones directas a DTO."""

    @pytest.mark.asyncio
    async def test_flat_rows_one_per_item(self, session):
        """Debe devolver una fila por línea con el encabezado repetido."""
        rows = await OrderQueryRepository(session).find_all_by_dto_flat()

        assert [(row.name, row.item_name) for row in rows] == [
            ("userA", "JPA1 BOOK"),
            ("userA", "JPA2 BOOK"),
            ("userB", "SPRING1 BOOK"),
            ("userB", "SPRING2 BOOK"),
        ]

    @pytest.mark.asyncio
    async def test_flat_rows_keep_order_without_items(self, session, session_factory):
        """Debe incluir con campos de item en None una orden sin líneas."""
        async with session_factory() as writer:
            member = Member(name="userC", address=Address(city="Incheon", street="3", zipcode="3333"))
            writer.add(build_order(member, []))
            await writer.commit()

        rows = await OrderQueryRepository(session).find_all_by_dto_flat()

        empty = [row for row in rows if row.name == "userC"]
        assert len(empty) == 1
        assert not empty[0].has_item

    @pytest.mark.asyncio
    async def test_optimized_projection_groups_items(self, session):
        """Debe agrupar las líneas de la consulta IN por orden."""
        orders = await OrderQueryRepository(session).find_all_by_dto_optimization()

        assert [[item.item_name for item in order.order_items] for order in orders] == [
            ["JPA1 BOOK", "JPA2 BOOK"],
            ["SPRING1 BOOK", "SPRING2 BOOK"],
        ]


class TestSeed:
    """Carga de datos de ejemplo."""

    @pytest.mark.asyncio
    async def test_seed_is_skipped_when_members_exist(self, session):
        """Debe no insertar nada si ya hay miembros."""
        assert await seed_sample_data(session) is False

    @pytest.mark.asyncio
    async def test_seed_decrements_stock(self, session):
        """Debe descontar del stock la cantidad ordenada."""
        book = await session.scalar(select(Book).where(Book.name == "SPRING2 BOOK"))

        assert book.stock_quantity == 300 - 4
