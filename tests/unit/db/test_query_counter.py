"""Tests del contador de sentencias por sesión."""

import pytest
from sqlalchemy import select

from order_catalog.db.query_counter import QueryCounter
from order_catalog.domain.models import Member, Order


class TestQueryCounter:
    """Tests para QueryCounter."""

    @pytest.mark.asyncio
    async def test_counts_statements_and_lazy_loads(self, session):
        """Debe contar consultas explícitas y cargas de relaciones."""
        with QueryCounter(session) as counter:
            order = await session.scalar(select(Order).order_by(Order.id).limit(1))
            await order.awaitable_attrs.member

        assert counter.count == 2
        assert counter.relationship_loads == 1

    @pytest.mark.asyncio
    async def test_identity_map_hits_are_not_counted(self, session):
        """Debe no contar relaciones ya presentes en el identity map."""
        members = (await session.scalars(select(Member))).all()
        order = await session.scalar(select(Order).order_by(Order.id).limit(1))

        with QueryCounter(session) as counter:
            member = await order.awaitable_attrs.member

        assert counter.count == 0
        assert member in members

    @pytest.mark.asyncio
    async def test_stop_detaches_listener(self, session):
        """Debe dejar de contar después de stop()."""
        counter = QueryCounter(session).start()
        await session.scalars(select(Member))
        counter.stop()
        await session.scalars(select(Member))

        assert counter.count == 1

    @pytest.mark.asyncio
    async def test_reset(self, session):
        """Debe vaciar las sentencias registradas."""
        with QueryCounter(session) as counter:
            await session.scalars(select(Member))
            counter.reset()

        assert counter.count == 0
