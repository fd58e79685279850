"""
Fixtures compartidas: base SQLite en memoria sembrada con los datos de ejemplo.

Cada test obtiene un engine propio. Los datos se insertan con una sesión
separada para que la sesión del test arranque con el identity map vacío.
"""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from order_catalog.api.dependencies import get_db_session
from order_catalog.core.config import get_settings
from order_catalog.db.repositories import OrderQueryRepository, OrderRepository, OrderSimpleQueryRepository
from order_catalog.db.seed import seed_sample_data
from order_catalog.domain.models import Base
from order_catalog.services import OrderListingService, SimpleOrderListingService


@pytest_asyncio.fixture
async def engine():
    """Engine en memoria compartido por todas las sesiones del test."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=False)


@pytest_asyncio.fixture
async def seeded(session_factory):
    """Inserta los datos de ejemplo (userA y userB, una orden cada uno)."""
    async with session_factory() as session:
        await seed_sample_data(session)
    return True


@pytest_asyncio.fixture
async def session(session_factory, seeded):
    """Sesión limpia sobre la base ya sembrada."""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def empty_session(session_factory):
    """Sesión sobre una base con el esquema creado pero sin datos."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def settings():
    return get_settings()


@pytest.fixture
def make_order_listing_service(settings):
    """Fábrica de OrderListingService sobre una sesión y un tamaño de lote dados."""

    def factory(session, batch_size=None) -> OrderListingService:
        return OrderListingService(
            order_repository=OrderRepository(session, settings),
            order_query_repository=OrderQueryRepository(session, settings),
            batch_size=batch_size or settings.ORDER_ITEM_BATCH_SIZE,
        )

    return factory


@pytest.fixture
def order_listing_service(session, make_order_listing_service):
    return make_order_listing_service(session)


@pytest.fixture
def simple_order_listing_service(session, settings):
    return SimpleOrderListingService(
        order_repository=OrderRepository(session, settings),
        order_simple_query_repository=OrderSimpleQueryRepository(session, settings),
    )


@pytest.fixture
def app(session_factory, seeded):
    """Aplicación con la sesión de request apuntando a la base del test."""
    from order_catalog.main import create_application

    application = create_application()

    async def override_get_db_session():
        async with session_factory() as session:
            yield session

    application.dependency_overrides[get_db_session] = override_get_db_session
    yield application
    application.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
