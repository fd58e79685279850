"""
Configuración centralizada de routers para la aplicación FastAPI.

Registra los endpoints raíz y de health check y los routers de listado.
"""

import logging
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from order_catalog.api.endpoints.orders import router as orders_router
from order_catalog.api.endpoints.simple_orders import router as simple_orders_router
from order_catalog.core.config import get_environment_info, get_settings
from order_catalog.db.connection import get_db_connection
from order_catalog.version import version_info, version_string

settings = get_settings()
logger = logging.getLogger(__name__)


def create_root_endpoints(app: FastAPI) -> None:
    """
    Crea endpoints raíz de la aplicación.

    Args:
        app: Instancia de FastAPI
    """

    @app.get("/", tags=["Root"], summary="API Info")
    async def root():
        """
        Endpoint raíz que proporciona información básica de la API.

        Returns:
            Dict con información de la API
        """
        return {
            "message": settings.APP_NAME,
            "description": "Listados de órdenes de solo lectura con distintas estrategias de carga",
            "version": settings.APP_VERSION,
            "status": "running",
            "documentation": "/docs" if (settings.DEBUG or settings.ENABLE_DOCS) else "disabled",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "endpoints": {
                "health": "/health",
                "version": "/version",
                "orders": [f"/api/{version}/orders" for version in ("v1", "v2", "v3", "v3.1", "v4", "v5", "v6")],
                "simple_orders": [f"/api/{version}/simple-orders" for version in ("v1", "v2", "v3", "v4")],
            },
            "environment": get_environment_info() if settings.DEBUG else None,
        }

    @app.get("/version", tags=["Root"], summary="Version Info")
    async def version_details():
        """Versión del paquete y metadatos de build."""
        return {**version_info(), "version_string": version_string(), "environment": settings.ENVIRONMENT}


def create_health_endpoints(app: FastAPI) -> None:
    """
    Crea el endpoint de health check.

    Args:
        app: Instancia de FastAPI
    """

    @app.get("/health", tags=["Health"], summary="Health Check")
    async def health_check():
        """
        Verifica la conexión a la base de datos.

        Returns:
            JSONResponse: 200 si la base responde, 503 si no
        """
        database = await get_db_connection().health_check()
        healthy = database["test_passed"]

        return JSONResponse(
            status_code=200 if healthy else 503,
            content={
                "status": "healthy" if healthy else "unhealthy",
                "version": settings.APP_VERSION,
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "environment": settings.ENVIRONMENT,
                "services": {"database": database},
            },
        )


def configure_all_routers(app: FastAPI) -> None:
    """
    Configura todos los routers de la aplicación.

    Args:
        app: Instancia de FastAPI
    """
    logger.info("🔧 Configurando routers...")

    create_root_endpoints(app)
    create_health_endpoints(app)

    app.include_router(orders_router)
    app.include_router(simple_orders_router)

    logger.info("✅ Routers configurados correctamente")
