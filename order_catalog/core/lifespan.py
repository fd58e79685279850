"""
Gestión del ciclo de vida de la aplicación FastAPI.

Startup: logging, conexión a la base de datos, esquema y datos de ejemplo.
Shutdown: cierre del engine.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from order_catalog.core.config import get_settings
from order_catalog.core.logging_config import setup_logging
from order_catalog.db.connection import close_database, get_db_connection, initialize_database
from order_catalog.db.seed import seed_sample_data

settings = get_settings()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Gestión del ciclo de vida de la aplicación.

    Args:
        app: Instancia de FastAPI
    """
    # === STARTUP ===
    logger.info(f"🚀 Iniciando {settings.APP_NAME}...")

    try:
        # 1. Configurar logging
        await startup_configure_logging()

        # 2. Conectar a la base de datos
        await startup_initialize_database()

        # 3. Esquema y datos de ejemplo
        await startup_prepare_data()

        # 4. Resumen de configuración
        await startup_final_checks()

        logger.info("🎉 Aplicación iniciada correctamente")

    except Exception as e:
        logger.error(f"❌ Error durante el startup: {e}")
        await shutdown_close_connections()
        raise

    # === YIELD (aplicación corriendo) ===
    yield

    # === SHUTDOWN ===
    logger.info(f"🛑 Cerrando {settings.APP_NAME}...")

    await shutdown_close_connections()

    logger.info("👋 Aplicación cerrada correctamente")


# === FUNCIONES DE STARTUP ===


async def startup_configure_logging():
    """Configura el sistema de logging."""
    setup_logging()
    logger.info("✅ Sistema de logging configurado")


async def startup_initialize_database():
    """Inicializa el engine y verifica la conexión."""
    if not get_db_connection().is_initialized():
        logger.info(f"Inicializando conexión a {settings.database_url_masked}...")
        await initialize_database()

    logger.info("✅ Conexión a base de datos establecida")


async def startup_prepare_data():
    """Crea el esquema y carga los datos de ejemplo según la configuración."""
    conn_db = get_db_connection()

    if settings.DB_CREATE_SCHEMA:
        await conn_db.create_schema()
        logger.info("✅ Esquema verificado")

    if settings.SEED_SAMPLE_DATA:
        async with conn_db.get_session() as session:
            inserted = await seed_sample_data(session)
        logger.info(f"✅ Datos de ejemplo {'cargados' if inserted else 'ya presentes'}")


async def startup_final_checks():
    """Loggea la configuración activa."""
    logger.info("🔧 Configuración activa:")
    logger.info(f"   - Entorno: {settings.ENVIRONMENT}")
    logger.info(f"   - Debug: {settings.DEBUG}")
    logger.info(f"   - Base de datos: {settings.database_url_masked}")
    logger.info(f"   - Lote de items por consulta: {settings.ORDER_ITEM_BATCH_SIZE}")
    logger.info(f"   - Límite de página por defecto: {settings.DEFAULT_PAGE_LIMIT}")


# === FUNCIONES DE SHUTDOWN ===


async def shutdown_close_connections():
    """Cierra conexiones de manera limpia."""
    try:
        await close_database()
        logger.info("✅ Conexión a base de datos cerrada")
    except Exception as e:
        logger.error(f"Error cerrando conexión a base de datos: {e}")
