# order_catalog/db/connection.py
"""
Clase ConnDB para gestión exclusiva de conexiones a base de datos.

Esta clase maneja únicamente la conexión, configuración del pool,
y ciclo de vida de las conexiones a la base de datos del catálogo.
"""

import logging
import time
from typing import Optional

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from order_catalog.core.config import get_settings
from order_catalog.domain.models import Base
from order_catalog.utils.error_handler import DatabaseConnectionException

settings = get_settings()
logger = logging.getLogger(__name__)


class ConnDB:
    """
    Clase para gestión exclusiva de conexiones a la base de datos.

    Esta clase implementa el patrón Singleton para garantizar una única
    instancia de conexión y maneja todo el ciclo de vida de las conexiones.
    """

    _instance = None
    _initialized = False

    def __new__(cls):
        """Implementa patrón Singleton."""
        if cls._instance is None:
            cls._instance = super(ConnDB, cls).__new__(cls)
        return cls._instance

    def __init__(self):
        """Inicializa la clase ConnDB."""
        if not self._initialized:
            self.engine: Optional[AsyncEngine] = None
            self.session_factory: Optional[async_sessionmaker[AsyncSession]] = None
            self.database_url = settings.DATABASE_URL
            self._connection_tested = False
            ConnDB._initialized = True
            logger.info("ConnDB instance created")

    async def initialize(self):
        """
        Inicializa el engine de base de datos y el pool de conexiones.

        Raises:
            DatabaseConnectionException: Si falla la inicialización
        """
        try:
            if self.engine is not None:
                logger.info("Database connection already initialized")
                return

            logger.info(f"Initializing database connection to {settings.database_url_masked}...")

            self.engine = create_async_engine(self.database_url, **settings.get_engine_options())

            # Sesiones de solo lectura por request: sin autoflush ni expiración al cerrar
            self.session_factory = async_sessionmaker(self.engine, expire_on_commit=False, autoflush=False)

            await self._test_connection()

            logger.info("Database connection initialized successfully")

        except Exception as e:
            logger.error(f"Failed to initialize database connection: {e}")
            await self._cleanup_failed_initialization()
            raise DatabaseConnectionException(
                message=f"Failed to initialize database connection: {str(e)}",
                database=settings.database_url_masked,
                connection_type="initialization",
            ) from e

    async def _test_connection(self):
        """
        Prueba la conexión a la base de datos.

        Raises:
            DatabaseConnectionException: Si la prueba de conexión falla
        """
        logger.info("Testing database connection...")

        async with self.engine.connect() as connection:
            result = await connection.execute(text("SELECT 1"))
            if result.scalar() != 1:
                raise DatabaseConnectionException(
                    message="Connection test returned unexpected value",
                    database=settings.database_url_masked,
                    connection_type="test",
                )

        self._connection_tested = True
        logger.info("Connection test successful")

    async def _cleanup_failed_initialization(self):
        """Limpia recursos en caso de fallo de inicialización."""
        if self.engine:
            await self.engine.dispose()
        self.engine = None
        self.session_factory = None
        self._connection_tested = False

    async def create_schema(self):
        """
        Crea las tablas del catálogo si no existen.

        No es una migración: tablas existentes no se modifican.
        """
        if not self.is_initialized():
            raise DatabaseConnectionException(
                message="Database connection not initialized. Call initialize() first.",
                database=settings.database_url_masked,
                connection_type="schema_creation",
            )

        async with self.engine.begin() as connection:
            await connection.run_sync(Base.metadata.create_all)
        logger.info("Database schema ready")

    def get_session(self) -> AsyncSession:
        """
        Obtiene una nueva sesión de base de datos.

        Returns:
            AsyncSession: Sesión asíncrona de SQLAlchemy

        Raises:
            DatabaseConnectionException: Si no hay conexión inicializada
        """
        if not self.is_initialized():
            raise DatabaseConnectionException(
                message="Database connection not initialized. Call initialize() first.",
                database=settings.database_url_masked,
                connection_type="session_creation",
            )

        return self.session_factory()

    def is_initialized(self) -> bool:
        """
        Verifica si la conexión está inicializada.

        Returns:
            bool: True si está inicializada y probada
        """
        return self.engine is not None and self.session_factory is not None and self._connection_tested

    async def test_connection(self) -> bool:
        """
        Prueba la conexión a la base de datos de forma no destructiva.

        Returns:
            bool: True si la conexión funciona correctamente
        """
        if not self.is_initialized():
            return False

        try:
            async with self.engine.connect() as connection:
                result = await connection.execute(text("SELECT 1"))
                return result.scalar() == 1
        except Exception as e:
            logger.error(f"Connection test failed: {e}")
            return False

    async def close(self):
        """
        Cierra la conexión y limpia todos los recursos.
        """
        try:
            logger.info("Closing database connection...")

            if self.engine:
                await self.engine.dispose()
                logger.info("Database engine disposed")

            self.engine = None
            self.session_factory = None
            self._connection_tested = False

            logger.info("Database connection closed successfully")

        except Exception as e:
            logger.error(f"Error closing database connection: {e}")
            raise DatabaseConnectionException(
                message=f"Error closing database connection: {str(e)}",
                database=settings.database_url_masked,
                connection_type="close",
            ) from e

    def get_engine_info(self) -> dict:
        """
        Obtiene información sobre el engine de base de datos.

        Returns:
            dict: Información del engine y pool de conexiones
        """
        if not self.engine:
            return {"status": "not_initialized"}

        pool = self.engine.pool

        return {
            "status": "initialized",
            "database": settings.database_url_masked,
            "pool_class": type(pool).__name__,
            "checked_out": getattr(pool, "checkedout", lambda: 0)(),
            "is_tested": self._connection_tested,
        }

    async def health_check(self) -> dict:
        """
        Realiza un health check completo de la conexión.

        Returns:
            dict: Estado de salud de la conexión
        """
        start_time = time.time()
        test_passed = await self.test_connection()

        return {
            "connection_initialized": self.is_initialized(),
            "engine_info": self.get_engine_info(),
            "test_passed": test_passed,
            "response_time_ms": round((time.time() - start_time) * 1000, 2),
        }

    def __repr__(self) -> str:
        """Representación detallada de la conexión."""
        return (
            f"ConnDB(initialized={self.is_initialized()}, "
            f"engine={self.engine is not None}, "
            f"session_factory={self.session_factory is not None})"
        )


# Instancia global singleton
_conn_db_instance = None


def get_db_connection() -> ConnDB:
    """
    Obtiene la instancia singleton de ConnDB.

    Returns:
        ConnDB: Instancia de conexión a base de datos
    """
    global _conn_db_instance

    if _conn_db_instance is None:
        _conn_db_instance = ConnDB()

    return _conn_db_instance


async def initialize_database():
    """
    Función de conveniencia para inicializar la base de datos.
    """
    conn_db = get_db_connection()
    await conn_db.initialize()


async def close_database():
    """
    Función de conveniencia para cerrar la base de datos.
    """
    conn_db = get_db_connection()
    await conn_db.close()
