"""
Configuración centralizada de la aplicación.

Este módulo maneja todas las variables de entorno y configuraciones
de la aplicación usando Pydantic Settings para validación automática.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from order_catalog.version import VERSION


class Settings(BaseSettings):
    """
    Configuración de la aplicación usando Pydantic Settings.

    Todas las configuraciones se cargan desde variables de entorno
    con valores por defecto apropiados para desarrollo.
    """

    # === CONFIGURACIÓN BÁSICA DE LA APP ===
    APP_NAME: str = "Order Catalog API"
    APP_VERSION: str = VERSION
    ENVIRONMENT: str = Field(default="development")
    DEBUG: bool = Field(default=True)

    # === CONFIGURACIÓN DEL SERVIDOR ===
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=8080)
    WORKERS: int = Field(default=1)
    LOG_LEVEL: str = Field(default="INFO")

    # === CONFIGURACIÓN DE BASE DE DATOS ===
    DATABASE_URL: str = Field(default="sqlite+aiosqlite:///./order_catalog.db")
    DB_ECHO: bool = Field(default=False)
    DB_POOL_SIZE: int = Field(default=10)
    DB_MAX_OVERFLOW: int = Field(default=20)
    DB_POOL_RECYCLE: int = Field(default=3600)  # Reciclar conexiones cada hora
    DB_POOL_TIMEOUT: int = Field(default=30)
    DB_CREATE_SCHEMA: bool = Field(default=True)
    SEED_SAMPLE_DATA: bool = Field(default=True)

    # === CONFIGURACIÓN DE CONSULTAS ===
    # Tamaño de la lista IN al cargar order items por lotes (V3.1)
    ORDER_ITEM_BATCH_SIZE: int = Field(default=100)
    ORDER_SEARCH_MAX_RESULTS: int = Field(default=1000)
    DEFAULT_PAGE_LIMIT: int = Field(default=100)

    # === CONFIGURACIÓN DE LOGGING ===
    LOG_FILE_PATH: Optional[str] = Field(default="logs/app.log")
    LOG_MAX_SIZE_MB: int = Field(default=10)
    LOG_BACKUP_COUNT: int = Field(default=5)
    LOG_FORMAT: str = Field(default="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    # === CONFIGURACIÓN DE MONITOREO ===
    SLOW_REQUEST_THRESHOLD: float = Field(default=5.0)

    # === CONFIGURACIÓN DE DOCUMENTACIÓN ===
    ENABLE_DOCS: bool = Field(default=True)

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "extra": "allow",
    }

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v):
        """Valida que el nivel de log sea válido."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL debe ser uno de: {valid_levels}")
        return v.upper()

    @field_validator("ENVIRONMENT")
    @classmethod
    def validate_environment(cls, v):
        """Valida que el entorno sea válido."""
        valid_envs = ["development", "staging", "production", "testing"]
        if v.lower() not in valid_envs:
            raise ValueError(f"ENVIRONMENT debe ser uno de: {valid_envs}")
        return v.lower()

    @field_validator("PORT")
    @classmethod
    def validate_port(cls, v):
        """Valida que el puerto esté en rango válido."""
        if not 1 <= v <= 65535:
            raise ValueError("PORT debe estar entre 1 y 65535")
        return v

    @field_validator("ORDER_ITEM_BATCH_SIZE", "ORDER_SEARCH_MAX_RESULTS", "DEFAULT_PAGE_LIMIT")
    @classmethod
    def validate_positive(cls, v, info):
        """Valida que los límites de consulta sean positivos."""
        if v < 1:
            raise ValueError(f"{info.field_name} debe ser mayor o igual a 1")
        return v

    @property
    def is_production(self) -> bool:
        """Verifica si está en entorno de producción."""
        return self.ENVIRONMENT == "production"

    @property
    def is_sqlite(self) -> bool:
        """Verifica si la base de datos configurada es SQLite."""
        return self.DATABASE_URL.startswith("sqlite")

    @property
    def database_url_masked(self) -> str:
        """URL de base de datos sin la contraseña, apta para logs."""
        scheme, sep, rest = self.DATABASE_URL.partition("://")
        if "@" not in rest:
            return self.DATABASE_URL
        credentials, _, host_part = rest.rpartition("@")
        user = credentials.split(":", 1)[0]
        return f"{scheme}{sep}{user}:***@{host_part}"

    def get_engine_options(self) -> dict:
        """
        Obtiene las opciones de creación del engine.

        SQLite no usa pool de conexiones configurable, por lo que
        las opciones de pool solo se aplican a otros motores.

        Returns:
            dict: Argumentos para create_async_engine
        """
        options = {"echo": self.DB_ECHO, "future": True}
        if self.is_sqlite:
            options["connect_args"] = {"check_same_thread": False}
            return options

        options.update(
            {
                "pool_size": self.DB_POOL_SIZE,
                "max_overflow": self.DB_MAX_OVERFLOW,
                "pool_pre_ping": True,
                "pool_recycle": self.DB_POOL_RECYCLE,
                "pool_timeout": self.DB_POOL_TIMEOUT,
                "echo_pool": self.DB_ECHO,
            }
        )
        return options


@lru_cache()
def get_settings() -> Settings:
    """
    Obtiene instancia singleton de configuración.

    Usa LRU cache para evitar recrear la configuración
    múltiples veces durante la ejecución.

    Returns:
        Settings: Instancia de configuración
    """
    return Settings()


# Instancia global para uso directo
settings = get_settings()


def reload_settings() -> Settings:
    """
    Recarga la configuración (útil para testing).

    Returns:
        Settings: Nueva instancia de configuración
    """
    get_settings.cache_clear()
    return get_settings()


def get_environment_info() -> dict:
    """
    Obtiene información del entorno actual.

    Returns:
        dict: Información del entorno
    """
    settings = get_settings()

    return {
        "app_name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "debug": settings.DEBUG,
        "is_production": settings.is_production,
        "database": settings.database_url_masked,
        "log_level": settings.LOG_LEVEL,
        "query": {
            "order_item_batch_size": settings.ORDER_ITEM_BATCH_SIZE,
            "order_search_max_results": settings.ORDER_SEARCH_MAX_RESULTS,
            "default_page_limit": settings.DEFAULT_PAGE_LIMIT,
        },
    }
