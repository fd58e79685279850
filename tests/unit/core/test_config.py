"""Tests de configuración, conexión y logging."""

import logging

import pytest
from pydantic import ValidationError

from order_catalog.core.config import Settings, get_environment_info
from order_catalog.core.logging_config import RequestContextFilter, request_id_var
from order_catalog.db.connection import ConnDB
from order_catalog.utils.error_handler import DatabaseConnectionException, ErrorCode


class TestSettings:
    """Tests para Settings."""

    def test_defaults(self):
        """Debe usar SQLite y los límites de consulta por defecto."""
        settings = Settings(_env_file=None)

        assert settings.is_sqlite
        assert settings.ORDER_ITEM_BATCH_SIZE == 100
        assert settings.DEFAULT_PAGE_LIMIT == 100

    @pytest.mark.parametrize("field", ["ORDER_ITEM_BATCH_SIZE", "ORDER_SEARCH_MAX_RESULTS", "DEFAULT_PAGE_LIMIT"])
    def test_query_limits_must_be_positive(self, field):
        """Debe rechazar límites menores a 1."""
        with pytest.raises(ValidationError):
            Settings(_env_file=None, **{field: 0})

    def test_log_level_is_normalized(self):
        """Debe normalizar el nivel de log a mayúsculas."""
        assert Settings(_env_file=None, LOG_LEVEL="debug").LOG_LEVEL == "DEBUG"

    def test_database_url_masked(self):
        """Debe ocultar la contraseña de la URL."""
        settings = Settings(_env_file=None, DATABASE_URL="mssql+aioodbc://sa:secret@db:1433/catalog")

        assert settings.database_url_masked == "mssql+aioodbc://sa:***@db:1433/catalog"
        assert not settings.is_sqlite

    def test_engine_options_by_driver(self):
        """Debe configurar pool solo para motores distintos de SQLite."""
        sqlite_options = Settings(_env_file=None).get_engine_options()
        server_options = Settings(_env_file=None, DATABASE_URL="mssql+aioodbc://sa:x@db/catalog").get_engine_options()

        assert "pool_size" not in sqlite_options
        assert sqlite_options["connect_args"] == {"check_same_thread": False}
        assert server_options["pool_size"] == 10
        assert server_options["pool_pre_ping"] is True

    def test_environment_info(self):
        """Debe resumir la configuración de consultas."""
        info = get_environment_info()

        assert set(info["query"]) == {"order_item_batch_size", "order_search_max_results", "default_page_limit"}


class TestConnDB:
    """Tests para ConnDB sin inicializar."""

    def test_get_session_requires_initialization(self):
        """Debe lanzar DatabaseConnectionException si no se inicializó el engine."""
        conn_db = ConnDB()
        if conn_db.is_initialized():
            pytest.skip("Conexión global ya inicializada")

        with pytest.raises(DatabaseConnectionException) as exc_info:
            conn_db.get_session()

        assert exc_info.value.status_code == 503
        assert exc_info.value.error_code == ErrorCode.DATABASE_CONNECTION_FAILED


class TestRequestContextFilter:
    """Tests para RequestContextFilter."""

    def test_sets_request_id(self):
        """Debe copiar el request id del contexto al registro."""
        record = logging.LogRecord("test", logging.INFO, __file__, 1, "msg", None, None)
        token = request_id_var.set("abc12345")
        try:
            assert RequestContextFilter().filter(record)
        finally:
            request_id_var.reset(token)

        assert record.request_id == "abc12345"

    def test_default_request_id(self):
        """Debe usar '-' fuera de una request."""
        record = logging.LogRecord("test", logging.INFO, __file__, 1, "msg", None, None)

        RequestContextFilter().filter(record)

        assert record.request_id == "-"
