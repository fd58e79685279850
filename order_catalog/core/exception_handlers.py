"""
Manejadores de excepciones centralizados para la aplicación FastAPI.

Los servicios y repositorios no capturan errores del data store; llegan
hasta aquí y se traducen a una respuesta JSON consistente.
"""

import logging
import traceback
from datetime import datetime, timezone

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from order_catalog.core.config import get_settings
from order_catalog.core.logging_config import request_id_var
from order_catalog.utils.error_handler import AppException, DatabaseConnectionException, ErrorCode, log_error

settings = get_settings()
logger = logging.getLogger(__name__)


def _error_body(request: Request, error_type: str, message: str, **extra) -> dict:
    return {
        "error": True,
        "error_type": error_type,
        "message": message,
        **extra,
        "path": str(request.url.path),
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "request_id": request_id_var.get(),
    }


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """
    Manejador para excepciones personalizadas de la aplicación.

    Args:
        request: Request de FastAPI
        exc: Excepción personalizada de la app

    Returns:
        JSONResponse: Respuesta JSON con error formateado
    """
    log_error(exc, context={"url": str(request.url)})

    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(
            request,
            "application_error",
            exc.message,
            error_code=exc.error_code.value,
            details=exc.details if settings.DEBUG else None,
        ),
    )


async def database_connection_exception_handler(request: Request, exc: DatabaseConnectionException) -> JSONResponse:
    """Manejador para fallas de conexión con la base de datos (503)."""
    logger.error(
        f"Database Connection Exception: {exc.message} - "
        f"Connection Type: {exc.connection_type} - "
        f"URL: {request.url}"
    )

    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(
            request,
            "database_connection_error",
            exc.message,
            error_code=exc.error_code.value,
            database=exc.database if settings.DEBUG else "hidden",
            connection_type=exc.connection_type,
        ),
    )


async def data_store_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """
    Manejador para errores de consulta del data store.

    La request falla completa: nunca se devuelve un listado parcial.

    Args:
        request: Request de FastAPI
        exc: Error de SQLAlchemy propagado desde un repositorio

    Returns:
        JSONResponse: 503 con un mensaje genérico
    """
    logger.error(f"Data store error: {type(exc).__name__}: {exc} - URL: {request.url}")

    message = "Data store unavailable"
    if settings.DEBUG:
        message = f"{type(exc).__name__}: {exc}"

    return JSONResponse(
        status_code=503,
        content=_error_body(
            request,
            "data_store_error",
            message,
            error_code=ErrorCode.DATABASE_QUERY_FAILED.value,
        ),
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """
    Manejador para HTTPException estándar de FastAPI.

    Args:
        request: Request de FastAPI
        exc: HTTPException

    Returns:
        JSONResponse: Respuesta JSON estandarizada
    """
    logger.warning(f"HTTP Exception: {exc.status_code} - {exc.detail} - URL: {request.url}")

    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(request, "http_error", exc.detail, status_code=exc.status_code),
    )


async def starlette_http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Manejador para HTTPException de Starlette (rutas inexistentes, métodos no permitidos)."""
    logger.warning(f"Starlette HTTP Exception: {exc.status_code} - {exc.detail} - URL: {request.url}")

    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(request, "http_error", exc.detail, status_code=exc.status_code),
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Manejador global para excepciones no capturadas.

    Args:
        request: Request de FastAPI
        exc: Excepción no manejada

    Returns:
        JSONResponse: Respuesta JSON de error interno
    """
    logger.error(
        f"Unhandled Exception: {str(exc)} - "
        f"Type: {type(exc).__name__} - "
        f"URL: {request.url} - "
        f"Traceback: {traceback.format_exc()}"
    )

    # Sin detalles internos fuera de DEBUG
    error_message = "Internal server error occurred"
    if settings.DEBUG:
        error_message = f"{type(exc).__name__}: {str(exc)}"

    return JSONResponse(
        status_code=500,
        content=_error_body(request, "internal_server_error", error_message),
    )


def configure_exception_handlers(app: FastAPI) -> None:
    """
    Configura todos los manejadores de excepciones de la aplicación.

    Args:
        app: Instancia de FastAPI
    """
    logger.info("🔧 Configurando manejadores de excepciones...")

    # Manejadores específicos (orden de especificidad)
    app.add_exception_handler(DatabaseConnectionException, database_connection_exception_handler)
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(SQLAlchemyError, data_store_exception_handler)

    # Manejadores HTTP estándar
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(StarletteHTTPException, starlette_http_exception_handler)

    # Manejador global (debe ser el último)
    app.add_exception_handler(Exception, global_exception_handler)

    logger.info("✅ Manejadores de excepciones configurados correctamente")
