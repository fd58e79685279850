"""
Base Repository for catalog read operations.

This module provides the base class shared by all repositories: it holds the
request-scoped session and wraps operations with logging. Repositories never
catch data store errors; they are logged and re-raised unchanged.
"""

import functools
import logging
import time
from abc import ABC
from typing import Callable, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from order_catalog.core.config import Settings, get_settings

logger = logging.getLogger(__name__)


def log_operation(operation_name: Optional[str] = None) -> Callable:
    """
    Decorator for logging database operations.

    Args:
        operation_name: Optional custom name for the operation

    Returns:
        Decorated function with logging
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        async def wrapper(self, *args, **kwargs):
            op_name = operation_name or f"{self.__class__.__name__}.{func.__name__}"
            logger.debug(f"Starting operation: {op_name}")
            start_time = time.perf_counter()

            try:
                result = await func(self, *args, **kwargs)
            except Exception as e:
                logger.error(f"Operation failed: {op_name} - {e}")
                raise

            elapsed_ms = (time.perf_counter() - start_time) * 1000
            size = f" ({len(result)} rows)" if isinstance(result, list) else ""
            logger.debug(f"Operation successful: {op_name}{size} in {elapsed_ms:.1f}ms")
            return result

        return wrapper

    return decorator


class BaseRepository(ABC):
    """
    Abstract base repository for catalog queries.

    A repository is bound to one session for the lifetime of a request, so
    entities it returns stay attached and can still resolve relations
    explicitly until the request ends.
    """

    def __init__(self, session: AsyncSession, settings: Optional[Settings] = None):
        """
        Initialize the base repository.

        Args:
            session: Request-scoped async session
            settings: Optional settings; the cached global settings by default
        """
        self.session = session
        self.settings = settings or get_settings()
        self._repository_name: str = self.__class__.__name__

    def __repr__(self) -> str:
        """String representation of the repository."""
        return f"<{self._repository_name}(session={id(self.session):#x})>"
