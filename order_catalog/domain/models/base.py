"""
Declarative base shared by all mapped entities.
"""

from sqlalchemy.ext.asyncio import AsyncAttrs
from sqlalchemy.orm import DeclarativeBase


class Base(AsyncAttrs, DeclarativeBase):
    """
    Base class for mapped entities.

    ``AsyncAttrs`` exposes ``awaitable_attrs`` so an unloaded relation can be
    resolved explicitly with ``await entity.awaitable_attrs.<name>``. Plain
    attribute access on an unloaded relation raises instead of querying.
    """
