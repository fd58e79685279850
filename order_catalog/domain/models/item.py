"""
Item catalog with single-table inheritance.

Every item lives in the ``items`` table; ``dtype`` tells the subtype apart
and the subtype-specific columns are nullable. Subtypes load inline so a
load through the base mapper already carries every subtype column.
"""

from typing import Optional

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class Item(Base):
    """
    Sellable item.

    Attributes:
        id: Item ID
        dtype: Subtype discriminator (B, A, M)
        name: Display name
        price: Current list price
        stock_quantity: Units in stock
    """

    __tablename__ = "items"

    id: Mapped[int] = mapped_column("item_id", primary_key=True)
    dtype: Mapped[str] = mapped_column(String(1))
    name: Mapped[str] = mapped_column(String(200))
    price: Mapped[int]
    stock_quantity: Mapped[int] = mapped_column(default=0)

    __mapper_args__ = {
        "polymorphic_on": "dtype",
        "polymorphic_identity": "I",
    }

    def __repr__(self) -> str:
        return f"<{type(self).__name__}(id={self.id}, name={self.name!r})>"


class Book(Item):
    author: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    isbn: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)

    __mapper_args__ = {"polymorphic_identity": "B", "polymorphic_load": "inline"}


class Album(Item):
    artist: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    etc: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)

    __mapper_args__ = {"polymorphic_identity": "A", "polymorphic_load": "inline"}


class Movie(Item):
    director: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    actor: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    __mapper_args__ = {"polymorphic_identity": "M", "polymorphic_load": "inline"}
