"""
Modelos Pydantic de respuesta para los listados de órdenes.

Todos los DTOs son inmutables (frozen) y se construyen una sola vez a partir
de una entidad ya cargada o de una fila de proyección. Ninguno guarda
referencia a la sesión ni a relaciones perezosas. En JSON se exponen con
nombres camelCase.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import AliasGenerator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from order_catalog.domain.models import Order, OrderItem, OrderStatus
from order_catalog.domain.value_objects import Address


class CatalogDto(BaseModel):
    """Configuración común: inmutable y serialización camelCase."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=AliasGenerator(serialization_alias=to_camel),
    )


# === DTOs construidos desde entidades (V2, V3, V3.1) ===


class OrderItemDto(CatalogDto):
    """Línea de una orden: nombre del item, precio y cantidad."""

    item_name: str = Field(..., description="Nombre del item")
    order_price: int = Field(..., description="Precio unitario al momento de la orden")
    count: int = Field(..., description="Cantidad ordenada")

    @classmethod
    def from_entity(cls, order_item: OrderItem) -> "OrderItemDto":
        return cls(
            item_name=order_item.item.name,
            order_price=order_item.order_price,
            count=order_item.count,
        )


class OrderDto(CatalogDto):
    """Orden completa con comprador, dirección de entrega y líneas."""

    order_id: int
    name: str = Field(..., description="Nombre del comprador")
    order_date: datetime
    order_status: OrderStatus
    address: Address
    order_items: list[OrderItemDto]

    @classmethod
    def from_entity(cls, order: Order) -> "OrderDto":
        """
        Copia el estado de una orden con member, delivery e items cargados.

        Args:
            order: Entidad con sus relaciones ya resueltas

        Returns:
            OrderDto: Snapshot de la orden
        """
        return cls(
            order_id=order.id,
            name=order.member.name,
            order_date=order.order_date,
            order_status=order.status,
            address=order.delivery.address,
            order_items=[OrderItemDto.from_entity(order_item) for order_item in order.order_items],
        )


class SimpleOrderDto(CatalogDto):
    """Encabezado de orden sin líneas."""

    order_id: int
    name: str
    order_date: datetime
    status: OrderStatus
    address: Address

    @classmethod
    def from_entity(cls, order: Order) -> "SimpleOrderDto":
        return cls(
            order_id=order.id,
            name=order.member.name,
            order_date=order.order_date,
            status=order.status,
            address=order.delivery.address,
        )


# === DTOs de proyección (V4, V5, V6 y simple V4) ===


class OrderItemQueryDto(CatalogDto):
    """Línea proyectada; order_id solo sirve para agrupar y no se serializa."""

    order_id: int = Field(..., exclude=True)
    item_name: str
    order_price: int
    count: int


class OrderQueryDto(CatalogDto):
    """Orden proyectada con el mismo formato de salida que OrderDto."""

    order_id: int
    name: str
    order_date: datetime
    order_status: OrderStatus
    address: Address
    order_items: list[OrderItemQueryDto] = Field(default_factory=list)

    def with_items(self, order_items: list[OrderItemQueryDto]) -> "OrderQueryDto":
        """Retorna una copia con las líneas indicadas; el original no cambia."""
        return self.model_copy(update={"order_items": list(order_items)})


class OrderFlatDto(CatalogDto):
    """
    Fila desnormalizada (orden × línea) del join plano.

    Los campos del item son None para una orden sin líneas.
    """

    order_id: int
    name: str
    order_date: datetime
    order_status: OrderStatus
    address: Address
    item_name: Optional[str] = None
    order_price: Optional[int] = None
    count: Optional[int] = None

    @property
    def order_key(self) -> tuple:
        """Clave compuesta de agrupación: todos los campos del encabezado."""
        return (self.order_id, self.name, self.order_date, self.order_status, self.address)

    @property
    def has_item(self) -> bool:
        return self.item_name is not None


class OrderSimpleQueryDto(CatalogDto):
    """Proyección angosta del encabezado de orden."""

    order_id: int
    name: str
    order_date: datetime
    status: OrderStatus
    address: Address
