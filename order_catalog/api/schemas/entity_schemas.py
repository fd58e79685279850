"""
Modelos Pydantic que reflejan las entidades tal cual (V1).

Exponen la forma interna de las entidades (ids internos, stock, campos de
cada subtipo de item, totales calculados) a excepción de las referencias
inversas (Member.orders, Delivery.order, OrderItem.order), que nunca se
serializan. Se validan con from_attributes a partir de entidades cuyas
relaciones ya fueron resueltas; una relación sin cargar hace fallar la
validación en lugar de disparar una consulta.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import AliasGenerator, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from order_catalog.domain.models import DeliveryStatus, OrderStatus
from order_catalog.domain.value_objects import Address


class EntitySchema(BaseModel):
    model_config = ConfigDict(
        from_attributes=True,
        frozen=True,
        alias_generator=AliasGenerator(serialization_alias=to_camel),
    )


class MemberEntity(EntitySchema):
    id: int
    name: str
    address: Address


class DeliveryEntity(EntitySchema):
    id: int
    address: Address
    status: DeliveryStatus


class ItemEntity(EntitySchema):
    """Item de cualquier subtipo; los campos que no aplican quedan en None."""

    id: int
    dtype: str
    name: str
    price: int
    stock_quantity: int
    author: Optional[str] = None
    isbn: Optional[str] = None
    artist: Optional[str] = None
    etc: Optional[str] = None
    director: Optional[str] = None
    actor: Optional[str] = None


class OrderItemEntity(EntitySchema):
    id: int
    item: ItemEntity
    order_price: int
    count: int
    total_price: int


class OrderEntity(EntitySchema):
    id: int
    member: MemberEntity
    order_items: list[OrderItemEntity]
    delivery: DeliveryEntity
    order_date: datetime
    status: OrderStatus
    total_price: int


class SimpleOrderEntity(EntitySchema):
    """Orden sin líneas: solo se resuelven member y delivery."""

    id: int
    member: MemberEntity
    delivery: DeliveryEntity
    order_date: datetime
    status: OrderStatus
