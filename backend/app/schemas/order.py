from datetime import datetime
from typing import Annotated

from pydantic import Field

from app.models.enums import OrderStatus
from app.schemas.base import CamelModel
from app.schemas.product import ProductOut

PositiveInt = Annotated[int, Field(ge=1, strict=True)]


class OrderItemIn(CamelModel):
    product_id: PositiveInt
    quantity: PositiveInt


class OrderCreate(CamelModel):
    items: list[OrderItemIn] = Field(min_length=1)


class OrderStatusUpdate(CamelModel):
    status: OrderStatus


class OrderItemOut(CamelModel):
    id: int
    order_id: int
    product_id: int
    quantity: int
    price_at_purchase: int
    created_at: datetime | None = None


class OrderItemDetail(OrderItemOut):
    product: ProductOut | None = None


class OrderOut(CamelModel):
    id: int
    status: str
    total_price: int
    created_at: datetime | None = None
    items: list[OrderItemOut] = []


class OrderDetail(OrderOut):
    items: list[OrderItemDetail] = []


class OrderResult(CamelModel):
    message: str
    order: OrderOut
