# orderflow/domain/schemas.py
from enum import Enum
from pydantic import BaseModel, Field, ConfigDict
from typing import List
from decimal import Decimal
from datetime import datetime

from orderflow.domain.errors import CheckoutErrorKind


class OrderStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


# only used when ENFORCE_STATUS_TRANSITIONS is on
ALLOWED_TRANSITIONS = {
    OrderStatus.PENDING.value: {
        OrderStatus.PROCESSING.value,
        OrderStatus.COMPLETED.value,
        OrderStatus.CANCELLED.value,
    },
    OrderStatus.PROCESSING.value: {
        OrderStatus.COMPLETED.value,
        OrderStatus.CANCELLED.value,
    },
    OrderStatus.COMPLETED.value: set(),
    OrderStatus.CANCELLED.value: set(),
}


class CheckoutResult(BaseModel):
    """Outcome of a checkout: either an order id or an error kind, never both."""

    order_id: str | None = None
    error: CheckoutErrorKind | None = None
    product_id: str | None = None
    message: str | None = None

    @property
    def ok(self) -> bool:
        return self.order_id is not None

    @classmethod
    def success(cls, order_id: str) -> "CheckoutResult":
        return cls(order_id=order_id)

    @classmethod
    def failure(cls, error: CheckoutErrorKind, message: str, product_id: str | None = None) -> "CheckoutResult":
        return cls(error=error, message=message, product_id=product_id)


class OrderCreate(BaseModel):
    """Checkout request."""

    user_id: str = Field(..., min_length=1, max_length=64, description="Owner of the cart")
    address: str = Field(..., min_length=1, description="Shipping address, free text")


class OrderCreated(BaseModel):
    id: str
    status: str


class StatusUpdate(BaseModel):
    status: str = Field(..., min_length=1, max_length=32)


class OrderOut(BaseModel):
    """Order header."""

    id: str
    user_id: str
    status: str
    total: Decimal
    customer_address: str
    created_at: datetime
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class OrderItemOut(BaseModel):
    id: str
    product_id: str
    name: str | None = None
    quantity: int
    price: Decimal


class OrderHistoryOut(BaseModel):
    id: str
    total: Decimal
    status: str
    customer_address: str
    created_at: datetime
    items: List[OrderItemOut]
    item_count: int


class MonthlySalesOut(BaseModel):
    month: int
    total: int


class TotalOrdersOut(BaseModel):
    total: int


class RevenueOut(BaseModel):
    revenue: Decimal
