from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CheckoutIn(BaseModel):
    # Single-use card token from the payment widget.
    token: str = Field(min_length=1, max_length=255)


class OrderItemOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    price: int
    image: str | None = None
    large_image: str | None = None
    quantity: int


class OrderOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    total: int
    currency: str
    charge: str
    created_at: datetime
    items: list[OrderItemOut]
