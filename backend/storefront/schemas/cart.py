from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from storefront.schemas.items import ItemOut


class CartItemOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    quantity: int
    item: ItemOut | None = None


class CartOut(BaseModel):
    items: list[CartItemOut]
    count: int
    total: int
