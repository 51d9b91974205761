from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ItemCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: str = Field(default="", max_length=10000)
    # cents
    price: int = Field(ge=0)
    image: str | None = Field(default=None, max_length=1024)
    large_image: str | None = Field(default=None, max_length=1024)


class ItemUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=10000)
    price: int | None = Field(default=None, ge=0)
    image: str | None = Field(default=None, max_length=1024)
    large_image: str | None = Field(default=None, max_length=1024)


class ItemOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    title: str
    description: str
    price: int
    image: str | None = None
    large_image: str | None = None
    created_at: datetime


class ItemsPage(BaseModel):
    total: int
    items: list[ItemOut]
