from __future__ import annotations

from typing import Any

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.models.item import Item

EDITABLE_FIELDS = ("title", "description", "price", "image", "large_image")


class ItemRepo:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, *, user_id: int, title: str, price: int, description: str = "", image: str | None = None, large_image: str | None = None) -> Item:
        item = Item(
            user_id=user_id,
            title=title,
            price=int(price),
            description=description or "",
            image=image,
            large_image=large_image,
        )
        self.session.add(item)
        await self.session.flush()
        return item

    async def get(self, item_id: int) -> Item | None:
        res = await self.session.execute(select(Item).where(Item.id == item_id))
        return res.scalar_one_or_none()

    async def list(self, *, limit: int = 50, offset: int = 0) -> list[Item]:
        q = select(Item).order_by(Item.created_at.desc(), Item.id.desc()).limit(limit).offset(offset)
        res = await self.session.execute(q)
        return list(res.scalars().all())

    async def count(self) -> int:
        res = await self.session.execute(select(func.count(Item.id)))
        return int(res.scalar_one() or 0)

    async def update(self, item: Item, changes: dict[str, Any]) -> Item:
        for key, value in changes.items():
            if key in EDITABLE_FIELDS:
                setattr(item, key, value)
        await self.session.flush()
        return item

    async def delete(self, item: Item) -> None:
        await self.session.delete(item)
        await self.session.flush()
