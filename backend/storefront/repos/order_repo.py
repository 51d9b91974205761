from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from storefront.models.order import Order, OrderItem


class OrderRepo:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, *, user_id: int, total: int, currency: str, charge: str, items: list[dict]) -> Order:
        order = Order(
            user_id=int(user_id),
            total=int(total),
            currency=currency[:3],
            charge=charge,
            items=[OrderItem(user_id=int(user_id), **it) for it in items],
        )
        self.db.add(order)
        await self.db.flush()
        return order

    async def get(self, order_id: int) -> Order | None:
        res = await self.db.execute(
            select(Order).where(Order.id == order_id).options(selectinload(Order.items))
        )
        return res.scalar_one_or_none()

    async def list_for_user(self, user_id: int, *, limit: int = 100, offset: int = 0) -> list[Order]:
        q = (
            select(Order)
            .where(Order.user_id == int(user_id))
            .options(selectinload(Order.items))
            .order_by(Order.created_at.desc(), Order.id.desc())
            .limit(limit)
            .offset(offset)
        )
        res = await self.db.execute(q)
        return list(res.scalars().all())
