from __future__ import annotations

import logging

from sqlalchemy import select, update, delete
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from storefront.models.cart_item import CartItem

log = logging.getLogger(__name__)

# Dialects with INSERT ... ON CONFLICT DO UPDATE.
_UPSERT_INSERTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


class CartRepo:
    def __init__(self, session: AsyncSession):
        self.session = session

    def _by_id(self, cart_item_id: int):
        return (
            select(CartItem)
            .where(CartItem.id == cart_item_id)
            .options(selectinload(CartItem.item))
            .execution_options(populate_existing=True)
        )

    async def get(self, cart_item_id: int) -> CartItem | None:
        res = await self.session.execute(self._by_id(cart_item_id))
        return res.scalar_one_or_none()

    async def list_for_user(self, user_id: int) -> list[CartItem]:
        res = await self.session.execute(
            select(CartItem)
            .where(CartItem.user_id == user_id)
            .options(selectinload(CartItem.item))
            .order_by(CartItem.id)
            .execution_options(populate_existing=True)
        )
        return list(res.scalars().all())

    async def add_or_increment(self, user_id: int, item_id: int) -> CartItem:
        """Create the (user, item) row with quantity 1, or add 1 to an existing one.

        Runs as a single conditional upsert where the dialect supports it, so
        concurrent adds of the same item cannot produce two rows.
        """
        dialect = self.session.get_bind().dialect.name
        insert_fn = _UPSERT_INSERTS.get(dialect)
        if insert_fn is not None:
            stmt = insert_fn(CartItem).values(user_id=user_id, item_id=item_id, quantity=1)
            stmt = stmt.on_conflict_do_update(
                index_elements=["user_id", "item_id"],
                set_={"quantity": CartItem.quantity + 1},
            ).returning(CartItem.id)
            res = await self.session.execute(stmt)
            cart_item_id = res.scalar_one()
        else:
            cart_item_id = await self._insert_or_increment(user_id, item_id)

        # The row was just written in this transaction.
        res = await self.session.execute(self._by_id(cart_item_id))
        return res.scalar_one()

    async def _insert_or_increment(self, user_id: int, item_id: int) -> int:
        try:
            async with self.session.begin_nested():
                row = CartItem(user_id=user_id, item_id=item_id, quantity=1)
                self.session.add(row)
                await self.session.flush()
            return row.id
        except IntegrityError:
            log.info("cart row exists for user=%s item=%s, incrementing", user_id, item_id)
            res = await self.session.execute(
                update(CartItem)
                .where(CartItem.user_id == user_id, CartItem.item_id == item_id)
                .values(quantity=CartItem.quantity + 1)
                .returning(CartItem.id)
            )
            return res.scalar_one()

    async def delete(self, cart_item: CartItem) -> None:
        await self.session.delete(cart_item)
        await self.session.flush()

    async def delete_ids(self, user_id: int, cart_item_ids: list[int]) -> int:
        """Delete exactly the listed rows of ``user_id``; returns how many went."""
        if not cart_item_ids:
            return 0
        res = await self.session.execute(
            delete(CartItem)
            .where(CartItem.user_id == user_id, CartItem.id.in_(cart_item_ids))
            .execution_options(synchronize_session=False)
        )
        return int(res.rowcount or 0)

    async def delete_for_item(self, item_id: int) -> int:
        res = await self.session.execute(
            delete(CartItem)
            .where(CartItem.item_id == item_id)
            .execution_options(synchronize_session=False)
        )
        return int(res.rowcount or 0)
